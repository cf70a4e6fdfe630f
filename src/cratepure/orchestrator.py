"""Run the purity checks for one package, stopping at the first failure."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from cratepure.config import PolicyConfig
from cratepure.fetcher import DependencyTreeFetcher
from cratepure.guards import DevDependencyGuard
from cratepure.lint import LintGate
from cratepure.policy import PolicyEvaluator
from cratepure.report import render_progress, render_result
from cratepure.types import CheckResult, OverallResult

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


def _silent(_line: str) -> None:
    return None


class CheckOrchestrator:
    """Compose whitelist, dev-dependency and lint checks for a package.

    Checks run in order: runtime whitelist, dev-dependencies, clippy. The
    first failing check ends the run and becomes the overall result.
    ToolInvocationError from any step propagates unchanged.
    """

    def __init__(
        self,
        policy: PolicyConfig,
        *,
        evaluator: PolicyEvaluator,
        dev_guard: DevDependencyGuard,
        lint_gate: LintGate | None,
    ):
        self.policy = policy
        self.evaluator = evaluator
        self.dev_guard = dev_guard
        self.lint_gate = lint_gate

    @classmethod
    def for_cargo(
        cls,
        policy: PolicyConfig,
        *,
        cargo: str = "cargo",
        manifest_path: Path | None = None,
        cwd: Path | None = None,
        run_lint: bool = True,
    ) -> CheckOrchestrator:
        """Wire the default cargo-backed collaborators."""
        fetcher = DependencyTreeFetcher(cargo=cargo, manifest_path=manifest_path, cwd=cwd)
        lint_gate = LintGate(cargo=cargo, manifest_path=manifest_path, cwd=cwd) if run_lint else None
        return cls(
            policy,
            evaluator=PolicyEvaluator(fetcher),
            dev_guard=DevDependencyGuard(fetcher),
            lint_gate=lint_gate,
        )

    def run(self, package: str, echo: Echo | None = None) -> OverallResult:
        """Run all checks for package, emitting rendered lines through echo."""
        emit = echo or _silent
        overall = OverallResult(package=package)
        whitelist = self.policy.whitelist_for(package)
        logger.debug("whitelist for %s (%s): %s", package, self.policy.source, list(whitelist))

        steps: list[tuple[str | None, Callable[[], CheckResult]]] = [
            (None, lambda: self.evaluator.evaluate(package, whitelist)),
            (None, lambda: self.dev_guard.check(package)),
        ]
        if self.lint_gate is not None:
            lint_gate = self.lint_gate
            steps.append((f"Running clippy for {package}…", lambda: lint_gate.check(package)))

        for progress, step in steps:
            if progress:
                emit(render_progress(progress))
            result = step()
            overall.results.append(result)
            for line in render_result(result):
                emit(line)
            if not result.passed:
                logger.debug("%s failed at %s", package, result.check)
                break

        return overall
