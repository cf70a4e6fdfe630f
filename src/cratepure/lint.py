"""Strict clippy gate scoped to a single package."""

from __future__ import annotations

from pathlib import Path

from cratepure.exec import run_command
from cratepure.types import CheckResult, FailureReason

CHECK_ID = "lint"


def build_clippy_argv(
    package: str,
    *,
    cargo: str = "cargo",
    manifest_path: Path | None = None,
) -> list[str]:
    """Build clippy command: own sources only, warnings as errors."""
    argv = [cargo, "clippy", "-p", package, "--no-deps"]
    if manifest_path is not None:
        argv.extend(["--manifest-path", str(manifest_path)])
    argv.extend(["--", "-D", "warnings"])
    return argv


class LintGate:
    """Run clippy with ``-D warnings`` and report its verdict."""

    def __init__(
        self,
        *,
        cargo: str = "cargo",
        manifest_path: Path | None = None,
        cwd: Path | None = None,
    ):
        self.cargo = cargo
        self.manifest_path = manifest_path
        self.cwd = cwd

    def check(self, package: str) -> CheckResult:
        argv = build_clippy_argv(package, cargo=self.cargo, manifest_path=self.manifest_path)
        result = run_command(argv, cwd=self.cwd)
        if result.returncode == 0:
            return CheckResult.ok(CHECK_ID, package, f"Clippy clean for {package}.")

        output = result.output or "(no output)"
        return CheckResult.fail(
            CHECK_ID,
            package,
            FailureReason.LINT_FAILURE,
            f"Clippy reported problems for {package} (exit {result.returncode}).",
            detail=tuple(output.splitlines()),
        )
