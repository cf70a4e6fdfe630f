"""Runtime dependency whitelist evaluation."""

from __future__ import annotations

from cratepure.fetcher import DependencyTreeFetcher
from cratepure.types import CheckResult, DependencyKind, FailureReason

CHECK_ID = "runtime_dependencies"


def compute_violations(dependencies: tuple[str, ...], whitelist: tuple[str, ...]) -> tuple[str, ...]:
    """Return dependencies missing from whitelist, deduplicated, in first-seen order."""
    allowed = set(whitelist)
    violations: dict[str, None] = {}
    for name in dependencies:
        if name not in allowed:
            violations.setdefault(name, None)
    return tuple(violations)


def classify(package: str, dependencies: tuple[str, ...], whitelist: tuple[str, ...]) -> CheckResult:
    """Classify a fetched runtime dependency list against a whitelist."""
    if not dependencies:
        return CheckResult.ok(CHECK_ID, package, f"{package} has no normal dependencies.")

    if not whitelist:
        return CheckResult.fail(
            CHECK_ID,
            package,
            FailureReason.NO_DEPENDENCIES_EXPECTED_BUT_FOUND,
            f"{package} has normal dependencies (expected 0).",
            detail=dependencies,
        )

    violations = compute_violations(dependencies, whitelist)
    if violations:
        return CheckResult.fail(
            CHECK_ID,
            package,
            FailureReason.WHITELIST_VIOLATION,
            f"{package} has normal dependencies outside its whitelist.",
            detail=violations,
            allowed=whitelist,
        )

    used = tuple(dict.fromkeys(dependencies))
    return CheckResult.ok(
        CHECK_ID,
        package,
        f"{package} normal dependencies are all whitelisted: {', '.join(used)}.",
        detail=used,
        allowed=whitelist,
    )


class PolicyEvaluator:
    """Check a package's direct runtime dependencies against its whitelist."""

    def __init__(self, fetcher: DependencyTreeFetcher):
        self.fetcher = fetcher

    def evaluate(self, package: str, whitelist: tuple[str, ...]) -> CheckResult:
        dependencies = self.fetcher.fetch(package, DependencyKind.RUNTIME)
        return classify(package, dependencies, whitelist)
