"""Fail-closed guard against development-only dependencies."""

from __future__ import annotations

from cratepure.fetcher import DependencyTreeFetcher
from cratepure.types import CheckResult, DependencyKind, FailureReason

CHECK_ID = "dev_dependencies"


class DevDependencyGuard:
    """Require a package to declare no dev-dependencies.

    Test code for such packages belongs in a separate integration package.
    """

    def __init__(self, fetcher: DependencyTreeFetcher):
        self.fetcher = fetcher

    def check(self, package: str) -> CheckResult:
        dependencies = self.fetcher.fetch(package, DependencyKind.DEVELOPMENT)
        if not dependencies:
            return CheckResult.ok(CHECK_ID, package, f"{package} has no dev-dependencies.")

        return CheckResult.fail(
            CHECK_ID,
            package,
            FailureReason.UNEXPECTED_DEV_DEPENDENCIES,
            f"{package} has dev-dependencies. Consider moving its tests to the integration package.",
            detail=dependencies,
        )
