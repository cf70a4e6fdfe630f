"""Types for cratepure dependency-purity checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

EXIT_PASSED = 0
EXIT_USAGE = 1
EXIT_POLICY_FAILED = 2
EXIT_TOOL_ERROR = 3


class DependencyKind(str, Enum):
    """Dependency edge kind, valued by its cargo tree ``-e`` name."""

    RUNTIME = "normal"
    DEVELOPMENT = "dev"


class FailureReason(str, Enum):
    """Why a check failed."""

    NO_DEPENDENCIES_EXPECTED_BUT_FOUND = "no_dependencies_expected_but_found"
    WHITELIST_VIOLATION = "whitelist_violation"
    UNEXPECTED_DEV_DEPENDENCIES = "unexpected_dev_dependencies"
    LINT_FAILURE = "lint_failure"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single verification step."""

    check: str
    package: str
    status: Literal["pass", "fail"]
    message: str
    reason: FailureReason | None = None
    detail: tuple[str, ...] = ()
    allowed: tuple[str, ...] = ()

    @property
    def passed(self) -> bool:
        return self.status == "pass"

    @classmethod
    def ok(cls, check: str, package: str, message: str, **kwargs) -> CheckResult:
        return cls(check=check, package=package, status="pass", message=message, **kwargs)

    @classmethod
    def fail(
        cls,
        check: str,
        package: str,
        reason: FailureReason,
        message: str,
        detail: tuple[str, ...] = (),
        allowed: tuple[str, ...] = (),
    ) -> CheckResult:
        return cls(
            check=check,
            package=package,
            status="fail",
            message=message,
            reason=reason,
            detail=detail,
            allowed=allowed,
        )


@dataclass
class OverallResult:
    """Aggregated verdict for one package run."""

    package: str
    results: list[CheckResult] = field(default_factory=list)
    error: str | None = None

    @property
    def failure(self) -> CheckResult | None:
        for result in self.results:
            if not result.passed:
                return result
        return None

    @property
    def status(self) -> Literal["passed", "failed"]:
        return "failed" if self.failure or self.error else "passed"

    @property
    def exit_code(self) -> int:
        if self.error:
            return EXIT_TOOL_ERROR
        return EXIT_POLICY_FAILED if self.failure else EXIT_PASSED
