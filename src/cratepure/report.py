"""Human-readable rendering and report files for purity checks."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import TextIO

from cratepure.types import CheckResult, FailureReason, OverallResult

PASS_MARK = "✅"
FAIL_MARK = "❌"
PROGRESS_MARK = "🔎"

REPORT_JSON = "PURITY_REPORT.json"
REPORT_MD = "PURITY_REPORT.md"

_REASON_LABELS = {
    FailureReason.NO_DEPENDENCIES_EXPECTED_BUT_FOUND: "no dependencies expected but found",
    FailureReason.WHITELIST_VIOLATION: "whitelist violation",
    FailureReason.UNEXPECTED_DEV_DEPENDENCIES: "unexpected dev-dependencies",
    FailureReason.LINT_FAILURE: "lint failure",
}


def render_progress(message: str) -> str:
    return f"{PROGRESS_MARK} {message}"


def render_result(result: CheckResult) -> list[str]:
    """Render one check result as output lines, marker first.

    Detail lines are indented under the marker line. Clippy output is kept
    line for line, each line prefixed with five spaces.
    """
    if result.passed:
        return [f"{PASS_MARK} {result.message}"]

    assert result.reason is not None
    lines = [
        f"{FAIL_MARK} {result.message}",
        f"   package: {result.package}",
        f"   reason: {_REASON_LABELS[result.reason]}",
    ]
    if result.reason is FailureReason.LINT_FAILURE:
        lines.append("   clippy output:")
        lines.extend(f"     {line}" for line in result.detail)
        return lines

    lines.append(f"   found: {', '.join(result.detail)}")
    if result.reason is FailureReason.WHITELIST_VIOLATION:
        lines.append(f"   allowed: {', '.join(result.allowed)}")
    return lines


def report_dict(overall: OverallResult, policy_source: str) -> dict:
    checks = []
    for result in overall.results:
        item = asdict(result)
        item["reason"] = result.reason.value if result.reason else None
        item["detail"] = list(result.detail)
        item["allowed"] = list(result.allowed)
        checks.append(item)

    return {
        "schema_version": "1.0",
        "package": overall.package,
        "status": overall.status,
        "exit_code": overall.exit_code,
        "policy_source": policy_source,
        "checks": checks,
        "error": overall.error,
    }


def write_reports(out_dir: Path, overall: OverallResult, policy_source: str) -> tuple[Path, Path]:
    """Write JSON and markdown reports for a finished run.

    Returns:
        Tuple of (json_path, md_path)
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    json_path = out_dir / REPORT_JSON
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(report_dict(overall, policy_source), f, indent=2, sort_keys=True)
        f.write("\n")

    md_path = out_dir / REPORT_MD
    with open(md_path, "w", encoding="utf-8") as f:
        _write_markdown_report(f, overall, policy_source)

    return json_path, md_path


def _write_markdown_report(f: TextIO, overall: OverallResult, policy_source: str) -> None:
    f.write(f"# Dependency Purity Report: {overall.package}\n\n")

    status_emoji = PASS_MARK if overall.status == "passed" else FAIL_MARK
    f.write(f"**Status**: {status_emoji} {overall.status.upper()}\n\n")
    f.write(f"**Policy**: {policy_source}\n\n")

    f.write("## Checks\n\n")
    for result in overall.results:
        mark = PASS_MARK if result.passed else FAIL_MARK
        f.write(f"### {mark} {result.check}\n\n")
        f.write(f"{result.message}\n\n")

        if result.reason is FailureReason.LINT_FAILURE:
            f.write("```\n")
            for line in result.detail:
                f.write(f"{line}\n")
            f.write("```\n\n")
        elif result.detail:
            f.write(f"- Dependencies: {', '.join(result.detail)}\n")
            if result.allowed:
                f.write(f"- Allowed: {', '.join(result.allowed)}\n")
            f.write("\n")

    if overall.error:
        f.write("## Tool Error\n\n")
        f.write("```\n")
        f.write(f"{overall.error}\n")
        f.write("```\n\n")

    f.write("## Exit Code\n\n")
    if overall.error:
        f.write(f"{overall.exit_code} (tool error - gate could not run)\n")
    elif overall.status == "passed":
        f.write("0 (success - gate passed)\n")
    else:
        f.write(f"{overall.exit_code} (policy violation - gate failed)\n")
