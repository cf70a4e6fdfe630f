"""cratepure CLI - dependency-purity gate for one workspace package."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from cratepure import __version__
from cratepure.config import PolicyConfigError, load_policy
from cratepure.exec import ToolInvocationError
from cratepure.logging_config import configure_logging
from cratepure.orchestrator import CheckOrchestrator
from cratepure.report import FAIL_MARK, write_reports
from cratepure.types import EXIT_TOOL_ERROR, EXIT_USAGE, OverallResult

cli = typer.Typer(
    name="cratepure",
    help="Verify a workspace package's direct dependencies and lints against policy.",
    add_completion=False,
)
console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _print(line: str) -> None:
    console.print(line, markup=False, emoji=False, soft_wrap=True)


def _version_option_callback(value: bool) -> None:
    """Handle eager --version option."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@cli.command()
def check(
    ctx: typer.Context,
    package: str | None = typer.Argument(
        None,
        metavar="PACKAGE",
        help="Workspace package to verify.",
        show_default=False,
    ),
    policy: Path | None = typer.Option(
        None,
        "--policy",
        envvar="CRATEPURE_POLICY",
        help="YAML policy file layered over the built-in whitelist table.",
    ),
    manifest_path: Path | None = typer.Option(
        None,
        "--manifest-path",
        help="Path to the workspace Cargo.toml (forwarded to cargo).",
    ),
    cargo: str = typer.Option(
        "cargo",
        "--cargo",
        envvar="CRATEPURE_CARGO",
        help="Cargo executable to invoke.",
    ),
    skip_lint: bool = typer.Option(
        False,
        "--skip-lint",
        help="Only run the dependency checks.",
    ),
    report_dir: Path | None = typer.Option(
        None,
        "--report-dir",
        help="Also write PURITY_REPORT.json and PURITY_REPORT.md to this directory.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every external command.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show cratepure version and exit.",
        is_eager=True,
        callback=_version_option_callback,
    ),
) -> None:
    """Fail-closed gate: whitelisted normal deps, no dev-deps, clippy clean."""
    _ = version
    if not package:
        typer.echo(ctx.get_usage(), err=True)
        typer.echo("Error: missing PACKAGE argument.", err=True)
        raise typer.Exit(EXIT_USAGE)

    configure_logging(verbose)

    try:
        policy_config = load_policy(policy)
    except PolicyConfigError as exc:
        err_console.print(f"{FAIL_MARK} {exc}", markup=False, emoji=False, soft_wrap=True)
        raise typer.Exit(EXIT_TOOL_ERROR) from exc

    orchestrator = CheckOrchestrator.for_cargo(
        policy_config,
        cargo=cargo,
        manifest_path=manifest_path,
        run_lint=not skip_lint,
    )

    tool_error: ToolInvocationError | None = None
    try:
        overall = orchestrator.run(package, echo=_print)
    except ToolInvocationError as exc:
        err_console.print(
            f"{FAIL_MARK} {package}: external tool failed: {exc}",
            markup=False,
            emoji=False,
            soft_wrap=True,
        )
        tool_error = exc
        overall = OverallResult(package=package, error=str(exc))

    if report_dir is not None:
        json_path, md_path = write_reports(report_dir, overall, policy_config.source)
        _print(f"Report: {json_path}")
        _print(f"Report: {md_path}")

    if tool_error is not None:
        raise typer.Exit(EXIT_TOOL_ERROR) from tool_error
    raise typer.Exit(overall.exit_code)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
