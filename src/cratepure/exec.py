"""Command runner for the external cargo tools."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Result envelope for subprocess execution."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """Combined tool output, stderr first (where cargo writes diagnostics)."""
        parts = [self.stderr.strip(), self.stdout.strip()]
        return "\n".join(part for part in parts if part)


class ToolInvocationError(RuntimeError):
    """Raised when an external tool is unavailable, fails, or emits unparsable output."""

    def __init__(self, message: str, result: ExecResult | None = None):
        detail = result.output if result is not None else ""
        super().__init__(f"{message}\n{detail}" if detail else message)
        self.result = result


def run_command(
    argv: list[str],
    *,
    cwd: Path | None = None,
) -> ExecResult:
    """Run command to completion and return structured result.

    Non-zero exit codes are returned, not raised; callers decide what a
    failure means. A missing executable raises ToolInvocationError.
    """
    workdir = (cwd or Path.cwd()).resolve()
    logger.debug("running %s (cwd=%s)", " ".join(argv), workdir)
    try:
        completed = subprocess.run(argv, cwd=workdir, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise ToolInvocationError(f"unable to execute {argv[0]}: {exc}") from exc
    result = ExecResult(
        argv=tuple(argv),
        cwd=workdir,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    logger.debug("%s exited with %d", argv[0], result.returncode)
    return result
