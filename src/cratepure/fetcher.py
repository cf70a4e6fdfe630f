"""Direct dependency lookup through ``cargo tree``."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from cratepure.exec import ExecResult, ToolInvocationError, run_command
from cratepure.types import DependencyKind

logger = logging.getLogger(__name__)

_CRATE_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def package_root_name(package: str) -> str:
    """Strip a ``name@version`` qualifier from a package spec."""
    return package.split("@", 1)[0]


def build_tree_argv(
    package: str,
    kind: DependencyKind,
    *,
    cargo: str = "cargo",
    manifest_path: Path | None = None,
) -> list[str]:
    """Build the cargo tree command for depth-1 edges of one kind."""
    argv = [cargo, "tree", "-p", package, "-e", kind.value, "--depth", "1", "--prefix", "none"]
    if manifest_path is not None:
        argv.extend(["--manifest-path", str(manifest_path)])
    return argv


def parse_tree_output(package: str, result: ExecResult) -> tuple[str, ...]:
    """Parse ``--prefix none`` tree output into direct dependency names.

    The first line is the package itself and is dropped. Every other line
    must carry a crate name as its first field; anything else is rejected
    rather than counted.
    """
    lines = result.stdout.rstrip().splitlines()
    if not lines or not lines[0].strip():
        raise ToolInvocationError(f"cargo tree produced no output for {package}", result)

    root = lines[0].split()[0]
    if root != package_root_name(package):
        raise ToolInvocationError(
            f"cargo tree root line names {root!r}, expected {package_root_name(package)!r}",
            result,
        )

    names: list[str] = []
    for lineno, line in enumerate(lines[1:], start=2):
        fields = line.split()
        if not fields or not _CRATE_NAME_RE.match(fields[0]):
            raise ToolInvocationError(f"unparsable cargo tree line {lineno}: {line!r}", result)
        names.append(fields[0])
    return tuple(names)


class DependencyTreeFetcher:
    """Fetch direct runtime or development dependencies for a package."""

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

    def fetch(self, package: str, kind: DependencyKind) -> tuple[str, ...]:
        """Return direct dependency names of ``kind`` for ``package``.

        Raises:
            ToolInvocationError: If cargo is missing, exits non-zero, or its
                output does not have the expected shape
        """
        argv = build_tree_argv(package, kind, cargo=self.cargo, manifest_path=self.manifest_path)
        result = run_command(argv, cwd=self.cwd)
        if result.returncode != 0:
            raise ToolInvocationError(
                f"cargo tree failed ({result.returncode}) for {package}: {' '.join(argv)}",
                result,
            )

        names = parse_tree_output(package, result)
        logger.debug("%s %s dependencies: %s", package, kind.value, list(names))
        return names
