"""Static dependency policy for workspace packages.

The policy maps a package name to the direct runtime dependencies it may
declare. Packages without an entry may declare none. An optional YAML file
can overlay the compiled-in table::

    packages:
      server-model:
        - serde
        - serde_yaml
      core-model: []

The resulting PolicyConfig is frozen before any check runs.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

import yaml

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+$")

DEFAULT_POLICY: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "server-model": ("serde", "serde_yaml"),
    }
)


class PolicyConfigError(RuntimeError):
    """Raised when a policy file cannot be read or is malformed."""


@dataclass(frozen=True)
class PolicyConfig:
    """Read-only package name to whitelist mapping."""

    whitelists: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: DEFAULT_POLICY)
    source: str = "built-in"

    def whitelist_for(self, package: str) -> tuple[str, ...]:
        """Return the allowed dependency names for package (empty when unconfigured)."""
        return self.whitelists.get(package, ())

    @classmethod
    def from_dict(
        cls,
        data: Mapping,
        *,
        base: Mapping[str, tuple[str, ...]] | None = None,
        source: str = "",
    ) -> PolicyConfig:
        """Parse a policy document, overlaying its entries onto base."""
        if not isinstance(data, Mapping):
            raise PolicyConfigError("policy must be a mapping with a `packages` key")
        unknown = sorted(str(key) for key in data if key != "packages")
        if unknown:
            raise PolicyConfigError(f"policy has unknown top-level keys: {unknown}; expected only `packages`")
        packages = data.get("packages", {})
        if packages is None:
            packages = {}
        if not isinstance(packages, Mapping):
            raise PolicyConfigError("policy `packages` must be a mapping of package name to dependency list")

        merged = dict(base if base is not None else DEFAULT_POLICY)
        for package, deps in packages.items():
            merged[str(package)] = _normalize_whitelist(package, deps)

        return cls(whitelists=MappingProxyType(merged), source=source or "inline")


def _normalize_whitelist(package: object, deps: object) -> tuple[str, ...]:
    if deps is None:
        return ()
    if not isinstance(deps, list):
        raise PolicyConfigError(f"packages.{package} must be a list of dependency names")

    names: list[str] = []
    for dep in deps:
        if not isinstance(dep, str) or not _NAME_RE.match(dep):
            raise PolicyConfigError(f"packages.{package} contains an invalid dependency name: {dep!r}")
        if dep not in names:
            names.append(dep)
    return tuple(names)


def load_policy(path: Path | None = None) -> PolicyConfig:
    """Build the process-wide policy, optionally overlaid with a YAML file.

    Args:
        path: Optional YAML policy file

    Returns:
        Frozen PolicyConfig

    Raises:
        PolicyConfigError: If the file is missing or malformed
    """
    if path is None:
        return PolicyConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise PolicyConfigError(f"unable to read policy file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise PolicyConfigError(f"policy file parse error in {path}: {exc}") from exc

    config = PolicyConfig.from_dict(raw or {}, source=str(path))
    logger.debug("loaded policy from %s: %s", path, dict(config.whitelists))
    return config
