"""cratepure - dependency-purity gate for Cargo workspace packages."""

__version__ = "0.1.0"
