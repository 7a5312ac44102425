"""CLI commands package."""

# Import all command modules to make them available
from . import cache, paths, types

__all__ = ["cache", "paths", "types"]
