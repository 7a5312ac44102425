"""CLI utilities package."""

from .helpers import (
    ExitCode,
    build_registry,
    format_file_size,
    handle_error,
    resolve_format,
)

__all__ = [
    "ExitCode",
    "build_registry",
    "resolve_format",
    "handle_error",
    "format_file_size",
]
