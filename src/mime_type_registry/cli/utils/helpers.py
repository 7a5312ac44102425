"""Helper functions for CLI operations."""

import sys
from typing import Any, Dict, NoReturn, Optional

import click

from ...registry import MimeTypeRegistry, RegistryConfig


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    TYPE_NOT_FOUND = 3
    DATA_SOURCE_ERROR = 4


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    # Auto-detect based on TTY
    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def handle_error(error: Exception, exit_code: int = ExitCode.GENERIC_ERROR) -> NoReturn:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use
    """
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code)


def build_registry(ctx_obj: Dict[str, Any]) -> MimeTypeRegistry:
    """Build a registry from the global CLI options.

    Args:
        ctx_obj: Click context object holding the resolved options

    Returns:
        A new MimeTypeRegistry instance
    """
    config = RegistryConfig(
        data_path=ctx_obj.get("data_path"),
        cache_path=ctx_obj.get("cache_file"),
        legacy=ctx_obj.get("legacy", False),
    )
    return MimeTypeRegistry(config)


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string
    """
    if size_bytes == 0:
        return "0 B"

    size_names = ["B", "KB", "MB", "GB"]
    size = float(size_bytes)
    i = 0
    while size >= 1024 and i < len(size_names) - 1:
        size /= 1024.0
        i += 1

    return f"{size:.1f} {size_names[i]}"
