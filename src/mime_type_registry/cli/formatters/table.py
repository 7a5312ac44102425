"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, Iterable, Optional, TextIO

from rich.console import Console
from rich.table import Table

from ...type_record import TypeRecord


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    return Console(file=output, no_color=no_color)


def _flags(record: TypeRecord) -> str:
    flags = []
    if not record.registered:
        flags.append("unregistered")
    if record.obsolete:
        flags.append("obsolete")
    return ", ".join(flags)


def format_records_table(records: Iterable[TypeRecord], console: Console, title: str = "Media Types") -> None:
    """Print type records as a table.

    Args:
        records: Records to display
        console: Rich console to print to
        title: Table title
    """
    table = Table(title=title)
    table.add_column("Media Type", style="cyan", no_wrap=True)
    table.add_column("Extensions")
    table.add_column("Encoding")
    table.add_column("Platform")
    table.add_column("Flags", style="yellow")
    table.add_column("Use Instead")

    for record in records:
        table.add_row(
            record.media_type,
            ", ".join(record.extensions),
            record.encoding.value if record.encoding else "",
            record.platform or "",
            _flags(record),
            ", ".join(record.use_instead),
        )

    console.print(table)


def format_paths_table(paths: Dict[str, Any], console: Console) -> None:
    """Print resolved paths and where they came from."""
    table = Table(title="Registry Paths")
    table.add_column("Setting", style="cyan")
    table.add_column("Path")
    table.add_column("Source", style="green")

    for name, info in paths.items():
        table.add_row(name, info.get("path") or "-", info.get("source", ""))

    console.print(table)


def format_cache_info_table(cache_info: Dict[str, Any], console: Console) -> None:
    """Print cache file information."""
    table = Table(title="Registry Cache")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Path", cache_info.get("path") or "not configured")
    table.add_row("Exists", "yes" if cache_info.get("exists") else "no")
    if cache_info.get("exists"):
        table.add_row("Size", cache_info.get("size_formatted", ""))
        table.add_row("Modified", cache_info.get("modified", ""))
        table.add_row("Version", cache_info.get("version") or "unreadable")
        table.add_row("Current", "yes" if cache_info.get("current") else "no")

    console.print(table)
