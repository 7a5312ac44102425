"""CLI formatters package."""

from .json import format_json, format_records_json
from .table import (
    create_console,
    format_cache_info_table,
    format_paths_table,
    format_records_table,
)

__all__ = [
    "format_json",
    "format_records_json",
    "create_console",
    "format_records_table",
    "format_paths_table",
    "format_cache_info_table",
]
