"""JSON output formatter for CLI."""

import json
import sys
from enum import Enum as _Enum
from typing import Any, Dict, Iterable, List, Optional, TextIO

from ...type_record import TypeRecord


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - Enum -> value (fallback to name)
    - tuple/set -> list
    - Fallback -> str(obj)
    """
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    if isinstance(obj, (tuple, set, frozenset)):
        return list(obj)
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        sort_keys=True,
        default=_default_serializer,
    )
    output.write("\n")


def format_records_json(records: Iterable[TypeRecord]) -> List[Dict[str, Any]]:
    """Convert records into JSON-ready dictionaries."""
    return [record.to_dict() for record in records]
