"""Container holding the registry's type records.

The container maps a normalized media type key to the list of
:class:`~mime_type_registry.type_record.TypeRecord` variants defined for it,
in insertion order. Lookups of absent keys return an empty list and never
modify the container.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple

from .logging import LogEvent, log_warning
from .type_record import TypeRecord


class DuplicatePolicy(Enum):
    """How :meth:`Container.add` treats records already present under a key."""

    SILENT = "silent"
    STRICT_WARN = "strict_warn"


class Container:
    """Insertion-ordered multimap from media type key to type records."""

    def __init__(self) -> None:
        """Initialize an empty container."""
        self._types: Dict[str, List[TypeRecord]] = {}

    @staticmethod
    def normalize_key(media_type: str) -> str:
        """Return the container key for a media type string."""
        return media_type.lower()

    def add(self, *records: TypeRecord, policy: DuplicatePolicy = DuplicatePolicy.SILENT) -> int:
        """Append records under their keys.

        Args:
            records: Records to add, in order
            policy: Duplicate handling; with ``STRICT_WARN`` a warning is
                logged for every record whose media type and extension set
                match an entry already stored under the same key

        Returns:
            Number of duplicate warnings emitted
        """
        warned = 0
        for record in records:
            variants = self._types.setdefault(record.key, [])
            if policy is DuplicatePolicy.STRICT_WARN and self._is_duplicate(record, variants):
                log_warning(
                    LogEvent.CONTAINER,
                    f"Type {record.media_type} is already registered as a variant",
                    media_type=record.media_type,
                    extensions=",".join(record.extensions),
                )
                warned += 1
            variants.append(record)
        return warned

    def merge(self, other: "Container", policy: DuplicatePolicy = DuplicatePolicy.SILENT) -> int:
        """Add every record of another container.

        Returns:
            Number of duplicate warnings emitted
        """
        return self.add(*other.records(), policy=policy)

    @staticmethod
    def _is_duplicate(record: TypeRecord, variants: List[TypeRecord]) -> bool:
        extensions = set(record.extensions)
        return any(
            existing.key == record.key and set(existing.extensions) == extensions
            for existing in variants
        )

    def get(self, media_type: str) -> List[TypeRecord]:
        """Get the records stored for a media type.

        Args:
            media_type: Media type or container key (case-insensitive)

        Returns:
            A new list of the records, empty when the key is unknown
        """
        return list(self._types.get(self.normalize_key(media_type), ()))

    def __getitem__(self, media_type: str) -> List[TypeRecord]:
        return self.get(media_type)

    def __contains__(self, media_type: object) -> bool:
        if not isinstance(media_type, str):
            return False
        return bool(self._types.get(self.normalize_key(media_type)))

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._types))

    def __len__(self) -> int:
        return len(self._types)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Container):
            return NotImplemented
        return self._types == other._types

    def __repr__(self) -> str:
        return f"Container(keys={len(self._types)}, records={self.count()})"

    def keys(self) -> List[str]:
        """Keys in insertion order."""
        return list(self._types)

    def items(self) -> Iterator[Tuple[str, List[TypeRecord]]]:
        """Iterate (key, records) pairs; the lists are copies."""
        for key, variants in self._types.items():
            yield key, list(variants)

    def records(self) -> Iterator[TypeRecord]:
        """Iterate all records, by key then insertion order."""
        for variants in self._types.values():
            yield from variants

    def count(self) -> int:
        """Total number of records across all keys."""
        return sum(len(variants) for variants in self._types.values())

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """Convert the container into a JSON-safe dictionary."""
        return {key: [record.to_dict() for record in variants] for key, variants in self._types.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, List[Dict[str, Any]]]) -> "Container":
        """Rebuild a container written by :meth:`to_dict`.

        Keys are taken from the data as stored so that the per-key list
        order survives the round trip.
        """
        container = cls()
        for key, variants in data.items():
            container._types[key] = [TypeRecord.from_dict(item) for item in variants]
        return container
