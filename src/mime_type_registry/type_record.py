"""Type record value type for the MIME type registry.

A :class:`TypeRecord` is the pure-data result of every loader: one media
type definition with its extensions, transfer encoding and documentation.
"""

import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import InvalidMediaTypeError

USE_INSTEAD_PATTERN = re.compile(r"use-instead:(\S+)")
_WHITESPACE_RUN = re.compile(r"\s+")


class Encoding(str, Enum):
    """Content transfer encodings a media type may declare."""

    BASE64 = "base64"
    SEVEN_BIT = "7bit"
    EIGHT_BIT = "8bit"
    QUOTED_PRINTABLE = "quoted-printable"


def _ordered_unique(values: Iterable[str]) -> Tuple[str, ...]:
    seen: Dict[str, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return tuple(seen)


def extract_use_instead(docs: Optional[str]) -> Tuple[Tuple[str, ...], Optional[str]]:
    """Split ``use-instead:`` annotations out of a documentation string.

    Args:
        docs: Raw documentation text, possibly containing annotations

    Returns:
        Tuple of (replacement media types in order of appearance,
        remaining documentation with whitespace squeezed, or None if empty)
    """
    if docs is None:
        return (), None

    use_instead = tuple(USE_INSTEAD_PATTERN.findall(docs))
    remaining = USE_INSTEAD_PATTERN.sub("", docs)
    remaining = _WHITESPACE_RUN.sub(" ", remaining).strip()
    return use_instead, remaining or None


@dataclass(frozen=True)
class TypeRecord:
    """One media type definition.

    Attributes:
        media_type: The "type/subtype" string
        extensions: File extensions, in order and without duplicates
        encoding: Declared content transfer encoding, if any
        platform: Operating system marker for platform-specific variants
        obsolete: Whether the type is obsolete
        registered: Whether the type is registered with IANA
        use_instead: Replacement media types for obsolete types
        documentation: Free-text documentation
        references: Reference URLs
        comment: Trailing annotation from the source, not significant
    """

    media_type: str
    extensions: Tuple[str, ...] = ()
    encoding: Optional[Encoding] = None
    platform: Optional[str] = None
    obsolete: bool = False
    registered: bool = True
    use_instead: Tuple[str, ...] = ()
    documentation: Optional[str] = None
    references: Tuple[str, ...] = ()
    comment: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate the media type and normalize sequence fields."""
        if not isinstance(self.media_type, str):
            raise InvalidMediaTypeError(
                f"Media type must be a string, got {type(self.media_type).__name__}",
                media_type=None,
            )
        parts = self.media_type.split("/")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidMediaTypeError(
                f"Invalid media type '{self.media_type}': expected 'type/subtype'",
                media_type=self.media_type,
            )

        if self.encoding is not None and not isinstance(self.encoding, Encoding):
            try:
                object.__setattr__(self, "encoding", Encoding(self.encoding))
            except ValueError as e:
                raise InvalidMediaTypeError(
                    f"Invalid encoding '{self.encoding}' for {self.media_type}",
                    media_type=self.media_type,
                ) from e

        object.__setattr__(self, "extensions", _ordered_unique(self.extensions or ()))
        object.__setattr__(self, "use_instead", tuple(self.use_instead or ()))
        object.__setattr__(self, "references", tuple(self.references or ()))
        object.__setattr__(self, "obsolete", bool(self.obsolete))
        object.__setattr__(self, "registered", bool(self.registered))

    @property
    def key(self) -> str:
        """Container key for this record (the lower-cased media type)."""
        return self.media_type.lower()

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record into a JSON-safe dictionary."""
        data = asdict(self)
        data["encoding"] = self.encoding.value if self.encoding is not None else None
        for name in ("extensions", "use_instead", "references"):
            data[name] = list(data[name])
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TypeRecord":
        """Build a record from a structured registry object.

        Both the snake_case keys written by :meth:`to_dict` and the spellings
        used by the structured registry files (``content-type``,
        ``use-instead``, ``docs``, ``system``, ``xrefs``) are accepted.

        Args:
            data: Mapping describing one media type

        Returns:
            The new TypeRecord

        Raises:
            InvalidMediaTypeError: If the media type or encoding is invalid
        """
        if not isinstance(data, dict):
            raise InvalidMediaTypeError(
                f"Type definition must be a mapping, got {type(data).__name__}"
            )

        media_type = data.get("media_type", data.get("content-type"))
        references = data.get("references")
        if references is None and isinstance(data.get("xrefs"), dict):
            references = _flatten_xrefs(data["xrefs"])

        return cls(
            media_type=media_type,
            extensions=tuple(data.get("extensions") or ()),
            encoding=data.get("encoding"),
            platform=data.get("platform", data.get("system")),
            obsolete=data.get("obsolete", False),
            registered=data.get("registered", True),
            use_instead=_as_tuple(data.get("use_instead", data.get("use-instead"))),
            documentation=data.get("documentation", data.get("docs")),
            references=tuple(references or ()),
            comment=data.get("comment"),
        )


def _as_tuple(value: Any) -> Tuple[str, ...]:
    # use-instead may be a single string in structured files
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _flatten_xrefs(xrefs: Dict[str, List[str]]) -> List[str]:
    urls: List[str] = []
    for values in xrefs.values():
        urls.extend(values or [])
    return urls
