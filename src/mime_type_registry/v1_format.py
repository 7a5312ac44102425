"""Parser for the legacy v1 registry text format.

Each non-blank line of a v1 file describes one media type::

    [*][!][os:]mt/st[<ws>@ext][<ws>:enc][<ws>'url-list][<ws>=docs][#comment]

``*``
    An unregistered media type.
``!``
    An obsolete media type. May be combined with ``*``.
``os:``
    Platform-specific definition.
``mt/st``
    The media type and subtype. Required unless the line is a comment.
``<ws>@ext``
    Comma-separated extensions. Empty items are dropped, so ``@a,,b`` yields
    ``a`` and ``b``; the same applies to the url list.
``<ws>:enc``
    The encoding: base64, 7bit, 8bit or quoted-printable.
``<ws>'url-list``
    Comma-separated reference URLs.
``<ws>=docs``
    Documentation. ``use-instead:<type>`` annotations are moved out of the
    documentation into the record's replacement list.

The format is deprecated in favour of the structured registry files but is
still read for older data sets.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .container import Container, DuplicatePolicy
from .errors import V1FormatError
from .logging import LogEvent, log_debug, log_error
from .type_record import TypeRecord, extract_use_instead

V1_FORMAT = re.compile(
    r"""
    \A\s*
    (?P<unregistered>[*])?
    (?P<obsolete>!)?
    (?:(?P<platform>\w+):)?
    (?:(?P<mediatype>[-\w.+]+)/(?P<subtype>[-\w.+]+))?
    (?:\s+@(?P<extensions>\S+))?
    (?:\s+:(?P<encoding>base64|7bit|8bit|quoted-printable))?
    (?:\s+'(?P<urls>\S+))?
    (?:\s+=(?P<docs>.+))?
    (?:\s*(?P<comment>[#].*))?
    \s*
    \Z
    """,
    re.VERBOSE,
)


def _split_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item for item in value.split(",") if item]


@dataclass(frozen=True)
class V1Match:
    """Captured fields of a v1 line that matched the grammar."""

    unregistered: bool
    obsolete: bool
    platform: Optional[str]
    media_type: Optional[str]
    extensions: Optional[str]
    encoding: Optional[str]
    urls: Optional[str]
    docs: Optional[str]
    comment: Optional[str]

    @property
    def is_comment(self) -> bool:
        """True if the line holds only a comment."""
        return self.media_type is None and self.comment is not None

    def to_record(self) -> TypeRecord:
        """Build the type record described by this line.

        Raises:
            ValueError: If the line has no media type
        """
        if self.media_type is None:
            raise ValueError("Cannot build a type record from a line without a media type")

        use_instead, docs = extract_use_instead(self.docs)
        return TypeRecord(
            media_type=self.media_type,
            extensions=tuple(_split_list(self.extensions)),
            encoding=self.encoding,
            platform=self.platform,
            obsolete=self.obsolete,
            registered=not self.unregistered,
            use_instead=use_instead,
            documentation=docs,
            references=tuple(_split_list(self.urls)),
            comment=self.comment,
        )


@dataclass(frozen=True)
class V1ParseFailure:
    """A v1 line that could not be turned into a type record."""

    reason: str


V1Result = Union[V1Match, V1ParseFailure]


def match_v1_line(line: str) -> V1Result:
    """Match one stripped line against the v1 grammar.

    Args:
        line: The line to match

    Returns:
        A V1Match on success, otherwise a V1ParseFailure describing why
    """
    try:
        match = V1_FORMAT.match(line)
    except re.error as e:
        return V1ParseFailure(reason=f"regex error: {e}")

    if match is None:
        return V1ParseFailure(reason="no match")

    groups = match.groupdict()
    media_type = None
    if groups["mediatype"] is not None:
        media_type = f"{groups['mediatype']}/{groups['subtype']}"

    result = V1Match(
        unregistered=groups["unregistered"] is not None,
        obsolete=groups["obsolete"] is not None,
        platform=groups["platform"],
        media_type=media_type,
        extensions=groups["extensions"],
        encoding=groups["encoding"],
        urls=groups["urls"],
        docs=groups["docs"],
        comment=groups["comment"],
    )
    if media_type is None and result.comment is None:
        return V1ParseFailure(reason="no media type")
    return result


def parse_v1_lines(lines: Iterable[str], source: str = "<string>") -> Container:
    """Parse v1 lines into a new container.

    Records from a single source are added without duplicate checks.

    Args:
        lines: Physical lines of the source
        source: Name used in diagnostics

    Returns:
        Container with one record per definition line

    Raises:
        V1FormatError: On the first line that does not parse; the remaining
            lines are not read
    """
    container = Container()
    for index, line in enumerate(lines):
        item = line.strip()
        if not item:
            continue

        result = match_v1_line(item)
        if isinstance(result, V1ParseFailure):
            log_error(
                LogEvent.V1_PARSE,
                "Parsing error in v1 MIME type definition",
                source=source,
                line_index=index,
                line=line.rstrip("\r\n"),
                reason=result.reason,
            )
            raise V1FormatError(source, index, line.rstrip("\r\n"), result.reason)

        if result.is_comment:
            continue

        container.add(result.to_record(), policy=DuplicatePolicy.SILENT)
    return container


def load_from_v1(filename: Union[str, Path]) -> Container:
    """Build a container from a v1 format file.

    Args:
        filename: Path of the file, read as UTF-8

    Returns:
        Container of the file's records

    Raises:
        V1FormatError: If a line of the file cannot be parsed, or the file
            is not UTF-8 text
        OSError: If the file cannot be read
    """
    path = Path(filename)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        log_error(LogEvent.V1_PARSE, "Cannot decode v1 file", source=str(path), error=str(e))
        raise V1FormatError(str(path), 0, "", "cannot decode file") from e

    container = parse_v1_lines(content.splitlines(), source=str(path))
    log_debug(LogEvent.V1_PARSE, "Parsed v1 file", source=str(path), records=container.count())
    return container
