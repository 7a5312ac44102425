"""Error types for the MIME type registry.

This module defines the error types raised while building type records,
reading registry data files and parsing the legacy v1 format.
"""

from typing import Optional


class MimeRegistryError(Exception):
    """Base class for all registry-related errors.

    This is the parent class for all registry-specific exceptions.
    """

    pass


class InvalidMediaTypeError(MimeRegistryError):
    """Raised when a type record is built from an invalid media type or encoding.

    Examples:
        >>> try:
        ...     TypeRecord(media_type="text")
        ... except InvalidMediaTypeError as e:
        ...     print(f"Bad media type: {e.media_type}")
    """

    def __init__(self, message: str, media_type: Optional[str] = None) -> None:
        """Initialize invalid media type error.

        Args:
            message: Error message
            media_type: The offending media type string, if known
        """
        super().__init__(message)
        self.message = message
        self.media_type = media_type


class ConfigurationError(MimeRegistryError):
    """Base class for errors related to registry data files.

    This is raised for errors related to locating or reading the data
    files the registry is built from.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the data file that caused the error
        """
        super().__init__(message)
        self.message = message
        self.path = path


class InvalidDataFormatError(ConfigurationError):
    """Raised when a structured data file does not hold a list of records.

    Examples:
        >>> try:
        ...     Loader.load_from_json("broken.json")
        ... except InvalidDataFormatError as e:
        ...     print(f"Invalid data file {e.path}: expected {e.expected_type}")
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        expected_type: str = "list",
    ) -> None:
        """Initialize invalid format error.

        Args:
            message: Error message
            path: Optional path to the data file
            expected_type: Expected type of the top-level value
        """
        super().__init__(message, path)
        self.expected_type = expected_type


class V1FormatError(MimeRegistryError):
    """Raised when a line of a v1 registry file cannot be parsed.

    The error carries the source file and the 0-based index of the line
    that stopped the parse.

    Examples:
        >>> try:
        ...     load_from_v1("types/text.txt")
        ... except V1FormatError as e:
        ...     print(f"{e.source}:{e.line_index}: {e.reason}")
    """

    def __init__(self, source: str, line_index: int, line: str, reason: str) -> None:
        """Initialize v1 format error.

        Args:
            source: Name of the file (or other source) being parsed
            line_index: 0-based index of the failing line
            line: The raw failing line
            reason: Short description of the failure
        """
        self.source = source
        self.line_index = line_index
        self.line = line
        self.reason = reason
        self.message = f"{source}:{line_index}: Parsing error in v1 MIME type definition ({reason})."
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error.

        Returns:
            Error message
        """
        return self.message
