"""Registry of MIME media type definitions.

This package loads media type definitions from the bundled (or a custom)
set of data files into a queryable container, and can keep a versioned
cache of the loaded registry to avoid re-reading the data files.
"""

# Version of the package
try:
    from importlib.metadata import version as _version

    __version__ = _version("mime-type-registry")
except ImportError:
    raise ImportError(
        "Failed to determine package version. This package must be installed "
        "as a package so that importlib.metadata can report its version."
    )

# Import main components for easier access
from .cache import CacheEnvelope, CacheSaveResult, CacheStatus, RegistryCache
from .container import Container, DuplicatePolicy
from .errors import (
    ConfigurationError,
    InvalidDataFormatError,
    InvalidMediaTypeError,
    MimeRegistryError,
    V1FormatError,
)
from .loader import Loader
from .registry import MimeTypeRegistry, RegistryConfig, get_registry
from .type_record import Encoding, TypeRecord
from .v1_format import V1Match, V1ParseFailure, load_from_v1, match_v1_line

# Define public API
__all__ = [
    # Core registry
    "MimeTypeRegistry",
    "RegistryConfig",
    "get_registry",
    # Records and container
    "TypeRecord",
    "Encoding",
    "Container",
    "DuplicatePolicy",
    # Loading
    "Loader",
    "load_from_v1",
    "match_v1_line",
    "V1Match",
    "V1ParseFailure",
    # Cache
    "RegistryCache",
    "CacheEnvelope",
    "CacheSaveResult",
    "CacheStatus",
    # Errors
    "MimeRegistryError",
    "InvalidMediaTypeError",
    "ConfigurationError",
    "InvalidDataFormatError",
    "V1FormatError",
]
