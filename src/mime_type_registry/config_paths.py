"""Path handling for registry data files and the registry cache.

Data files are searched for under a root directory chosen in priority order:
explicit argument, the ``MIME_TYPES_DATA`` environment variable, then the data
bundled with the package. The cache file is an explicit argument or the
``MIME_TYPES_CACHE`` environment variable; without either, caching is off.
"""

import os
from pathlib import Path
from typing import Optional, Tuple

import platformdirs

# Application name used for directory paths
APP_NAME = "mime-type-registry"

# Environment variable names
ENV_DATA_PATH = "MIME_TYPES_DATA"
ENV_CACHE_PATH = "MIME_TYPES_CACHE"

# Default filenames
CACHE_FILENAME = "registry.cache"

SOURCE_ARGUMENT = "argument"
SOURCE_ENVIRONMENT = "environment"
SOURCE_BUNDLED = "bundled"
SOURCE_NOT_CONFIGURED = "not configured"


def get_package_data_dir() -> Path:
    """Get the path to the package's bundled data directory."""
    return Path(__file__).parent / "data"


def get_user_cache_dir() -> Path:
    """Get the path to the user's cache directory for this application."""
    return Path(platformdirs.user_cache_dir(APP_NAME))


def get_default_cache_file() -> Path:
    """Get the suggested cache file location inside the user cache directory.

    This location is only used when asked for explicitly; it is never picked
    up implicitly by :func:`resolve_cache_path`.
    """
    return get_user_cache_dir() / CACHE_FILENAME


def ensure_parent_dir_exists(path: Path) -> None:
    """Ensure the directory that will hold ``path`` exists and is writable.

    Raises:
        OSError: If the directory cannot be created
        PermissionError: If the directory exists but is not writable
    """
    parent = path.parent
    os.makedirs(parent, exist_ok=True)

    if not os.access(parent, os.W_OK):
        raise PermissionError(f"Cache directory is not writable: {parent}")


def resolve_data_path(path: Optional[str] = None) -> Tuple[str, str]:
    """Resolve the data search root.

    Args:
        path: Explicit directory, takes precedence when given

    Returns:
        Tuple of (absolute directory path, source of the value)
    """
    # 1. Explicit argument
    if path:
        return str(Path(path).expanduser().resolve()), SOURCE_ARGUMENT

    # 2. Environment variable
    env_path = os.environ.get(ENV_DATA_PATH)
    if env_path:
        return str(Path(env_path).expanduser().resolve()), SOURCE_ENVIRONMENT

    # 3. Fall back to package directory
    return str(get_package_data_dir().resolve()), SOURCE_BUNDLED


def resolve_cache_path(path: Optional[str] = None) -> Tuple[Optional[str], str]:
    """Resolve the cache file location.

    Args:
        path: Explicit cache file, takes precedence when given

    Returns:
        Tuple of (path or None when caching is not configured, source)
    """
    if path:
        return str(Path(path).expanduser()), SOURCE_ARGUMENT

    env_path = os.environ.get(ENV_CACHE_PATH)
    if env_path:
        return str(Path(env_path).expanduser()), SOURCE_ENVIRONMENT

    return None, SOURCE_NOT_CONFIGURED
