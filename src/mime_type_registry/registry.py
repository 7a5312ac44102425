"""Registry facade combining the loaders and the cache.

This module provides the MimeTypeRegistry class, which builds a container
from the cache when a compatible one exists, and from the data files
otherwise.

Typical usage:

    from mime_type_registry import get_registry  # singleton helper

    # or, for a custom configuration
    from mime_type_registry import MimeTypeRegistry, RegistryConfig

"""

import threading
from pathlib import PurePath
from typing import Dict, Iterator, List, Optional

from .cache import RegistryCache, get_registry_version
from .config_paths import resolve_cache_path, resolve_data_path
from .container import Container
from .loader import Loader
from .logging import LogEvent, log_info, log_warning
from .type_record import TypeRecord


class RegistryConfig:
    """Configuration for the MIME type registry.

    Every path is resolved once, when the configuration is created.
    """

    def __init__(
        self,
        data_path: Optional[str] = None,
        cache_path: Optional[str] = None,
        version: Optional[str] = None,
        legacy: bool = False,
    ):
        """Initialize registry configuration.

        Args:
            data_path: Directory holding the registry data files. If None,
                       ``MIME_TYPES_DATA`` or the bundled data is used.
            cache_path: Cache file. If None, ``MIME_TYPES_CACHE`` is used;
                        caching is disabled when neither is set.
            version: Version tag the cache must match. Defaults to the
                     library version.
            legacy: Whether to read v1 format files instead of JSON.
        """
        self.data_path, self.data_path_source = resolve_data_path(data_path)
        self.cache_path, self.cache_path_source = resolve_cache_path(cache_path)
        self.version = version if version is not None else get_registry_version()
        self.legacy = legacy


class MimeTypeRegistry:
    """Registry of media type definitions."""

    _default_instance: Optional["MimeTypeRegistry"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "MimeTypeRegistry":
        """Get the default registry instance with standard configuration.

        Returns:
            The default MimeTypeRegistry instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                cls._default_instance = cls()
            return cls._default_instance

    def __init__(self, config: Optional[RegistryConfig] = None):
        """Initialize a new registry instance.

        Args:
            config: Configuration for this registry instance. If None, default
                   configuration is used.
        """
        self.config = config or RegistryConfig()
        self.loaded_from_cache = False
        self._container = self._load()
        self._extension_index: Optional[Dict[str, List[TypeRecord]]] = None

    def _load(self) -> Container:
        cache_path = self.config.cache_path
        cached = RegistryCache.load(cache_path, version=self.config.version) if cache_path is not None else None
        if cached is not None:
            self.loaded_from_cache = True
            return cached

        loader = Loader(self.config.data_path)
        container = loader.load_v1() if self.config.legacy else loader.load()
        log_info(
            LogEvent.REGISTRY,
            "Registry loaded from data files",
            path=self.config.data_path,
            types=len(container),
            records=container.count(),
        )
        if cache_path is None:
            return container
        try:
            RegistryCache.save(container, cache_path, version=self.config.version)
        except OSError as e:
            log_warning(
                LogEvent.REGISTRY,
                f"Failed to save registry cache: {e}",
                path=cache_path,
                error=str(e),
            )
        return container

    @property
    def container(self) -> Container:
        """The container backing this registry."""
        return self._container

    def __getitem__(self, media_type: str) -> List[TypeRecord]:
        return self._container[media_type]

    def __len__(self) -> int:
        return len(self._container)

    def records(self) -> Iterator[TypeRecord]:
        """Iterate every record in the registry."""
        return self._container.records()

    def count(self) -> int:
        """Total number of records, including platform variants."""
        return self._container.count()

    def type_for(self, filename: str) -> List[TypeRecord]:
        """Find the records registered for a file's extension.

        Args:
            filename: A file name, path or bare extension (``"txt"``,
                      ``".txt"`` and ``"notes.TXT"`` are equivalent)

        Returns:
            Matching records in registry order; empty if none match
        """
        suffix = PurePath(filename).suffix
        extension = (suffix[1:] if suffix else filename.lstrip(".")).lower()

        if self._extension_index is None:
            index: Dict[str, List[TypeRecord]] = {}
            for record in self._container.records():
                for ext in record.extensions:
                    index.setdefault(ext.lower(), []).append(record)
            self._extension_index = index
        return list(self._extension_index.get(extension, ()))


def get_registry() -> MimeTypeRegistry:
    """Get the registry singleton instance.

    Returns:
        MimeTypeRegistry: The singleton registry instance
    """
    return MimeTypeRegistry.get_default()
