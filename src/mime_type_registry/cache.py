"""Versioned cache for a loaded registry container.

Caching a registry avoids re-reading and re-parsing the data files each time
a process starts. The cache file holds an envelope with the version tag of
the library that wrote it and the serialized container. A cache written by
any other version is ignored: a cache file for version 2.0 is not reused by
version 2.0.1.

The cache is an optimization only. Every failure to read it is reported as a
warning and turns into "no usable cache", after which callers load the
registry from its data files.
"""

import json
import zlib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .config_paths import resolve_cache_path
from .container import Container
from .logging import LogEvent, log_debug, log_info, log_warning


def get_registry_version() -> str:
    """Version tag written into new cache files (the library version)."""
    from . import __version__

    return __version__


@dataclass(frozen=True)
class CacheEnvelope:
    """A persisted registry snapshot.

    Attributes:
        version: Version tag of the library that produced ``data``
        data: The serialized container
    """

    version: str
    data: str

    def to_bytes(self) -> bytes:
        """Serialize the envelope for writing to disk."""
        payload = json.dumps({"version": self.version, "data": self.data}, ensure_ascii=False)
        return zlib.compress(payload.encode("utf-8"))

    @classmethod
    def from_bytes(cls, raw: bytes) -> "CacheEnvelope":
        """Deserialize an envelope read from disk.

        Raises:
            zlib.error: If the data is not compressed envelope data
            ValueError: If the payload is not a valid envelope
        """
        payload = json.loads(zlib.decompress(raw).decode("utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"expected an envelope object, got {type(payload).__name__}")
        version = payload.get("version")
        data = payload.get("data")
        if not isinstance(version, str) or not isinstance(data, str):
            raise ValueError("envelope is missing its version or data")
        return cls(version=version, data=data)

    @classmethod
    def wrap(cls, container: Container, version: str) -> "CacheEnvelope":
        """Serialize a container into a new envelope."""
        return cls(version=version, data=json.dumps(container.to_dict(), ensure_ascii=False))

    def unwrap(self) -> Container:
        """Deserialize the container held by this envelope."""
        return Container.from_dict(json.loads(self.data))


class CacheStatus(Enum):
    """Outcome of a cache save operation."""

    SAVED = "saved"
    NOT_CONFIGURED = "not_configured"


@dataclass
class CacheSaveResult:
    """Result of a cache save operation."""

    success: bool
    status: CacheStatus
    path: Optional[str] = None
    version: Optional[str] = None


class RegistryCache:
    """Loads and saves registry containers to a cache file.

    The cache location is the ``cache_file`` argument or the
    ``MIME_TYPES_CACHE`` environment variable. Without either, saving and
    loading do nothing.
    """

    @classmethod
    def save(
        cls,
        container: Container,
        cache_file: Optional[str] = None,
        version: Optional[str] = None,
    ) -> CacheSaveResult:
        """Write a container to the cache file.

        Args:
            container: The registry container to persist
            cache_file: Cache file path; falls back to ``MIME_TYPES_CACHE``
            version: Version tag to store; defaults to the library version

        Returns:
            CacheSaveResult; status is NOT_CONFIGURED when no cache file
            could be resolved

        Raises:
            OSError: If the cache file cannot be written
        """
        path, _ = resolve_cache_path(cache_file)
        if path is None:
            log_debug(LogEvent.CACHE, "No cache file configured, not saving")
            return CacheSaveResult(success=False, status=CacheStatus.NOT_CONFIGURED)

        version = version if version is not None else get_registry_version()
        envelope = CacheEnvelope.wrap(container, version)
        Path(path).write_bytes(envelope.to_bytes())

        log_info(LogEvent.CACHE, "Saved registry cache", path=path, version=version, records=container.count())
        return CacheSaveResult(success=True, status=CacheStatus.SAVED, path=path, version=version)

    @classmethod
    def load(cls, cache_file: Optional[str] = None, version: Optional[str] = None) -> Optional[Container]:
        """Load a container from the cache file.

        Args:
            cache_file: Cache file path; falls back to ``MIME_TYPES_CACHE``
            version: Version the cache must have been written by; defaults
                to the library version. Compared as an exact string.

        Returns:
            The cached container, or None if there is no usable cache
        """
        envelope = cls.inspect(cache_file)
        if envelope is None:
            return None

        expected = version if version is not None else get_registry_version()
        if envelope.version != expected:
            log_warning(
                LogEvent.CACHE,
                "Could not load registry cache: invalid version",
                found_version=envelope.version,
                expected_version=expected,
            )
            return None

        try:
            container = envelope.unwrap()
        except Exception as e:
            log_warning(LogEvent.CACHE, f"Could not load registry cache: {e}", error=str(e))
            return None

        log_info(LogEvent.CACHE, "Loaded registry cache", version=envelope.version, records=container.count())
        return container

    @classmethod
    def inspect(cls, cache_file: Optional[str] = None) -> Optional[CacheEnvelope]:
        """Read the cache envelope without decoding the container.

        Returns:
            The envelope, or None if the cache is missing or unreadable
        """
        path, _ = resolve_cache_path(cache_file)
        if path is None or not Path(path).is_file():
            log_debug(LogEvent.CACHE, "No registry cache file", path=path)
            return None

        try:
            return CacheEnvelope.from_bytes(Path(path).read_bytes())
        except Exception as e:
            log_warning(LogEvent.CACHE, f"Could not load registry cache: {e}", path=path, error=str(e))
            return None

    @classmethod
    def clear(cls, cache_file: Optional[str] = None) -> bool:
        """Delete the cache file.

        Returns:
            True if a file was removed

        Raises:
            OSError: If the file exists but cannot be removed
        """
        path, _ = resolve_cache_path(cache_file)
        if path is None or not Path(path).exists():
            return False
        Path(path).unlink()
        log_info(LogEvent.CACHE, "Cleared registry cache", path=path)
        return True
