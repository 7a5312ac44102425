"""Tests for the registry cache."""

import zlib
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mime_type_registry.cache import CacheEnvelope, CacheStatus, RegistryCache
from mime_type_registry.config_paths import ENV_CACHE_PATH
from mime_type_registry.container import Container
from mime_type_registry.type_record import TypeRecord


@pytest.fixture(autouse=True)
def no_cache_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure MIME_TYPES_CACHE from the environment does not leak in."""
    monkeypatch.delenv(ENV_CACHE_PATH, raising=False)


@pytest.fixture
def container() -> Container:
    """Create a container with a few variants."""
    container = Container()
    container.add(
        TypeRecord("text/plain", extensions=("txt", "asc"), encoding="quoted-printable", references=("IANA",)),
        TypeRecord("text/plain", extensions=("doc",), platform="mac", encoding="8bit"),
        TypeRecord(
            "application/x-gzip",
            extensions=("gz",),
            obsolete=True,
            registered=False,
            use_instead=("application/gzip",),
            documentation="Old gzip",
        ),
    )
    return container


def test_round_trip(container: Container, tmp_path: Path) -> None:
    """Test that a saved container loads back equal, list order included."""
    cache_file = str(tmp_path / "registry.cache")

    result = RegistryCache.save(container, cache_file, version="1.0")
    loaded = RegistryCache.load(cache_file, version="1.0")

    assert result.success is True
    assert result.status is CacheStatus.SAVED
    assert result.path == cache_file
    assert loaded == container
    assert loaded is not None
    assert [r.platform for r in loaded["text/plain"]] == [None, "mac"]


def test_round_trip_empty_container(tmp_path: Path) -> None:
    """Test that an empty container can be cached."""
    cache_file = str(tmp_path / "registry.cache")
    RegistryCache.save(Container(), cache_file, version="1.0")
    assert RegistryCache.load(cache_file, version="1.0") == Container()


@patch("mime_type_registry.cache.log_warning")
def test_version_mismatch(mock_log: MagicMock, container: Container, tmp_path: Path) -> None:
    """Test that any version difference invalidates the cache."""
    cache_file = str(tmp_path / "registry.cache")
    RegistryCache.save(container, cache_file, version="1.0")

    assert RegistryCache.load(cache_file, version="1.0.1") is None
    mock_log.assert_called_once()
    assert "invalid version" in mock_log.call_args[0][1]


def test_default_version_is_library_version(container: Container, tmp_path: Path) -> None:
    """Test that the library version is written and expected by default."""
    from mime_type_registry import __version__

    cache_file = str(tmp_path / "registry.cache")
    result = RegistryCache.save(container, cache_file)

    assert result.version == __version__
    assert RegistryCache.load(cache_file) == container
    envelope = RegistryCache.inspect(cache_file)
    assert envelope is not None
    assert envelope.version == __version__


def test_save_without_location_is_not_performed(container: Container) -> None:
    """Test that saving with no configured location is a no-op."""
    result = RegistryCache.save(container)
    assert result.success is False
    assert result.status is CacheStatus.NOT_CONFIGURED
    assert result.path is None


def test_environment_location(container: Container, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that MIME_TYPES_CACHE is used when no file is given."""
    cache_file = tmp_path / "env.cache"
    monkeypatch.setenv(ENV_CACHE_PATH, str(cache_file))

    result = RegistryCache.save(container, version="2.0")

    assert result.status is CacheStatus.SAVED
    assert cache_file.exists()
    assert RegistryCache.load(version="2.0") == container


def test_load_without_location() -> None:
    """Test that loading with no configured location returns None."""
    assert RegistryCache.load(version="1.0") is None


@patch("mime_type_registry.cache.log_warning")
def test_load_missing_file(mock_log: MagicMock, tmp_path: Path) -> None:
    """Test that a missing cache file is not an error and not a warning."""
    assert RegistryCache.load(str(tmp_path / "missing.cache"), version="1.0") is None
    mock_log.assert_not_called()


@patch("mime_type_registry.cache.log_warning")
def test_load_corrupt_file(mock_log: MagicMock, tmp_path: Path) -> None:
    """Test that an unreadable cache is reported and ignored."""
    cache_file = tmp_path / "registry.cache"
    cache_file.write_bytes(b"this is not a cache")

    assert RegistryCache.load(str(cache_file), version="1.0") is None
    mock_log.assert_called_once()
    assert "Could not load registry cache" in mock_log.call_args[0][1]


@patch("mime_type_registry.cache.log_warning")
def test_load_corrupt_data_blob(mock_log: MagicMock, tmp_path: Path) -> None:
    """Test that a matching version with broken data never yields a container."""
    cache_file = tmp_path / "registry.cache"
    envelope = CacheEnvelope(version="1.0", data='{"text/plain": [{"media_type": "broken"}]}')
    cache_file.write_bytes(envelope.to_bytes())

    assert RegistryCache.load(str(cache_file), version="1.0") is None
    mock_log.assert_called_once()


@patch("mime_type_registry.cache.log_warning")
def test_load_envelope_without_version(mock_log: MagicMock, tmp_path: Path) -> None:
    """Test that an envelope missing its fields is rejected."""
    cache_file = tmp_path / "registry.cache"
    cache_file.write_bytes(zlib.compress(b'{"data": "{}"}'))

    assert RegistryCache.load(str(cache_file), version="1.0") is None
    mock_log.assert_called_once()


def test_cache_file_is_binary(container: Container, tmp_path: Path) -> None:
    """Test that the envelope on disk is compressed."""
    cache_file = tmp_path / "registry.cache"
    RegistryCache.save(container, str(cache_file), version="1.0")
    raw = cache_file.read_bytes()
    assert raw[:1] == b"\x78"
    assert CacheEnvelope.from_bytes(raw).version == "1.0"


def test_clear(container: Container, tmp_path: Path) -> None:
    """Test deleting the cache file."""
    cache_file = tmp_path / "registry.cache"
    RegistryCache.save(container, str(cache_file), version="1.0")

    assert RegistryCache.clear(str(cache_file)) is True
    assert not cache_file.exists()
    assert RegistryCache.clear(str(cache_file)) is False
