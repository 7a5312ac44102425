"""Tests for the CLI."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from mime_type_registry.cache import RegistryCache
from mime_type_registry.cli.app import app
from mime_type_registry.cli.commands.cache import get_cache_info
from mime_type_registry.cli.utils import format_file_size
from mime_type_registry.config_paths import ENV_CACHE_PATH, ENV_DATA_PATH


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove the path environment variables."""
    monkeypatch.delenv(ENV_DATA_PATH, raising=False)
    monkeypatch.delenv(ENV_CACHE_PATH, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Create a data directory with one JSON registry file."""
    data = tmp_path / "data"
    data.mkdir()
    (data / "text.json").write_text(
        json.dumps(
            [
                {"content-type": "text/plain", "extensions": ["txt"], "encoding": "quoted-printable"},
                {"content-type": "text/x-old", "obsolete": True, "use-instead": "text/plain"},
            ]
        )
    )
    return data


class TestLookup:
    """Tests for the lookup and ext commands."""

    def test_lookup_json(self, cli_runner: CliRunner, data_dir: Path) -> None:
        """Test looking up a media type with JSON output."""
        result = cli_runner.invoke(app, ["--data-path", str(data_dir), "--format", "json", "lookup", "text/plain"])

        assert result.exit_code == 0
        records = json.loads(result.output)
        assert records[0]["media_type"] == "text/plain"
        assert records[0]["encoding"] == "quoted-printable"

    def test_lookup_table(self, cli_runner: CliRunner, data_dir: Path) -> None:
        """Test looking up a media type with table output."""
        result = cli_runner.invoke(
            app,
            ["--data-path", str(data_dir), "--format", "table", "--no-color", "lookup", "text/x-old"],
        )

        assert result.exit_code == 0
        assert "text/x-old" in result.output
        assert "obsolete" in result.output

    def test_lookup_unknown(self, cli_runner: CliRunner, data_dir: Path) -> None:
        """Test that an unknown media type exits with the not-found code."""
        result = cli_runner.invoke(app, ["--data-path", str(data_dir), "lookup", "text/unknown"])

        assert result.exit_code == 3
        assert "No definitions" in result.output

    def test_ext(self, cli_runner: CliRunner, data_dir: Path) -> None:
        """Test finding media types by file name."""
        result = cli_runner.invoke(app, ["--data-path", str(data_dir), "--format", "json", "ext", "notes.TXT"])

        assert result.exit_code == 0
        assert [r["media_type"] for r in json.loads(result.output)] == ["text/plain"]


def test_paths(cli_runner: CliRunner, data_dir: Path) -> None:
    """Test showing resolved paths."""
    result = cli_runner.invoke(app, ["--data-path", str(data_dir), "--format", "json", "paths"])

    assert result.exit_code == 0
    info = json.loads(result.output)
    assert info["data"]["source"] == "argument"
    assert info["cache"]["path"] is None
    assert info["cache"]["source"] == "not configured"


class TestCacheCommands:
    """Tests for the cache command group."""

    def test_save_and_info(self, cli_runner: CliRunner, data_dir: Path, tmp_path: Path) -> None:
        """Test writing the cache and inspecting it."""
        cache_file = tmp_path / "registry.cache"
        base = ["--data-path", str(data_dir), "--cache-file", str(cache_file), "--format", "json"]

        result = cli_runner.invoke(app, base + ["cache", "save"])
        assert result.exit_code == 0
        assert json.loads(result.output)["success"] is True
        assert RegistryCache.load(str(cache_file)) is not None

        result = cli_runner.invoke(app, base + ["cache", "info"])
        assert result.exit_code == 0
        info = json.loads(result.output)
        assert info["exists"] is True
        assert info["current"] is True

    def test_save_not_configured(self, cli_runner: CliRunner, data_dir: Path) -> None:
        """Test that saving without a cache location does nothing."""
        result = cli_runner.invoke(app, ["--data-path", str(data_dir), "cache", "save"])

        assert result.exit_code == 0
        assert "No cache file configured" in result.output

    def test_clear(self, cli_runner: CliRunner, data_dir: Path, tmp_path: Path) -> None:
        """Test deleting the cache file."""
        cache_file = tmp_path / "registry.cache"
        base = ["--data-path", str(data_dir), "--cache-file", str(cache_file)]
        cli_runner.invoke(app, base + ["cache", "save"])

        result = cli_runner.invoke(app, base + ["cache", "clear", "--yes"])

        assert result.exit_code == 0
        assert not cache_file.exists()

    def test_clear_cancelled(self, cli_runner: CliRunner, data_dir: Path, tmp_path: Path) -> None:
        """Test that declining the prompt keeps the cache file."""
        cache_file = tmp_path / "registry.cache"
        base = ["--data-path", str(data_dir), "--cache-file", str(cache_file)]
        cli_runner.invoke(app, base + ["cache", "save"])

        result = cli_runner.invoke(app, base + ["cache", "clear"], input="n\n")

        assert result.exit_code == 0
        assert "cancelled" in result.output
        assert cache_file.exists()


def test_get_cache_info_stale(tmp_path: Path) -> None:
    """Test that a cache from another version is reported as not current."""
    cache_file = tmp_path / "registry.cache"
    from mime_type_registry.container import Container

    RegistryCache.save(Container(), str(cache_file), version="0.0.1-old")

    info = get_cache_info(str(cache_file))
    assert info["exists"] is True
    assert info["version"] == "0.0.1-old"
    assert info["current"] is False


def test_version(cli_runner: CliRunner) -> None:
    """Test the --version flag."""
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "mime-type-registry version" in result.output


@pytest.mark.parametrize(
    "size,expected",
    [(0, "0 B"), (512, "512.0 B"), (1536, "1.5 KB"), (1024 * 1024, "1.0 MB")],
)
def test_format_file_size(size: int, expected: str) -> None:
    """Test human readable file sizes."""
    assert format_file_size(size) == expected
