"""Cache management commands for the CLI."""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import click

from ...cache import CacheStatus, RegistryCache, get_registry_version
from ...config_paths import ensure_parent_dir_exists, get_default_cache_file, resolve_cache_path
from ...errors import MimeRegistryError
from ...loader import Loader
from ..formatters import create_console, format_cache_info_table, format_json
from ..utils import ExitCode, format_file_size, handle_error


def get_cache_info(cache_file: Optional[str] = None) -> Dict[str, Any]:
    """Get information about the cache file.

    Args:
        cache_file: Explicit cache file; falls back to the environment

    Returns:
        Dictionary containing cache information
    """
    path, source = resolve_cache_path(cache_file)
    info: Dict[str, Any] = {"path": path, "source": source, "exists": False}
    if path is None or not Path(path).is_file():
        return info

    stat = Path(path).stat()
    envelope = RegistryCache.inspect(path)
    current_version = get_registry_version()
    info.update(
        {
            "exists": True,
            "size": stat.st_size,
            "size_formatted": format_file_size(stat.st_size),
            "modified": datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S"),
            "version": envelope.version if envelope else None,
            "current_version": current_version,
            "current": envelope is not None and envelope.version == current_version,
        }
    )
    return info


@click.group()
def cache() -> None:
    """Manage the registry cache."""
    pass


@cache.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show cache file information."""
    cache_info = get_cache_info(ctx.obj.get("cache_file"))

    if ctx.obj["format"] == "json":
        format_json(cache_info)
    else:
        format_cache_info_table(cache_info, create_console(no_color=ctx.obj["no_color"]))


@cache.command()
@click.option(
    "--default-location",
    is_flag=True,
    help="Write to the user cache directory when no cache file is configured.",
)
@click.pass_context
def save(ctx: click.Context, default_location: bool = False) -> None:
    """Load the registry from its data files and write the cache."""
    cache_file = ctx.obj.get("cache_file")
    if cache_file is None and resolve_cache_path()[0] is None and default_location:
        default_file = get_default_cache_file()
        try:
            ensure_parent_dir_exists(default_file)
        except OSError as e:
            handle_error(e, ExitCode.GENERIC_ERROR)
        cache_file = str(default_file)

    try:
        loader = Loader(ctx.obj.get("data_path"))
        container = loader.load_v1() if ctx.obj.get("legacy") else loader.load()
    except (MimeRegistryError, OSError, ValueError) as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)

    try:
        result = RegistryCache.save(container, cache_file)
    except OSError as e:
        handle_error(e, ExitCode.GENERIC_ERROR)

    if result.status is CacheStatus.NOT_CONFIGURED:
        click.echo("No cache file configured; set --cache-file or MIME_TYPES_CACHE.", err=True)
        return

    if ctx.obj["format"] == "json":
        format_json({"success": result.success, "path": result.path, "version": result.version})
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        console.print(f"[green]Saved {container.count()} records to {result.path}[/green] (version {result.version})")


@cache.command()
@click.option("--yes", is_flag=True, help="Confirm deletion without prompting (required for non-interactive use).")
@click.pass_context
def clear(ctx: click.Context, yes: bool = False) -> None:
    """Delete the cache file."""
    cache_file = ctx.obj.get("cache_file")
    cache_info = get_cache_info(cache_file)
    if not cache_info["exists"]:
        click.echo("No cache file found to clear.")
        return

    if not yes and not click.confirm(f"Delete cache file {cache_info['path']}?"):
        click.echo("Cache clear cancelled.")
        return

    try:
        removed = RegistryCache.clear(cache_info["path"])
    except OSError as e:
        handle_error(e, ExitCode.GENERIC_ERROR)

    if ctx.obj["format"] == "json":
        format_json({"success": removed, "path": cache_info["path"]})
    else:
        click.echo(f"Removed {cache_info['path']}")
