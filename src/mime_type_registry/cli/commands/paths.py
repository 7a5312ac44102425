"""Path inspection command for the CLI."""

from typing import Any, Dict

import click

from ...config_paths import ENV_CACHE_PATH, ENV_DATA_PATH, resolve_cache_path, resolve_data_path
from ..formatters import create_console, format_json, format_paths_table


def get_paths_info(ctx_obj: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Resolve the data and cache locations for the given CLI options."""
    data_path, data_source = resolve_data_path(ctx_obj.get("data_path"))
    cache_path, cache_source = resolve_cache_path(ctx_obj.get("cache_file"))
    return {
        "data": {"path": data_path, "source": data_source, "env": ENV_DATA_PATH},
        "cache": {"path": cache_path, "source": cache_source, "env": ENV_CACHE_PATH},
    }


@click.command()
@click.pass_context
def paths(ctx: click.Context) -> None:
    """Show the resolved data directory and cache file."""
    info = get_paths_info(ctx.obj)
    if ctx.obj["format"] == "json":
        format_json(info)
    else:
        format_paths_table(info, create_console(no_color=ctx.obj["no_color"]))
