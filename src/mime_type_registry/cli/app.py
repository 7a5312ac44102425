"""Main CLI application for the MIME Type Registry."""

import logging
from typing import Optional

import click
import rich_click as rich_click

from .utils import resolve_format

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


@click.group(invoke_without_command=True)
@click.option(
    "--data-path",
    type=click.Path(file_okay=False),
    help="Directory of registry data files. Takes precedence over MIME_TYPES_DATA.",
)
@click.option(
    "--cache-file",
    type=click.Path(dir_okay=False),
    help="Registry cache file. Takes precedence over MIME_TYPES_CACHE.",
)
@click.option(
    "--format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option("--legacy", is_flag=True, help="Read data files in the deprecated v1 text format.")
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option("--version", is_flag=True, is_eager=True, help="Print library version information.")
@click.pass_context
def app(
    ctx: click.Context,
    data_path: Optional[str] = None,
    cache_file: Optional[str] = None,
    format: Optional[str] = None,
    legacy: bool = False,
    verbose: int = 0,
    debug: bool = False,
    no_color: bool = False,
    version: bool = False,
) -> None:
    """MIME Type Registry CLI - look up media types and manage the registry cache.

    Examples:
      # Show the definitions of a media type
      mtr lookup text/plain

      # Find media types for a file
      mtr ext report.pdf

      # Write the registry cache
      mtr --cache-file ~/.cache/mime.cache cache save
    """
    if version:
        from .. import __version__

        click.echo(f"mime-type-registry version: {__version__}")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()

    # Configure logging level based on verbosity
    log_level = logging.WARNING
    if debug or verbose >= 2:
        log_level = logging.DEBUG
    elif verbose == 1:
        log_level = logging.INFO
    logging.basicConfig(level=log_level, format="%(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "data_path": data_path,
            "cache_file": cache_file,
            "format": resolve_format(format),
            "legacy": legacy,
            "verbose": verbose,
            "debug": debug,
            "no_color": no_color,
        }
    )


# Import and register subcommands after the group is defined
from .commands import cache, paths, types  # noqa: E402

app.add_command(types.lookup)
app.add_command(types.ext)
app.add_command(paths.paths)
app.add_command(cache.cache)


if __name__ == "__main__":
    app()
