"""Media type lookup commands for the CLI."""

from typing import List

import click

from ...errors import MimeRegistryError
from ...type_record import TypeRecord
from ..formatters import create_console, format_json, format_records_json, format_records_table
from ..utils import ExitCode, build_registry, handle_error


def _emit(ctx: click.Context, records: List[TypeRecord], title: str) -> None:
    if ctx.obj["format"] == "json":
        format_json(format_records_json(records))
    else:
        console = create_console(no_color=ctx.obj["no_color"])
        format_records_table(records, console, title=title)


@click.command()
@click.argument("media_type")
@click.pass_context
def lookup(ctx: click.Context, media_type: str) -> None:
    """Show every definition registered for MEDIA_TYPE."""
    try:
        registry = build_registry(ctx.obj)
    except MimeRegistryError as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)

    records = registry[media_type]
    if not records:
        handle_error(click.ClickException(f"No definitions for media type '{media_type}'"), ExitCode.TYPE_NOT_FOUND)
    _emit(ctx, records, title=media_type)


@click.command()
@click.argument("filename")
@click.pass_context
def ext(ctx: click.Context, filename: str) -> None:
    """Show the media types registered for FILENAME's extension.

    FILENAME may be a file name, a path or a bare extension.
    """
    try:
        registry = build_registry(ctx.obj)
    except MimeRegistryError as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)

    records = registry.type_for(filename)
    if not records:
        handle_error(click.ClickException(f"No media types for '{filename}'"), ExitCode.TYPE_NOT_FOUND)
    _emit(ctx, records, title=filename)
