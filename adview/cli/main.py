"""Command-line viewer for the obs/var tables of h5ad files."""

from __future__ import annotations

import functools
import os
import sys
from typing import Optional

import click

from ..catalog import ColumnCatalog
from ..config import Config, load_config
from ..container import H5Container
from ..errors import AdviewError
from ..output import CsvExporter, ListingWriter, TsvWriter
from ..reader import TableReader
from ..summary import describe_fields, table_shape
from ..utils.logging import get_contextual_logger, setup_logging

TABLE_GROUPS = ("obs", "var")


def open_container(path: str) -> H5Container:
    """Open an h5ad file, reporting failures with the file name."""
    container = H5Container(path)
    try:
        container.open()
    except OSError as exc:
        raise click.ClickException(f"Failed to open file: {path!r} ({exc})") from exc
    return container


def build_reader(container: H5Container, group_path: str, config: Config) -> TableReader:
    """Catalog a table group and wrap it in a reader."""
    logger = get_contextual_logger(__name__, {"file": container.path, "group": group_path})
    catalog = ColumnCatalog.build(container, group_path)
    logger.info(f"Opened {catalog!r}")
    return TableReader(catalog, chunk_size=config.reader.chunk_size)


def reports_errors(command):
    """Turn decoding errors into 'error: ...' messages and tolerate closed pipes."""

    @functools.wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except AdviewError as exc:
            click.echo(f"error: {exc}", err=True)
            sys.exit(1)
        except BrokenPipeError:
            _silence_stdout()

    return wrapper


def _silence_stdout() -> None:
    """Point stdout at devnull so the interpreter's final flush stays quiet."""
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError):
        pass


def show_head(config: Config, path: str, group_path: str, lines: int) -> None:
    """Print the header and the first `lines` rows of a table."""
    with open_container(path) as container:
        reader = build_reader(container, group_path, config)
        writer = TsvWriter(click.echo, config.output.delimiter)
        writer.write_header(reader.read_all_headers())
        writer.write_chunk(reader.read_chunk(0, lines))


def show_all(config: Config, path: str, group_path: str) -> None:
    """Stream every row of a table, one chunk at a time."""
    with open_container(path) as container:
        reader = build_reader(container, group_path, config)
        writer = TsvWriter(click.echo, config.output.delimiter)
        writer.write_header(reader.read_all_headers())
        for chunk in reader.iter_chunks():
            writer.write_chunk(chunk)


@click.group()
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, readable=True),
    help="Path to YAML config file.",
)
@click.option("--log-level", default=None, help="Override the configured log level.")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], log_level: Optional[str]) -> None:
    """adview -- Head/Less/Shape of h5ad files in the terminal."""
    config = load_config(config_path) if config_path else Config()
    setup_logging(
        level=log_level or config.logging.level,
        structured=config.logging.structured,
        log_file=config.logging.log_file,
    )
    ctx.obj = config


def _lines_option(command):
    return click.option(
        "-n",
        "--lines",
        type=click.IntRange(min=0),
        default=None,
        help="Number of lines to show (default from config, 10).",
    )(command)


def _file_argument(command):
    return click.argument(
        "file", type=click.Path(exists=True, dir_okay=False), metavar="FILE"
    )(command)


@click.command("obs-head")
@_file_argument
@_lines_option
@click.pass_obj
@reports_errors
def obs_head(config: Config, file: str, lines: Optional[int]) -> None:
    """Show first n obs."""
    show_head(config, file, "obs", _default_lines(config, lines))


@click.command("obs-all")
@_file_argument
@click.pass_obj
@reports_errors
def obs_all(config: Config, file: str) -> None:
    """Show all obs."""
    show_all(config, file, "obs")


@click.command("var-head")
@_file_argument
@_lines_option
@click.pass_obj
@reports_errors
def var_head(config: Config, file: str, lines: Optional[int]) -> None:
    """Show first n var."""
    show_head(config, file, "var", _default_lines(config, lines))


@click.command("var-all")
@_file_argument
@click.pass_obj
@reports_errors
def var_all(config: Config, file: str) -> None:
    """Show all var."""
    show_all(config, file, "var")


@click.command("shape")
@_file_argument
@click.pass_obj
@reports_errors
def shape(config: Config, file: str) -> None:
    """Show shapes of obs and var."""
    with open_container(file) as container:
        for group_path in TABLE_GROUPS:
            click.echo(f"{group_path} shape: {table_shape(container, group_path)}")


@click.command("field")
@_file_argument
@click.pass_obj
@reports_errors
def field(config: Config, file: str) -> None:
    """Show fields in obs and var."""
    with open_container(file) as container:
        for index, group_path in enumerate(TABLE_GROUPS):
            if index:
                click.echo("")
            click.echo(f"{group_path} fields:")
            for name, tag in describe_fields(container, group_path):
                click.echo(f"\t{name} ({tag})")


@click.command("column")
@_file_argument
@click.option("--group", "group_path", default="obs", show_default=True, help="Table group.")
@click.option("--name", required=True, help="Field to list.")
@click.option("--start", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("-n", "--lines", type=click.IntRange(min=0), default=None, help="Rows to list (default: all).")
@click.pass_obj
@reports_errors
def column(
    config: Config,
    file: str,
    group_path: str,
    name: str,
    start: int,
    lines: Optional[int],
) -> None:
    """List one field's values, numbered from 1."""
    with open_container(file) as container:
        reader = build_reader(container, group_path, config)
        if reader.catalog.get_field(name) is None:
            raise click.UsageError(f"Field '{name}' not found in '{group_path}'")
        writer = ListingWriter(click.echo)
        for chunk in reader.iter_chunks(start=start, limit=lines, names=[name]):
            writer.write_chunk(chunk, name)


@click.command("export")
@_file_argument
@click.option("--group", "group_path", default="obs", show_default=True, help="Table group.")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="CSV file to write (default: stdout).",
)
@click.option("--start", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("-n", "--lines", type=click.IntRange(min=0), default=None, help="Rows to export (default: all).")
@click.pass_obj
@reports_errors
def export(
    config: Config,
    file: str,
    group_path: str,
    output: Optional[str],
    start: int,
    lines: Optional[int],
) -> None:
    """Export a table as CSV."""
    with open_container(file) as container:
        reader = build_reader(container, group_path, config)
        with click.open_file(output or "-", "wb") as sink:
            _export_csv(reader, sink, start, lines)


def _export_csv(reader: TableReader, sink, start: int, lines: Optional[int]) -> None:
    with CsvExporter(sink, reader.read_all_headers()) as exporter:
        for chunk in reader.iter_chunks(start=start, limit=lines):
            exporter.write_chunk(chunk)
    sink.flush()


def _default_lines(config: Config, lines: Optional[int]) -> int:
    if lines is None:
        return config.output.head_lines
    return lines


COMMANDS = [
    (obs_head, "oh"),
    (obs_all, "oa"),
    (var_head, "vh"),
    (var_all, "va"),
    (shape, "s"),
    (field, "f"),
    (column, "c"),
    (export, "e"),
]

for command, alias in COMMANDS:
    cli.add_command(command)
    cli.add_command(command, name=alias)


if __name__ == "__main__":
    cli()
