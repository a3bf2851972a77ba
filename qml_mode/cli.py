"""
Command-line access to the QML mode.
Reindents QML files, reports the indentation of a single line, or lists the
highlight tokens of a file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from .config import ConfigError, ModeConfig, build_config
from .exceptions import SourceFileError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    normalize_filepath,
    read_document,
    write_document,
)
from .highlight import classify_document
from .indent import compute_indent, reindent_document
from .models import Document

__all__ = ["cli"]


def _load(filepath: str, **overrides: object) -> tuple[Path, ModeConfig, Document, os.stat_result]:
    base_dir = Path.cwd().resolve()
    try:
        config = build_config(Path(filepath).expanduser().parent, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        path = normalize_filepath(filepath, base_dir, config.file_extensions)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(path)
        enforce_file_size(initial_stat, max_file_size, path)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        document = read_document(path)
    except SourceFileError as error:
        raise click.ClickException(str(error)) from error

    return path, config, document, initial_stat


@click.group()
@click.version_option(package_name="qml-mode")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages to stderr")
def cli(verbose: bool = False):
    """
    QML editing support: bracket-depth indentation and syntax highlighting.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.option("--tab-width", type=int, help="Columns per indentation level")
@click.option(
    "--indent-tabs/--no-indent-tabs", default=None, help="Indent with tabs instead of spaces"
)
@click.option("--check", is_flag=True, help="Exit with status 1 if the file needs reindenting")
@click.option("--in-place", is_flag=True, help="Rewrite the file instead of printing it")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def indent(
    filepath: str,
    tab_width: int | None = None,
    indent_tabs: bool | None = None,
    check: bool = False,
    in_place: bool = False,
):
    """
    Reindent a QML file.

    Prints the reindented file to stdout unless `--check` or `--in-place` is
    given.

    Raises:
        click.BadParameter: If the path or configuration overrides are invalid.
        click.ClickException: If the file cannot be read or safely rewritten.

    Examples:
        qml-mode indent main.qml --tab-width 4 --in-place
    """
    path, config, document, initial_stat = _load(
        filepath, tab_width=tab_width, indent_tabs_mode=indent_tabs
    )
    reindented = reindent_document(document, config)
    changed = reindented.lines != document.lines

    if check:
        if changed:
            click.echo(f"would reindent {path}")
            click.get_current_context().exit(1)
        return

    if not in_place:
        click.echo(reindented.to_text(), nl=False)
        return

    if not changed:
        return

    try:
        post_read_stat = collect_file_stat(path)
        ensure_file_unchanged(initial_stat, post_read_stat, path)
        write_document(
            reindented,
            path,
            post_read_stat,
            warn=lambda message: click.echo(message, err=True),
        )
    except IOError as error:
        raise click.ClickException(str(error)) from error


@cli.command()
@click.option("--tab-width", type=int, help="Columns per indentation level")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
@click.argument("line", type=click.IntRange(min=1))
def compute(filepath: str, line: int, tab_width: int | None = None):
    """
    Print the column LINE of FILEPATH should be indented to.
    """
    _, config, document, _ = _load(filepath, tab_width=tab_width)
    if line > len(document):
        raise click.BadParameter(
            f"{filepath} has {len(document)} lines", param_hint="'LINE'"
        )
    click.echo(compute_indent(document, line, config.tab_width))


@cli.command()
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def highlight(filepath: str):
    """
    List highlight tokens as `line:start-end category text`.
    """
    _, _, document, _ = _load(filepath)
    for line_number, tokens in classify_document(document).items():
        for token in tokens:
            click.echo(
                f"{line_number}:{token.start}-{token.end} {token.category.name.lower()} {token.text}"
            )


if __name__ == "__main__":
    cli()
