"""CLI command: assetmin css -- merge stylesheets into one minified file."""

from __future__ import annotations

import sys

import click

from assetmin.cli._common import emit, fail, show_report
from assetmin.config import CompilerConfig
from assetmin.errors import MinifyError
from assetmin.minifier import StylesheetMinifier


@click.command()
@click.argument("sources", nargs=-1, required=True)
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write to FILE instead of stdout.")
@click.option("--strict", is_flag=True, help="Fail on conflicting @charset rules.")
@click.option("--report", "show", is_flag=True, help="Print a size report to stderr.")
def css(sources: tuple[str, ...], output: str | None, strict: bool, show: bool) -> None:
    """Merge and minify stylesheets.

    Each SOURCE is a .css file, an http(s) URL or literal CSS. Later sources
    override properties set by earlier ones.
    """
    minifier = StylesheetMinifier(sources, config=CompilerConfig(strict=strict))
    try:
        if not minifier.sources:
            click.echo("Error: no valid stylesheet sources", err=True)
            sys.exit(1)
        result = minifier.minify()
    except MinifyError as exc:
        fail(exc)
        return
    finally:
        minifier.close()

    emit(result.string, output)
    if show:
        show_report(result)
