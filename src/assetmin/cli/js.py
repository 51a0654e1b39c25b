"""CLI command: assetmin js -- minify JavaScript."""

from __future__ import annotations

import sys

import click

from assetmin.cli._common import emit, fail, show_report
from assetmin.config import ScriptConfig
from assetmin.errors import MinifyError
from assetmin.minifier import ScriptMinifier
from assetmin.remote import RemoteCompressor


@click.command()
@click.argument("sources", nargs=-1, required=True)
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write to FILE instead of stdout.")
@click.option(
    "--flagged-comments/--no-flagged-comments",
    default=True,
    help="Keep /*! ... */ license comments.",
)
@click.option("--compress", is_flag=True, help="Further compress through the remote minifier API.")
@click.option("--report", "show", is_flag=True, help="Print a size report to stderr.")
def js(
    sources: tuple[str, ...],
    output: str | None,
    flagged_comments: bool,
    compress: bool,
    show: bool,
) -> None:
    """Minify one or more scripts into a single output.

    Each SOURCE is a .js file, an http(s) URL or literal code.
    """
    compressor = RemoteCompressor() if compress else None
    minifier = ScriptMinifier(
        sources,
        config=ScriptConfig(flagged_comments=flagged_comments),
        compressor=compressor,
    )
    try:
        if not minifier.sources:
            click.echo("Error: no valid script sources", err=True)
            sys.exit(1)
        result = minifier.minify()
    except MinifyError as exc:
        fail(exc)
        return
    finally:
        minifier.close()
        if compressor is not None:
            compressor.close()

    emit(result.string, output)
    if show:
        show_report(result)
