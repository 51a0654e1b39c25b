"""CLI command: assetmin trim -- strip comments and whitespace from markup."""

from __future__ import annotations

from pathlib import Path

import click

from assetmin.cli._common import emit, fail
from assetmin.errors import SourceError
from assetmin.markup import CommentStyle, minify_html, minify_latte, minify_svg, trim_comments

_MINIFIERS = {"html": minify_html, "svg": minify_svg, "latte": minify_latte}
STYLES = [*_MINIFIERS, *(s.value for s in CommentStyle if s.value not in _MINIFIERS)]


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--style", type=click.Choice(STYLES), required=True, help="Markup flavour or comment style.")
@click.option("--keep-xmlns", is_flag=True, help="Keep the xmlns attribute when --style svg.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write to FILE instead of stdout.")
def trim(file: str, style: str, keep_xmlns: bool, output: str | None) -> None:
    """Trim FILE.

    html, svg and latte run the full markup minifier; any other style only
    removes whole-line comments of that kind.
    """
    try:
        text = Path(file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        fail(SourceError(f"Unable to read {file}: {exc}", source=file, cause=exc))
        return
    if style == "svg":
        result = minify_svg(text, preserve_xml_namespace=keep_xmlns)
    elif style in _MINIFIERS:
        result = _MINIFIERS[style](text)
    else:
        result = trim_comments(text, CommentStyle(style))
    emit(result, output)
