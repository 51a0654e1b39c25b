"""Regex-based trimming for markup and template text.

Comment patterns match whole lines only: from the start of a line (optionally
indented) through the closing delimiter and the line break that follows it.
Inline comments are left alone.
"""

from __future__ import annotations

import re
from enum import Enum

__all__ = [
    "CommentStyle",
    "minify_html",
    "minify_latte",
    "minify_svg",
    "squish",
    "trim_comments",
    "trim_whitespace",
]

_INDENT = r"^[ \t]*?"
_LINEBREAK = r"(?:\r\n|\r|\n)"


class CommentStyle(Enum):
    """Comment syntaxes that :func:`trim_comments` can remove."""

    DOCBLOCK = "docblock"
    SINGLE = "single"
    BLOCK = "block"
    CSS = "css"
    HTML = "html"
    LATTE = "latte"
    TWIG = "twig"
    BLADE = "blade"

    @property
    def pattern(self) -> re.Pattern[str]:
        return _COMMENT_PATTERNS[self]


_COMMENT_PATTERNS: dict[CommentStyle, re.Pattern[str]] = {
    CommentStyle.DOCBLOCK: re.compile(_INDENT + r"/\*\*.*?\*/" + _LINEBREAK, re.M | re.S),
    CommentStyle.SINGLE: re.compile(_INDENT + r"//.+?" + _LINEBREAK, re.M),
    CommentStyle.BLOCK: re.compile(_INDENT + r"/\*.*?\*/" + _LINEBREAK, re.M | re.S),
    CommentStyle.CSS: re.compile(_INDENT + r"/\*.*?\*/" + _LINEBREAK, re.M | re.S),
    CommentStyle.HTML: re.compile(_INDENT + r"<!--.*?-->" + _LINEBREAK, re.M | re.S),
    CommentStyle.LATTE: re.compile(_INDENT + r"\{\*.*?\*\}" + _LINEBREAK, re.M | re.S),
    CommentStyle.TWIG: re.compile(_INDENT + r"\{#.*?#\}" + _LINEBREAK, re.M | re.S),
    CommentStyle.BLADE: re.compile(_INDENT + r"\{\{--.*?--\}\}" + _LINEBREAK, re.M | re.S),
}

_EMPTY_LINE_RE = re.compile(r"^\s*?$\n", re.M)
_TAG_SPACE_RE = re.compile(r"(?<=>)\s+|\s+(?=<)")
_TAG_NAME_RE = re.compile(r"</?([a-zA-Z][\w-]*)")
# Elements whose surrounding spaces are part of the rendered text.
_INLINE_TAGS = frozenset(
    "a abbr b bdi bdo button cite code em i img kbd label mark q s samp small "
    "span strong sub sup time u var".split()
)
_XMLNS_RE = re.compile(r'(<svg[^>]*?)\s+xmlns="[^"]*"')


def trim_comments(text: str, *styles: CommentStyle | str) -> str:
    """Remove whole-line comments of the given styles (all styles when none given)."""
    selected = [CommentStyle(s) for s in styles] or list(CommentStyle)
    for style in selected:
        text = style.pattern.sub("", text)
    return text


def trim_whitespace(
    text: str, *, remove_tabs: bool = True, remove_newlines: bool = True
) -> str:
    """Collapse whitespace and drop empty lines.

    With both flags set every whitespace run becomes one space. Otherwise tabs
    and/or line breaks are turned into spaces and consecutive spaces collapse.
    """
    if remove_tabs and remove_newlines:
        text = re.sub(r"\s+", " ", text)
    else:
        if remove_tabs:
            text = text.replace("\t", " ")
        if remove_newlines:
            text = re.sub(_LINEBREAK, " ", text)
        text = re.sub(r" +", " ", text)
    text = _EMPTY_LINE_RE.sub("", text)
    return text.strip()


def squish(text: str) -> str:
    """Reduce *text* to a single line with single spaces."""
    return trim_whitespace(text)


def _is_inline(tag: str) -> bool:
    match = _TAG_NAME_RE.match(tag)
    return bool(match) and match.group(1).lower() in _INLINE_TAGS


def _trim_tag_space(html: str) -> str:
    """Drop whitespace next to tags unless a neighbouring tag is inline."""

    def replace(match: re.Match[str]) -> str:
        start, end = match.span()
        touching = []
        if start and html[start - 1] == ">":
            touching.append(html[html.rfind("<", 0, start) : start])
        if end < len(html) and html[end] == "<":
            touching.append(html[end : html.find(">", end) + 1])
        return " " if any(_is_inline(tag) for tag in touching) else ""

    return _TAG_SPACE_RE.sub(replace, html)


def minify_html(html: str) -> str:
    """Remove whole-line comments and collapse whitespace.

    Spaces next to block-level tags go; a space touching an inline element
    such as ``<b>`` or ``</i>`` is kept, so ``Hello <b>world</b> and`` renders
    unchanged.
    """
    html = trim_comments(html, CommentStyle.HTML)
    html = trim_whitespace(html)
    return _trim_tag_space(html)


def minify_svg(svg: str, *, preserve_xml_namespace: bool = False) -> str:
    svg = trim_comments(svg, CommentStyle.HTML)
    svg = trim_whitespace(svg)
    if not preserve_xml_namespace:
        svg = _XMLNS_RE.sub(r"\1", svg)
    return svg


def minify_latte(template: str) -> str:
    template = trim_comments(template, CommentStyle.BLOCK, CommentStyle.LATTE)
    return trim_whitespace(template)
