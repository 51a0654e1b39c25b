"""Regex pre-minification pass applied to every raw stylesheet before parsing.

The substitutions run in a fixed order; later ones assume the earlier ones
already stripped comments and collapsed whitespace.
"""

from __future__ import annotations

import re

__all__ = ["minify_css"]

_STRING = r""""(?:[^"\\]++|\\.)*+"|'(?:[^'\\]++|\\.)*+'"""
_COMMENT = r"/\*(?>.*?\*/)"

_SUBSTITUTIONS: list[tuple[re.Pattern[str], str]] = [
    # comments, unless flagged /*! ... */; leading and trailing whitespace
    (
        re.compile(rf"({_STRING})|/\*(?!!)(?>.*?\*/)|^\s*|\s*$", re.S),
        r"\1",
    ),
    # insignificant whitespace
    (
        re.compile(
            rf"({_STRING}|{_COMMENT})"
            r"|\s*+;\s*+(})\s*+"
            r"|\s*+([*$~^|]?+=|[{};,>~]|\s(?![0-9.])|!important\b)\s*+"
            r"|([\[(:])\s++"
            r"|\s++([\])])"
            rf"|\s++(:)\s*+(?!(?>[^{{}}\"']++|{_STRING})*+\{{)"
            r"|^\s++|\s++\Z|(\s)\s+",
            re.S | re.I,
        ),
        r"\1\2\3\4\5\6\7",
    ),
    # 0px, 0em, 0% ... -> 0
    (
        re.compile(r"(?<=[\s:])(0)(cm|em|ex|in|mm|pc|pt|px|vh|vw|%)", re.S | re.I),
        r"\1",
    ),
    # :0 0 0 0 -> :0
    (
        re.compile(r":(0\s+0|0\s+0\s+0\s+0)(?=[;}]|!important)", re.I),
        ":0",
    ),
    # background-position:0 -> background-position:0 0
    (
        re.compile(r"(background-position):0(?=[;}])", re.S | re.I),
        r"\1:0 0",
    ),
    # 0.6 -> .6 after ':', ',', '-' or whitespace
    (
        re.compile(r"(?<=[\s:,\-])0+\.(\d+)", re.S),
        r".\1",
    ),
    # "simple-value" -> simple-value, except for content:
    (
        re.compile(
            rf"({_COMMENT})|(?<!content:)(['\"])([a-z_][a-z0-9\-_]*?)\2(?=[\s{{}}\];,])",
            re.S | re.I,
        ),
        r"\1\3",
    ),
    # url("x") -> url(x)
    (
        re.compile(rf"({_COMMENT})|(\burl\()(['\"])([^\s]+?)\3(\))", re.S | re.I),
        r"\1\2\4\5",
    ),
    # #aabbcc -> #abc
    (
        re.compile(r"(?<=[\s:,\-]#)([a-f0-6]+)\1([a-f0-6]+)\2([a-f0-6]+)\3", re.I),
        r"\1\2\3",
    ),
    # border:none / outline:none -> :0
    (
        re.compile(r"(?<=[{;])(border|outline):none(?=[;}!])"),
        r"\1:0",
    ),
    # empty selector blocks
    (
        re.compile(rf"({_COMMENT})|(^|[{{}}])(?:[^\s{{}}]+)\{{\}}", re.S),
        r"\1\2",
    ),
]


def minify_css(source: str) -> str:
    """Strip comments and insignificant whitespace from raw CSS.

    Returns an empty string for blank input.
    """
    if not source.strip():
        return ""
    for pattern, replacement in _SUBSTITUTIONS:
        source = pattern.sub(replacement, source)
    return source
