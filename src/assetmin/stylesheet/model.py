"""Stylesheet model: Rule, Block, and Statement nodes.

Nodes are frozen; their ``declarations`` are read-only mapping views over a
private copy of whatever mapping the node was built from.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from assetmin.errors import StructuralParseError

# Stands in for ``\:`` while a declaration is split on ``:``.
_ESCAPED_COLON = "\ue000"

_COMBINATOR_RE = re.compile(r"\s*\+\s*")

# A ``0.`` that starts a number: ``0.5em`` but not ``10.5em``.
_LEADING_ZERO_RE = re.compile(r"(?<![\w.])0\.(?=\d)")

_STATEMENT_TRIM = " \n\r\t\v\0\"';"


def normalize_selector(raw: str) -> str:
    """Trim a selector and collapse whitespace around ``+`` combinators."""
    return _COMBINATOR_RE.sub("+", raw.strip())


def split_declarations(body: str) -> list[str]:
    """Split *body* on ``;`` outside quoted strings and parentheses.

    ``url(data:image/png;base64,...)`` and ``content:";"`` stay in one piece.
    """
    segments: list[str] = []
    start = depth = 0
    quote = None
    index = 0
    while index < len(body):
        char = body[index]
        if quote:
            if char == "\\":
                index += 1
            elif char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")" and depth:
            depth -= 1
        elif char == ";" and not depth:
            segments.append(body[start:index])
            start = index + 1
        index += 1
    segments.append(body[start:])
    return segments


def parse_declarations(body: str) -> dict[str, str]:
    """Split a flat ``prop:value;prop:value`` body into an ordered mapping.

    Raises StructuralParseError for a segment without a ``:`` separator.
    """
    segments = [
        s for s in split_declarations(body.strip(" \n\r\t\v\0{}")) if s.strip()
    ]
    declarations: dict[str, str] = {}
    for segment in segments:
        if ":" not in segment:
            raise StructuralParseError(
                f"Error parsing stylesheet: declaration {segment!r} has no ':' "
                f"in {segments!r}",
                fragment=segment,
            )
        segment = segment.replace("\\:", _ESCAPED_COLON)
        prop, _, value = segment.partition(":")
        value = _LEADING_ZERO_RE.sub(".", value)
        declarations[prop.replace(_ESCAPED_COLON, "\\:").strip()] = value.replace(
            _ESCAPED_COLON, "\\:"
        ).strip()
    return declarations


@dataclass(frozen=True)
class Rule:
    """A selector with flat property declarations.

    ```
    selector {
        property: value;
    }
    ```
    """

    selector: str
    declarations: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "declarations", MappingProxyType(dict(self.declarations)))

    @classmethod
    def from_text(cls, selector: str, body: str) -> Rule:
        return cls(
            selector=normalize_selector(selector),
            declarations=parse_declarations(body),
        )


@dataclass(frozen=True)
class Block:
    """A selector whose body holds nested rules, e.g. ``@media``."""

    selector: str
    declarations: Mapping[str, Rule | Block]

    def __post_init__(self) -> None:
        object.__setattr__(self, "declarations", MappingProxyType(dict(self.declarations)))


@dataclass(frozen=True)
class Statement:
    """A body-less at-rule terminated by ``;``, e.g. ``@charset "utf-8";``."""

    identifier: str  # lowercased, starts with "@"
    rule: str

    def __post_init__(self) -> None:
        if not self.identifier.startswith("@"):
            raise StructuralParseError(
                f'CSS identifier must start with "@", got {self.identifier!r}',
                fragment=self.identifier,
            )

    @classmethod
    def from_text(cls, identifier: str, rule: str) -> Statement:
        return cls(
            identifier=identifier.strip(" \n\r\t\v\0;").lower(),
            rule=rule.strip(_STATEMENT_TRIM),
        )


Node = Rule | Block | Statement
