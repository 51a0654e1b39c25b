"""Hand-written parser for pre-minified CSS.

The parser consumes its input left to right. Each step looks at which of the
markers ``@ { } ;`` comes first in the unparsed text:

    @charset "utf-8";            ';' before '{'  -> Statement
    body{color:#000}             '{' first       -> Rule
    @media print{a{color:#000}}  nested braces   -> Block (parsed recursively)

Input is expected to come from :func:`assetmin.stylesheet.preminify.minify_css`,
so comments are gone and whitespace is already collapsed.
"""

from __future__ import annotations

import logging

from assetmin.config import ParserLimits
from assetmin.errors import StructuralParseError
from assetmin.stylesheet.model import Block, Node, Rule, Statement

__all__ = ["Parser", "parse_stylesheet"]

_MARKERS = ("@", "{", "}", ";")

logger = logging.getLogger("assetmin.stylesheet")


def _check_balance(css: str) -> None:
    if css.count("{") != css.count("}"):
        raise StructuralParseError(
            "Provided CSS has an uneven block distribution: "
            f"{css.count('{')} '{{' vs {css.count('}')} '}}' in {css[:120]!r}",
            fragment=css,
        )


def _matching_brace(css: str, open_at: int) -> int:
    """Return the index of the ``}`` closing the ``{`` at *open_at*, or -1."""
    depth = 0
    for index in range(open_at, len(css)):
        char = css[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


class Parser:
    """Single-use parser over one CSS string.

    The result is available from :meth:`rules`. A parser that stopped on the
    iteration failsafe with text left over reports ``truncated = True``.
    """

    def __init__(
        self,
        css: str,
        key: str | None = None,
        *,
        limits: ParserLimits | None = None,
        depth: int = 0,
    ) -> None:
        self.key = key
        self.limits = limits or ParserLimits()
        self.depth = depth
        self.truncated = False
        self._css = css
        self._iteration = 0
        self._rules: dict[str, Node] = {}

        if depth > self.limits.max_depth:
            raise StructuralParseError(
                f"CSS nesting exceeds the maximum depth of {self.limits.max_depth}",
                fragment=css[:120],
            )
        _check_balance(css)
        self._run()

    def rules(self) -> dict[str, Node]:
        return self._rules

    # --- matching ------------------------------------------------------------

    def _run(self) -> None:
        while self._css:
            self._iteration += 1
            if self._iteration > self.limits.failsafe:
                self.truncated = True
                logger.warning(
                    "Stylesheet parser failsafe of %d iterations reached for %s; "
                    "%d characters left unparsed",
                    self.limits.failsafe,
                    self.key or "<inline>",
                    len(self._css),
                )
                return
            if not self._match_next():
                return

    def _next_marker(self) -> str | None:
        """Return whichever marker appears first after the head of the text.

        A marker at offset 0 is never counted: the head character is the
        start of the token being matched (``@charset``) rather than its end.
        """
        found = {}
        for marker in _MARKERS:
            offset = self._css.find(marker, 1)
            if offset != -1:
                found[marker] = offset
        if not found:
            return None
        return min(found, key=found.__getitem__)

    def _match_next(self) -> bool:
        if self._next_marker() == ";":
            end = self._css.index(";", 1) + 1
            statement = self._consume(end)
            identifier, _, rule = statement.partition(" ")
            node = Statement.from_text(identifier, rule)
            previous = self._rules.get(node.identifier)
            if isinstance(previous, Statement) and previous.rule != node.rule:
                logger.warning(
                    "%s %r in %s replaces the earlier %r; only one per source is kept",
                    node.identifier,
                    node.rule,
                    self.key or "<inline>",
                    previous.rule,
                )
            self._rules[node.identifier] = node
            return True

        group = self._extract_rule_group()
        if group is None:
            return False

        selector, _, body = group.partition("{")
        body = body[: body.rindex("}")]

        if "{" not in body:
            node = Rule.from_text(selector, body)
        else:
            nested = Parser(body, self.key, limits=self.limits, depth=self.depth + 1)
            self.truncated = self.truncated or nested.truncated
            node = Block(selector=selector.strip(), declarations=nested.rules())
        self._rules[node.selector] = node
        return True

    def _extract_rule_group(self) -> str | None:
        """Consume ``selector{...}`` with balanced braces from the head of the text."""
        open_at = self._css.find("{")
        if open_at < 1 or not self._css[:open_at].strip():
            return None
        close_at = _matching_brace(self._css, open_at)
        if close_at == -1:
            return None
        return self._consume(close_at + 1)

    def _consume(self, length: int) -> str:
        head, self._css = self._css[:length], self._css[length:]
        return head


def parse_stylesheet(
    css: str, key: str | None = None, *, limits: ParserLimits | None = None
) -> dict[str, Node]:
    """Parse one pre-minified CSS string into an ordered selector -> node mapping."""
    return Parser(css, key, limits=limits).rules()
