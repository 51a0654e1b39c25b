"""Stylesheet compiler: merges many CSS sources into one ordered stylesheet.

The phases run in a fixed order and each returns the compiler::

    css = (
        Compiler({"base.css": base, "theme.css": theme})
        .parse_enqueued()
        .merge_rules()
        .generate_stylesheet()
        .css
    )

Later sources override same-named properties of earlier ones. The merged rule
set is reordered into buckets before serialization: ``@charset``, ``@import``,
``:root``, ``[theme=...]`` selectors, ``html``/``body``, other simple selectors
sorted by name, then everything else in its original order.
"""

from __future__ import annotations

import hashlib
import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from assetmin.config import CompilerConfig
from assetmin.errors import CompilerStateError, ConflictError
from assetmin.stylesheet.assembler import Assembler
from assetmin.stylesheet.model import Block, Rule, Statement
from assetmin.stylesheet.parser import Parser
from assetmin.stylesheet.preminify import minify_css

__all__ = ["Compiler", "merge_declarations", "hoist_custom_properties"]

_THEME_RE = re.compile(r"\[theme=.+?]")
_SIMPLE_SELECTOR_RE = re.compile(r"[a-zA-Z][^.:>~]*")
_STATEMENT_KEYS = ("@charset", "@import")


def compile_declarations(node: Rule | Block) -> dict[str, Any]:
    """Turn a parsed node into plain nested dicts."""
    if isinstance(node, Rule):
        return dict(node.declarations)
    return {selector: compile_declarations(child) for selector, child in node.declarations.items()}


def merge_declarations(
    existing: Mapping[str, Any], incoming: Mapping[str, Any]
) -> dict[str, Any]:
    """Overlay *incoming* on *existing*.

    Same-named properties take the incoming value in their original position;
    new ones are appended. Nested rule groups are merged per selector.
    """
    merged = dict(existing)
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_declarations(current, value)
        else:
            merged[key] = value
    return merged


def hoist_custom_properties(declarations: Mapping[str, Any]) -> dict[str, Any]:
    """Move ``--custom`` properties ahead of standard ones, keeping relative order."""
    variables: dict[str, Any] = {}
    properties: dict[str, Any] = {}
    for key, value in declarations.items():
        if isinstance(value, Mapping):
            value = hoist_custom_properties(value)
        if key.startswith("--"):
            variables[key] = value
        else:
            properties[key] = value
    return {**variables, **properties}


def selector_signature(selector: str) -> str:
    """Order-insensitive hash of a comma separated selector list."""
    parts = sorted(part.strip() for part in selector.split(","))
    return hashlib.sha256(json.dumps(parts).encode()).hexdigest()


class Compiler:
    """Parses, merges and assembles a set of named stylesheet sources."""

    def __init__(
        self,
        sources: Mapping[str, str] | str | None = None,
        *,
        logger: logging.Logger | None = None,
        config: CompilerConfig | None = None,
    ) -> None:
        self.config = config or CompilerConfig()
        self.enqueued: dict[str, str] = {}
        self.ast: dict[str, dict[str, Rule | Block | Statement]] = {}
        self.rules: dict[str, Any] = {}
        self.css: str | None = None
        self._log = logger or logging.getLogger("assetmin.stylesheet")
        self._parsed = False
        self._merged = False
        if sources:
            self.ingest(sources)

    @property
    def strict(self) -> bool:
        return self.config.strict

    # --- phases --------------------------------------------------------------

    def ingest(self, sources: Mapping[str, str] | str) -> Compiler:
        """Pre-minify and enqueue sources; empty results are dropped with a notice."""
        if isinstance(sources, str):
            sources = {str(len(self.enqueued)): sources}
        for key, text in sources.items():
            css = minify_css(text)
            if not css:
                self._log.info("The %s stylesheet is empty after minification.", key)
                continue
            self.enqueued[key] = css
        return self

    def parse_enqueued(self) -> Compiler:
        for key, css in self.enqueued.items():
            self.ast[key] = Parser(css, key, limits=self.config.limits).rules()
        self._parsed = True
        return self

    def merge_rules(self) -> Compiler:
        if not self._parsed:
            raise CompilerStateError("merge_rules() called before parse_enqueued()")

        for source, tree in self.ast.items():
            for selector, node in tree.items():
                if isinstance(node, Statement):
                    self._handle_statement(node, source)
                    continue
                self.rules[selector] = merge_declarations(
                    self.rules.get(selector, {}), compile_declarations(node)
                )

        self._deduplicate()
        self._sort_rules()
        self._merged = True
        return self

    def generate_stylesheet(self) -> Compiler:
        if self.css is not None:
            return self
        if not self._merged:
            raise CompilerStateError("generate_stylesheet() called before merge_rules()")
        self.css = Assembler(self.rules).build().to_string()
        return self

    def compile(self) -> str:
        """Run every phase and return the stylesheet."""
        if not self._parsed:
            self.parse_enqueued()
        if not self._merged:
            self.merge_rules()
        self.generate_stylesheet()
        return self.css or ""

    # --- merge helpers -------------------------------------------------------

    def _handle_statement(self, statement: Statement, source: str) -> None:
        if statement.identifier == "@charset":
            charset = statement.rule.lower()
            current = self.rules.get("@charset")
            if current is not None and current != charset and self.strict:
                raise ConflictError(
                    "CSS compiler encountered conflicting @charset rules: "
                    f"{current!r} and {charset!r} (from {source})"
                )
            self.rules.setdefault("@charset", charset)
        elif statement.identifier == "@import":
            self.rules.setdefault("@import", []).append(statement.rule)
        else:
            self._log.warning(
                "Dropping unsupported %s statement from %s", statement.identifier, source
            )

    def _deduplicate(self) -> None:
        """Fold selector lists that only differ in order (``a,b`` / ``b,a``) into the first."""
        first_seen: dict[str, str] = {}
        for selector in list(self.rules):
            if selector in _STATEMENT_KEYS or "," not in selector:
                continue
            signature = selector_signature(selector)
            original = first_seen.get(signature)
            if original is None:
                first_seen[signature] = selector
                continue
            rule = self.rules.pop(selector)
            if self.rules[original] != rule:
                self.rules[original] = merge_declarations(self.rules[original], rule)

    def _sort_rules(self) -> None:
        head: dict[str, Any] = {"@charset": None, "@import": None, ":root": None}
        priority: dict[str, Any] = {"html": None, "body": None}
        themes: dict[str, Any] = {}
        html: dict[str, Any] = {}
        body: dict[str, Any] = {}
        simple: dict[str, Any] = {}
        rest: dict[str, Any] = {}

        for selector, rule in self.rules.items():
            if selector in head:
                head[selector] = rule
            elif selector in priority:
                priority[selector] = rule
            elif _THEME_RE.search(selector):
                themes[selector] = rule
            elif _SIMPLE_SELECTOR_RE.fullmatch(selector):
                if selector.startswith("html"):
                    html[selector] = rule
                elif selector.startswith("body"):
                    body[selector] = rule
                else:
                    simple[selector] = rule
            else:
                rest[selector] = rule

        ordered = {
            **head,
            **themes,
            **priority,
            **html,
            **body,
            **dict(sorted(simple.items())),
            **rest,
        }
        self.rules = {
            selector: hoist_custom_properties(rule) if isinstance(rule, Mapping) else rule
            for selector, rule in ordered.items()
            if rule
        }
