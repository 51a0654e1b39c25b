"""Serialize a merged rule set back into one compact stylesheet string."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = ["Assembler", "combine_declarations", "serialize_body"]

_STATEMENTS = ("@charset", "@import")


def serialize_body(declarations: Mapping[str, Any]) -> str:
    """Serialize the inside of a ``{...}`` group.

    String values become ``prop:value`` joined by ``;``; mapping values are
    nested rules and serialize as ``selector{...}``. No trailing ``;``.
    """
    out = ""
    for prop, value in declarations.items():
        if isinstance(value, str):
            out += f"{prop}:{value};"
        elif isinstance(value, Mapping):
            out += f"{prop}{{{serialize_body(value)}}}"
    return out[:-1] if out.endswith(";") else out


def _import_statement(value: str) -> str:
    if value.lower().startswith("url("):
        return f"@import {value};"
    return f'@import"{value}";'


def _rename_key(rules: dict[str, Any], old: str, new: str) -> dict[str, Any]:
    return {(new if key == old else key): value for key, value in rules.items()}


def combine_declarations(rules: Mapping[str, Any]) -> dict[str, Any]:
    """Join selectors whose serialized declarations are byte-identical.

    ``a{color:red}`` and ``b{color:red}`` become ``a, b{color:red}`` at the
    position of ``a``.
    """
    merged: dict[str, Any] = {}
    seen: dict[str, str] = {}
    for selector, rule in rules.items():
        if selector in _STATEMENTS or not isinstance(rule, Mapping):
            merged[selector] = rule
            continue
        body = serialize_body(rule)
        previous = seen.get(body)
        if previous is None:
            merged[selector] = rule
            seen[body] = selector
            continue
        combined = f"{previous}, {selector}"
        merged = _rename_key(merged, previous, combined)
        seen[body] = combined
    return merged


class Assembler:
    """Builds the final stylesheet from a merged rule set without mutating it."""

    def __init__(self, rules: Mapping[str, Any]) -> None:
        self._rules = rules
        self._stylesheet = ""

    def build(self) -> Assembler:
        parts: list[str] = []
        for selector, rule in combine_declarations(self._rules).items():
            if selector == "@charset":
                parts.append(f'@charset"{rule}";')
            elif selector == "@import":
                values = [rule] if isinstance(rule, str) else rule
                parts.extend(_import_statement(value) for value in values)
            elif isinstance(rule, Mapping):
                parts.append(f"{selector}{{{serialize_body(rule)}}}")
        self._stylesheet = "".join(parts)
        return self

    def to_string(self) -> str:
        return self._stylesheet

    def __str__(self) -> str:
        return self._stylesheet
