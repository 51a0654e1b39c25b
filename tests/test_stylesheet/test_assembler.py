"""Tests for the stylesheet assembler."""

from __future__ import annotations

import pytest

from assetmin.stylesheet.assembler import Assembler, combine_declarations, serialize_body
from assetmin.stylesheet.compiler import compile_declarations
from assetmin.stylesheet.parser import parse_stylesheet


def assemble(rules) -> str:
    return Assembler(rules).build().to_string()


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerializeBody:
    def test_flat(self) -> None:
        assert serialize_body({"color": "red", "margin": "0"}) == "color:red;margin:0"

    def test_nested(self) -> None:
        assert serialize_body({"a": {"color": "red"}, "b": {"x": "y"}}) == "a{color:red}b{x:y}"

    def test_empty(self) -> None:
        assert serialize_body({}) == ""


class TestAssembler:
    def test_no_separators_between_rules(self) -> None:
        assert assemble({"a": {"b": "c"}, "d": {"e": "f"}}) == "a{b:c}d{e:f}"

    def test_statements(self) -> None:
        rules = {"@charset": "utf-8", "@import": ["a.css", "url(b.css)"], "p": {"x": "y"}}
        assert assemble(rules) == '@charset"utf-8";@import"a.css";@import url(b.css);p{x:y}'

    def test_block(self) -> None:
        rules = {"@media print": {"a": {"color": "#000"}}}
        assert assemble(rules) == "@media print{a{color:#000}}"

    def test_str_matches_to_string(self) -> None:
        assembler = Assembler({"a": {"b": "c"}}).build()
        assert str(assembler) == assembler.to_string()

    def test_input_not_mutated(self) -> None:
        rules = {"a": {"color": "red"}, "b": {"color": "red"}}
        assemble(rules)
        assert list(rules) == ["a", "b"]


# ---------------------------------------------------------------------------
# Combining identical declaration sets
# ---------------------------------------------------------------------------


class TestCombineDeclarations:
    def test_identical_bodies_joined(self) -> None:
        combined = combine_declarations({"a": {"color": "red"}, "b": {"color": "red"}})
        assert combined == {"a, b": {"color": "red"}}

    def test_joined_at_first_position(self) -> None:
        combined = combine_declarations(
            {"a": {"x": "1"}, "m": {"y": "2"}, "b": {"x": "1"}, "c": {"x": "1"}}
        )
        assert list(combined) == ["a, b, c", "m"]

    def test_statements_never_combined(self) -> None:
        combined = combine_declarations({"@charset": "utf-8", "@import": ["x"]})
        assert combined == {"@charset": "utf-8", "@import": ["x"]}

    def test_single_block_for_identical_rules(self) -> None:
        css = assemble({"a": {"color": "red"}, "b": {"color": "red"}})
        assert css == "a, b{color:red}"


# ---------------------------------------------------------------------------
# Round trip
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "css",
    [
        "a{color:red}",
        "body{margin:0;padding:0}div{color:#000}",
        "a>b{x:y}.c{--v:1;color:red}",
    ],
)
def test_reassembly_is_stable(css: str) -> None:
    tree = parse_stylesheet(css)
    rules = {selector: compile_declarations(node) for selector, node in tree.items()}
    first = assemble(rules)
    reparsed = parse_stylesheet(first)
    second = assemble({s: compile_declarations(n) for s, n in reparsed.items()})
    assert first == css
    assert second == first
