"""Tests for markup comment and whitespace trimming."""

import pytest

from assetmin.markup import (
    CommentStyle,
    minify_html,
    minify_latte,
    minify_svg,
    squish,
    trim_comments,
    trim_whitespace,
)


# ---------------------------------------------------------------------------
# Comment styles
# ---------------------------------------------------------------------------


class TestTrimComments:
    @pytest.mark.parametrize(
        "style, comment",
        [
            (CommentStyle.DOCBLOCK, "/**\n * doc\n */"),
            (CommentStyle.SINGLE, "// note"),
            (CommentStyle.BLOCK, "/* block */"),
            (CommentStyle.CSS, "/* css */"),
            (CommentStyle.HTML, "<!-- html -->"),
            (CommentStyle.LATTE, "{* latte *}"),
            (CommentStyle.TWIG, "{# twig #}"),
            (CommentStyle.BLADE, "{{-- blade --}}"),
        ],
    )
    def test_whole_line_comment_removed(self, style, comment):
        text = f"before\n    {comment}\nafter\n"
        assert trim_comments(text, style) == "before\nafter\n"

    def test_inline_comment_kept(self):
        text = "<p>x</p> <!-- inline -->\n"
        assert trim_comments(text, CommentStyle.HTML) == text

    def test_style_by_name(self):
        assert trim_comments("{# t #}\nx", "twig") == "x"

    def test_all_styles_by_default(self):
        text = "<!-- a -->\n{* b *}\n// c\nkeep\n"
        assert trim_comments(text) == "keep\n"

    def test_unknown_style_rejected(self):
        with pytest.raises(ValueError):
            trim_comments("x", "cobol")


# ---------------------------------------------------------------------------
# Whitespace
# ---------------------------------------------------------------------------


class TestTrimWhitespace:
    def test_collapses_everything_by_default(self):
        assert trim_whitespace("  a \t b\n\n c  ") == "a b c"

    def test_keep_newlines(self):
        assert trim_whitespace("a  b\n\n\tc", remove_newlines=False) == "a b\n c"

    def test_keep_tabs(self):
        assert trim_whitespace("a\t\tb\nc", remove_tabs=False) == "a\t\tb c"

    def test_squish(self):
        assert squish("one\n   two\tthree") == "one two three"


# ---------------------------------------------------------------------------
# Minifiers
# ---------------------------------------------------------------------------


class TestMinifyHtml:
    def test_tags_tightened(self):
        html = "<div>\n  <!-- gone -->\n  <p> text </p>\n</div>\n"
        assert minify_html(html) == "<div><p>text</p></div>"

    def test_inline_element_spacing_kept(self):
        html = "<p>Hello <b>world</b> and <i>more</i></p>"
        assert minify_html(html) == html

    def test_space_between_inline_elements_kept(self):
        html = "<ul>\n  <li><a href='/'>Home</a>\n    <em>new</em></li>\n</ul>"
        assert minify_html(html) == "<ul><li><a href='/'>Home</a> <em>new</em></li></ul>"


class TestMinifySvg:
    SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 1 1">\n  <path d="M0 0"/>\n</svg>'

    def test_namespace_removed(self):
        out = minify_svg(self.SVG)
        assert "xmlns" not in out
        assert out.startswith('<svg viewBox="0 0 1 1">')

    def test_namespace_preserved_on_request(self):
        assert "xmlns=" in minify_svg(self.SVG, preserve_xml_namespace=True)


class TestMinifyLatte:
    def test_latte_and_block_comments(self):
        template = "{* hidden *}\n/* also hidden */\n<p>{$name}</p>\n"
        assert minify_latte(template) == "<p>{$name}</p>"
