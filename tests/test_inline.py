"""Tests for inline.py.

Tests:
- Markdown -> HTML substitutions and their ordering
- HTML -> Markdown conversion over parsed fragments
- Outer element extraction
"""

from __future__ import annotations

import warnings

import pytest
from bs4 import MarkupResemblesLocatorWarning

from blockmark.inline import extract_inner_html, html_to_markdown, markdown_to_html


# =============================================================================
# Markdown -> HTML
# =============================================================================


class TestMarkdownToHtml:
    """Test inline Markdown to HTML conversion."""

    @pytest.mark.parametrize("source", ["**x**", "__x__"])
    def test_bold(self, source: str) -> None:
        """Both bold forms produce <strong>."""
        assert markdown_to_html(source) == "<strong>x</strong>"

    @pytest.mark.parametrize("source", ["*x*", "_x_"])
    def test_italic(self, source: str) -> None:
        """Both italic forms produce <em>."""
        assert markdown_to_html(source) == "<em>x</em>"

    @pytest.mark.parametrize("source", ["***x***", "___x___"])
    def test_bold_italic(self, source: str) -> None:
        """Triple markers produce nested strong/em."""
        assert markdown_to_html(source) == "<strong><em>x</em></strong>"

    def test_inline_code(self) -> None:
        assert markdown_to_html("Use `print()` here") == "Use <code>print()</code> here"

    def test_image(self) -> None:
        """Images are converted before links."""
        result = markdown_to_html("![Alt](https://example.com/a.png)")

        assert result == '<img src="https://example.com/a.png" alt="Alt" />'

    def test_link(self) -> None:
        result = markdown_to_html("Visit [Example](https://example.com) now")

        assert result == 'Visit <a href="https://example.com">Example</a> now'

    def test_link_url_is_escaped(self) -> None:
        """Query strings survive as valid attribute text."""
        result = markdown_to_html("[x](https://e.com/?a=1&region=eu)")

        assert result == '<a href="https://e.com/?a=1&amp;region=eu">x</a>'

    def test_image_url_is_escaped(self) -> None:
        result = markdown_to_html('![a](https://e.com/i.png?w=1&copy=2"x)')

        assert result == '<img src="https://e.com/i.png?w=1&amp;copy=2&quot;x" alt="a" />'

    def test_non_greedy_matching(self) -> None:
        """Each span matches the shortest enclosed text."""
        result = markdown_to_html("**a** and **b**")

        assert result == "<strong>a</strong> and <strong>b</strong>"

    def test_mixed_formatting(self) -> None:
        result = markdown_to_html("**bold**, *italic* and `code`")

        assert result == "<strong>bold</strong>, <em>italic</em> and <code>code</code>"

    @pytest.mark.parametrize(
        "source",
        [
            "2 * 3 = 6",
            "**unterminated",
            "[text without url]",
            "`",
            "plain text",
        ],
    )
    def test_unmatched_syntax_is_literal(self, source: str) -> None:
        """Partial syntax passes through unchanged."""
        assert markdown_to_html(source) == source

    def test_spans_do_not_cross_lines(self) -> None:
        assert markdown_to_html("*a\nb*") == "*a\nb*"

    def test_empty_string(self) -> None:
        assert markdown_to_html("") == ""


# =============================================================================
# HTML -> Markdown
# =============================================================================


class TestHtmlToMarkdown:
    """Test inline HTML to Markdown conversion."""

    @pytest.mark.parametrize("html", ["<strong>x</strong>", "<b>x</b>"])
    def test_bold(self, html: str) -> None:
        assert html_to_markdown(html) == "**x**"

    @pytest.mark.parametrize("html", ["<em>x</em>", "<i>x</i>"])
    def test_italic(self, html: str) -> None:
        assert html_to_markdown(html) == "*x*"

    def test_nested_bold_italic(self) -> None:
        assert html_to_markdown("<strong><em>x</em></strong>") == "***x***"

    def test_inline_code(self) -> None:
        assert html_to_markdown("Use the <code>convert()</code> function.") == (
            "Use the `convert()` function."
        )

    def test_link(self) -> None:
        result = html_to_markdown('Visit <a href="https://example.com">Example</a> site.')

        assert result == "Visit [Example](https://example.com) site."

    def test_link_with_extra_attributes(self) -> None:
        result = html_to_markdown(
            '<a class="x" href="https://example.com" rel="nofollow">Link</a>'
        )

        assert result == "[Link](https://example.com)"

    def test_link_without_href_keeps_text(self) -> None:
        assert html_to_markdown("<a>Anchor</a>") == "Anchor"

    @pytest.mark.parametrize(
        "html",
        [
            '<img src="https://example.com/img.png" alt="Test">',
            '<img alt="Test" src="https://example.com/img.png" />',
            '<img class="wide" alt="Test" width="10" src="https://example.com/img.png">',
        ],
    )
    def test_image_attribute_order(self, html: str) -> None:
        """Images convert regardless of attribute order."""
        assert html_to_markdown(html) == "![Test](https://example.com/img.png)"

    def test_image_without_alt_has_empty_alt(self) -> None:
        assert html_to_markdown('<img src="x.png">') == "![](x.png)"

    def test_image_without_src_is_dropped(self) -> None:
        assert html_to_markdown('Before <img alt="x"> after') == "Before  after"

    @pytest.mark.parametrize("br", ["<br>", "<br/>", "<br />", "<BR>"])
    def test_line_breaks(self, br: str) -> None:
        assert html_to_markdown(f"Line one{br}Line two") == "Line one\nLine two"

    def test_unknown_tags_are_stripped(self) -> None:
        result = html_to_markdown('<span class="x">kept</span> <mark>text</mark>')

        assert result == "kept text"

    def test_entities_are_decoded(self) -> None:
        assert html_to_markdown("Tom &amp; Jerry &lt;3 &gt; &quot;q&quot;") == (
            'Tom & Jerry <3 > "q"'
        )

    def test_unterminated_reference_in_href_kept(self) -> None:
        result = html_to_markdown('<a href="https://e.com/?a=1&region=eu">x</a>')

        assert result == "[x](https://e.com/?a=1&region=eu)"

    def test_unterminated_reference_in_src_kept(self) -> None:
        result = html_to_markdown('<img src="https://e.com/i.png?w=1&copy=2" alt="a">')

        assert result == "![a](https://e.com/i.png?w=1&copy=2)"

    @pytest.mark.parametrize(
        ("html", "expected"),
        [
            ("&copy 2024", "&copy 2024"),
            ("&copy; 2024", "© 2024"),
            ("AT&T", "AT&T"),
            ("&#169 and &#169;", "&#169 and ©"),
        ],
    )
    def test_only_terminated_references_decoded(self, html: str, expected: str) -> None:
        assert html_to_markdown(html) == expected

    def test_escaped_markup_stays_text(self) -> None:
        """Decoded entities are not re-read as tags."""
        assert html_to_markdown("&lt;b&gt;not a tag&lt;/b&gt;") == "<b>not a tag</b>"

    def test_comments_are_removed(self) -> None:
        assert html_to_markdown("a<!-- hidden -->b") == "ab"

    def test_empty_formatting_tags_produce_nothing(self) -> None:
        assert html_to_markdown("x<strong></strong>y") == "xy"

    def test_result_is_trimmed(self) -> None:
        assert html_to_markdown("   <em>x</em>  \n") == "*x*"

    def test_empty_input(self) -> None:
        assert html_to_markdown("") == ""

    def test_url_like_text_does_not_warn(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            html_to_markdown("https://example.com/page")

        assert not [w for w in caught if issubclass(w.category, MarkupResemblesLocatorWarning)]

    def test_import_leaves_global_filters_alone(self) -> None:
        assert not any(f[2] is MarkupResemblesLocatorWarning for f in warnings.filters)

    def test_unicode_passthrough(self) -> None:
        text = "Привет, 世界! 🎉"
        assert html_to_markdown(f"<strong>{text}</strong>") == f"**{text}**"


# =============================================================================
# Outer Element Extraction
# =============================================================================


class TestExtractInnerHtml:
    """Test removal of a fragment's outer element."""

    def test_strips_outer_element(self) -> None:
        assert extract_inner_html("<p>Some <em>text</em></p>") == "Some <em>text</em>"

    def test_outer_element_with_attributes(self) -> None:
        result = extract_inner_html('<h2 class="wp-block-heading">Title</h2>')

        assert result == "Title"

    def test_only_outermost_element_is_removed(self) -> None:
        result = extract_inner_html(
            '<blockquote class="wp-block-quote"><p>Quote</p></blockquote>'
        )

        assert result == "<p>Quote</p>"

    def test_surrounding_whitespace_ignored(self) -> None:
        assert extract_inner_html("\n  <p>Text</p>\n") == "Text"

    def test_plain_text_unchanged(self) -> None:
        assert extract_inner_html("No tags here") == "No tags here"

    def test_multiple_top_level_elements_unchanged(self) -> None:
        assert extract_inner_html("<p>a</p><p>b</p>") == "<p>a</p><p>b</p>"

    def test_entities_preserved(self) -> None:
        """Inner HTML stays HTML; entities are decoded later."""
        assert extract_inner_html("<p>a &amp; b</p>") == "a &amp; b"

    def test_empty_input(self) -> None:
        assert extract_inner_html("") == ""
