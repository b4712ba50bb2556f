"""Inline formatting between Markdown and HTML.

Markdown -> HTML is a fixed sequence of regex substitutions. The order is
significant: combined bold+italic runs before bold, bold before italic, and
images before links (image syntax is link syntax prefixed with ``!``).

HTML -> Markdown walks a parsed fragment tree, so attribute order and
unrecognised markup do not matter: recognised inline tags become Markdown,
everything else is reduced to its text.
"""

from __future__ import annotations

import html
import re
import warnings
from typing import Callable, Iterable, Union

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

# =============================================================================
# Markdown -> HTML
# =============================================================================

def _image_tag(match: re.Match[str]) -> str:
    url = html.escape(match.group(2), quote=True)
    return f'<img src="{url}" alt="{match.group(1)}" />'


def _link_tag(match: re.Match[str]) -> str:
    url = html.escape(match.group(2), quote=True)
    return f'<a href="{url}">{match.group(1)}</a>'


_Replacement = Union[str, Callable[[re.Match[str]], str]]

_MARKDOWN_PATTERNS: list[tuple[re.Pattern[str], _Replacement]] = [
    # Bold and italic combined
    (re.compile(r"\*\*\*(.+?)\*\*\*"), r"<strong><em>\1</em></strong>"),
    (re.compile(r"___(.+?)___"), r"<strong><em>\1</em></strong>"),
    # Bold
    (re.compile(r"\*\*(.+?)\*\*"), r"<strong>\1</strong>"),
    (re.compile(r"__(.+?)__"), r"<strong>\1</strong>"),
    # Italic
    (re.compile(r"\*(.+?)\*"), r"<em>\1</em>"),
    (re.compile(r"_(.+?)_"), r"<em>\1</em>"),
    # Inline code
    (re.compile(r"`([^`]+)`"), r"<code>\1</code>"),
    # Images, then links
    (re.compile(r"!\[([^\]]*)\]\(([^)]+)\)"), _image_tag),
    (re.compile(r"\[([^\]]+)\]\(([^)]+)\)"), _link_tag),
]


def markdown_to_html(text: str) -> str:
    """Convert inline Markdown formatting to HTML tags.

    Unmatched or partial syntax is left as literal text.
    """
    for pattern, replacement in _MARKDOWN_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


# =============================================================================
# HTML -> Markdown
# =============================================================================

# Tags rendered by wrapping their content in a Markdown marker
_WRAPPERS = {
    "strong": "**",
    "b": "**",
    "em": "*",
    "i": "*",
    "code": "`",
}


# A character reference without its closing ";", e.g. the "&copy" in
# "?w=1&copy=2". html.parser would decode it; it is kept as literal text.
_UNTERMINATED_REF_RE = re.compile(
    r"&(?=(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+)(?![A-Za-z0-9;]))"
)


def parse_fragment(fragment: str) -> BeautifulSoup:
    """Parse an HTML fragment into a tree.

    Only references terminated by ``;`` are decoded.
    """
    markup = _UNTERMINATED_REF_RE.sub("&amp;", fragment or "")
    with warnings.catch_warnings():
        # Short text that looks like a URL or filename is still markup here
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        return BeautifulSoup(markup, "html.parser")


def extract_inner_html(fragment: str) -> str:
    """Return the inner HTML of a fragment's single outer element.

    ``<p>Some <em>text</em></p>`` gives ``Some <em>text</em>``. Fragments that
    are not wrapped in exactly one element are returned trimmed but otherwise
    unchanged.
    """
    fragment = (fragment or "").strip()
    if not fragment:
        return ""

    soup = parse_fragment(fragment)
    top = [
        node for node in soup.contents
        if not (isinstance(node, NavigableString) and not node.strip())
    ]
    if len(top) == 1 and isinstance(top[0], Tag):
        return top[0].decode_contents().strip()
    return fragment


def html_to_markdown(fragment: str) -> str:
    """Convert inline HTML to Markdown text.

    Entities are decoded and the result is trimmed.
    """
    if not fragment:
        return ""
    soup = parse_fragment(fragment)
    return _render_nodes(soup.contents).strip()


def _render_nodes(nodes: Iterable[PageElement]) -> str:
    return "".join(_render_node(node) for node in nodes)


def _render_node(node: PageElement) -> str:
    """Render a single fragment node to Markdown."""
    # Comments, CDATA, doctypes and processing instructions
    if isinstance(node, PreformattedString):
        return ""
    if isinstance(node, NavigableString):
        return str(node)
    if not isinstance(node, Tag):
        return ""

    name = node.name.lower()

    if name == "br":
        return "\n"

    if name == "img":
        src = node.get("src")
        if not src:
            return ""
        return f"![{node.get('alt', '')}]({src})"

    inner = _render_nodes(node.contents)

    marker = _WRAPPERS.get(name)
    if marker:
        return f"{marker}{inner}{marker}" if inner else ""

    if name == "a":
        href = node.get("href")
        if href and inner:
            return f"[{inner}]({href})"
        return inner

    # Unrecognised tag: keep text, drop structure
    return inner
