"""Render blocks to Markdown.

Each block is dispatched on its type to a renderer that returns the block's
Markdown together with a flag saying whether the block had to fall back to
raw HTML. The flags are folded into the final ``ConversionResult``, so the
renderer keeps no state between calls.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from .blocks_models import Block, BlockType, ConversionResult
from .inline import extract_inner_html, html_to_markdown, parse_fragment

logger = logging.getLogger(__name__)

DEFAULT_HEADING_LEVEL = 2


def render_markdown(blocks: Iterable[Block | Mapping[str, Any]]) -> ConversionResult:
    """Render a list of blocks to Markdown.

    Args:
        blocks: Block objects or block dictionaries. Dictionaries may omit
            ``type``, ``attributes`` or ``body_html``.

    Returns:
        ConversionResult with the Markdown text (non-empty renderings joined
        by a blank line) and whether any block used the HTML fallback.
    """
    parts = []
    has_fallback = False

    for block in blocks:
        if not isinstance(block, Block):
            block = Block.from_dict(block)
        text, is_fallback = _render_block(block)
        has_fallback = has_fallback or is_fallback
        if text:
            parts.append(text)

    logger.debug("Rendered %d Markdown blocks (fallback=%s)", len(parts), has_fallback)
    return ConversionResult(markdown="\n\n".join(parts), has_fallback=has_fallback)


def _render_block(block: Block) -> tuple[str, bool]:
    """Render a single block to Markdown."""
    if not block.type:
        return "", False

    renderer = _RENDERERS.get(block.type)
    if renderer is None:
        return _render_fallback(block), True

    return renderer(block), False


def _render_heading(block: Block) -> str:
    """Render a heading block."""
    try:
        level = int(block.attributes.get("level") or DEFAULT_HEADING_LEVEL)
    except (TypeError, ValueError):
        level = DEFAULT_HEADING_LEVEL
    text = html_to_markdown(extract_inner_html(block.body_html))
    return f"{'#' * level} {text}"


def _render_paragraph(block: Block) -> str:
    return html_to_markdown(extract_inner_html(block.body_html))


def _render_code(block: Block) -> str:
    """Render a code block as a fenced block.

    The content comes from the first ``<code>`` element when there is one,
    otherwise from all text in the body.
    """
    soup = parse_fragment(block.body_html)
    code_tag = soup.find("code")
    code = code_tag.get_text() if code_tag is not None else soup.get_text()
    language = block.attributes.get("language") or ""
    return f"```{language}\n{code}\n```"


def _render_quote(block: Block) -> str:
    """Render a quote block, prefixing every line with ``> ``."""
    text = html_to_markdown(extract_inner_html(block.body_html))
    return "\n".join(f"> {line}" for line in text.split("\n"))


def _render_list(block: Block) -> str:
    """Render a list block.

    Item markup is stripped, so only the (entity-decoded) item text
    survives.
    """
    ordered = bool(block.attributes.get("ordered"))
    soup = parse_fragment(block.body_html)

    lines = []
    for counter, item in enumerate(soup.find_all("li"), start=1):
        text = item.get_text().strip()
        prefix = f"{counter}. " if ordered else "- "
        lines.append(f"{prefix}{text}")

    return "\n".join(lines)


def _render_separator(block: Block) -> str:
    return "---"


def _render_image(block: Block) -> str:
    """Render an image block.

    Attributes win over the body markup. Without a URL the block renders to
    nothing.
    """
    soup = parse_fragment(block.body_html)

    url = block.attributes.get("url")
    if not url:
        tag = soup.find(src=True)
        url = tag["src"] if tag is not None else ""

    alt = block.attributes.get("alt")
    if not alt:
        tag = soup.find(alt=True)
        alt = tag["alt"] if tag is not None else ""

    if not url:
        return ""

    return f"![{alt}]({url})"


def _render_fallback(block: Block) -> str:
    """Wrap an unsupported block's raw HTML in marker comments."""
    logger.warning("No Markdown renderer for block type %r; using HTML passthrough", block.type)
    body = block.body_html.strip()
    if not body:
        return f"<!-- HTML BLOCK: {block.type} -->"
    return f"<!-- HTML BLOCK: {block.type} -->\n{body}\n<!-- END HTML BLOCK -->"


_RENDERERS: dict[str, Callable[[Block], str]] = {
    BlockType.HEADING.value: _render_heading,
    BlockType.PARAGRAPH.value: _render_paragraph,
    BlockType.CODE.value: _render_code,
    BlockType.QUOTE.value: _render_quote,
    BlockType.LIST.value: _render_list,
    BlockType.SEPARATOR.value: _render_separator,
    BlockType.IMAGE.value: _render_image,
}
