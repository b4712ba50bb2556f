"""Parse Markdown into blocks.

The parser is line oriented. Every line is first classified into a tagged
variant (fence, heading, quote, list item, rule, blank, text); a single loop
then consumes the classified lines, keeping the paragraph buffer, the current
list run and the open code fence in local variables.
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from typing import Union

from .blocks_models import Block, BlockType
from .inline import markdown_to_html

logger = logging.getLogger(__name__)


# =============================================================================
# Line Classification
# =============================================================================


@dataclass(frozen=True)
class Fence:
    language: str = ""


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Quote:
    text: str


@dataclass(frozen=True)
class ListItem:
    ordered: bool
    text: str


@dataclass(frozen=True)
class Rule:
    pass


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Text:
    raw: str


Line = Union[Fence, Heading, Quote, ListItem, Rule, Blank, Text]

_FENCE_RE = re.compile(r"^```(\w*)$")
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
_QUOTE_RE = re.compile(r"^>\s*(.*)$")
_UNORDERED_RE = re.compile(r"^[-*+]\s+(.+)$")
_ORDERED_RE = re.compile(r"^\d+\.\s+(.+)$")
_RULE_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})$")


def classify_line(line: str) -> Line:
    """Classify a single Markdown line.

    Patterns are tried in priority order; the first match wins.
    """
    match = _FENCE_RE.match(line)
    if match:
        return Fence(language=match.group(1))

    match = _HEADING_RE.match(line)
    if match:
        return Heading(level=len(match.group(1)), text=match.group(2).strip())

    match = _QUOTE_RE.match(line)
    if match:
        return Quote(text=match.group(1))

    match = _UNORDERED_RE.match(line)
    if match:
        return ListItem(ordered=False, text=match.group(1))

    match = _ORDERED_RE.match(line)
    if match:
        return ListItem(ordered=True, text=match.group(1))

    stripped = line.strip()
    if _RULE_RE.match(stripped):
        return Rule()

    if not stripped:
        return Blank()

    return Text(raw=line)


# =============================================================================
# Parsing
# =============================================================================


@dataclass
class _ListRun:
    ordered: bool
    items: list[str] = field(default_factory=list)


def parse_markdown(markdown: str) -> list[Block]:
    """Parse Markdown text into a flat list of blocks.

    Args:
        markdown: The Markdown text to parse.

    Returns:
        Blocks in document order. Empty or whitespace-only input gives an
        empty list.
    """
    blocks: list[Block] = []
    paragraph: list[str] = []
    run: _ListRun | None = None
    code_lines: list[str] | None = None
    code_language = ""

    def flush_paragraph() -> None:
        if paragraph:
            blocks.append(_paragraph_block(" ".join(paragraph)))
            paragraph.clear()

    def flush_list() -> None:
        nonlocal run
        if run is not None and run.items:
            blocks.append(_list_block(run.items, run.ordered))
        run = None

    for raw_line in markdown.split("\n"):
        line = classify_line(raw_line)

        if isinstance(line, Fence):
            if code_lines is None:
                flush_list()
                flush_paragraph()
                code_language = line.language
                code_lines = []
            else:
                blocks.append(_code_block("\n".join(code_lines), code_language))
                code_lines = None
                code_language = ""
            continue

        if code_lines is not None:
            code_lines.append(raw_line)
            continue

        if isinstance(line, Heading):
            flush_list()
            flush_paragraph()
            blocks.append(_heading_block(line.text, line.level))
        elif isinstance(line, Quote):
            flush_list()
            flush_paragraph()
            blocks.append(_quote_block(line.text))
        elif isinstance(line, ListItem):
            flush_paragraph()
            if run is None or run.ordered != line.ordered:
                flush_list()
                run = _ListRun(ordered=line.ordered)
            run.items.append(line.text)
        elif isinstance(line, Rule):
            flush_list()
            flush_paragraph()
            blocks.append(_separator_block())
        elif isinstance(line, Blank):
            flush_list()
            flush_paragraph()
        else:
            flush_list()
            paragraph.append(line.raw)

    flush_list()
    flush_paragraph()

    if code_lines is not None:
        # No closing fence: the fence runs to the end of the document
        logger.warning(
            "Unterminated code fence (%d lines); closing at end of input",
            len(code_lines),
        )
        blocks.append(_code_block("\n".join(code_lines), code_language))

    logger.debug("Parsed %d blocks from Markdown", len(blocks))
    return blocks


# =============================================================================
# Block Builders
# =============================================================================


def _heading_block(text: str, level: int) -> Block:
    content = markdown_to_html(text)
    return Block(
        type=BlockType.HEADING,
        attributes={"level": level},
        body_html=f'<h{level} class="wp-block-heading">{content}</h{level}>',
    )


def _paragraph_block(text: str) -> Block:
    return Block(
        type=BlockType.PARAGRAPH,
        body_html=f"<p>{markdown_to_html(text)}</p>",
    )


def _quote_block(text: str) -> Block:
    content = markdown_to_html(text)
    return Block(
        type=BlockType.QUOTE,
        body_html=f'<blockquote class="wp-block-quote"><p>{content}</p></blockquote>',
    )


def _list_block(items: list[str], ordered: bool) -> Block:
    tag = "ol" if ordered else "ul"
    body = "".join(f"<li>{markdown_to_html(item)}</li>" for item in items)
    return Block(
        type=BlockType.LIST,
        attributes={"ordered": ordered},
        body_html=f'<{tag} class="wp-block-list">{body}</{tag}>',
    )


def _code_block(code: str, language: str) -> Block:
    """Build a code block. Content is escaped, never inline-formatted."""
    attributes = {"language": language} if language else {}
    return Block(
        type=BlockType.CODE,
        attributes=attributes,
        body_html=f'<pre class="wp-block-code"><code>{html.escape(code)}</code></pre>',
    )


def _separator_block() -> Block:
    return Block(
        type=BlockType.SEPARATOR,
        body_html='<hr class="wp-block-separator has-alpha-channel-opacity"/>',
    )
