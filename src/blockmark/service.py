"""Host-facing conversion operations.

These wrap the converters with input validation and a guarded region that
reports unexpected failures as ``ConversionError``. Results are plain
dictionaries ready for a JSON response.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from .blocks_models import Block
from .errors import ValidationError, handle_errors
from .markdown_parser import parse_markdown
from .markdown_renderer import render_markdown
from .serializer import parse_serialized_blocks, serialize_blocks
from .settings import settings

logger = logging.getLogger(__name__)


@handle_errors("convert Markdown")
def markdown_to_blocks(markdown: str | None) -> dict[str, Any]:
    """Convert Markdown to blocks.

    Args:
        markdown: Markdown source text.

    Returns:
        Dict with the block records, the serialized block content and the
        block count.

    Raises:
        ValidationError: If the Markdown is empty or too large.
        ConversionError: If conversion fails unexpectedly.
    """
    if not markdown or not markdown.strip():
        raise ValidationError(
            "Markdown content cannot be empty.",
            code="empty_markdown",
            field="markdown",
        )
    _check_size("markdown", markdown)

    blocks = parse_markdown(markdown)

    return {
        "blocks": [block.to_dict() for block in blocks],
        "block_content": serialize_blocks(blocks),
        "block_count": len(blocks),
    }


@handle_errors("convert to Markdown")
def blocks_to_markdown(
    blocks: Sequence[Block | Mapping[str, Any]] | None = None,
    content: str | None = None,
) -> dict[str, Any]:
    """Convert blocks to Markdown.

    Exactly one source is used: ``blocks`` when given, otherwise the
    comment-delimited ``content``.

    Returns:
        Dict with ``markdown`` and ``has_html_fallback``.

    Raises:
        ValidationError: If neither source is given, or the input is malformed
            or too large.
        ConversionError: If conversion fails unexpectedly.
    """
    if blocks is None and not content:
        raise ValidationError(
            "Either blocks or content is required.",
            code="missing_parameter",
        )

    if blocks is None:
        _check_size("content", content)
        blocks = parse_serialized_blocks(content)
    else:
        _check_blocks(blocks)

    result = render_markdown(blocks)
    if result.has_fallback:
        logger.info("Markdown conversion used HTML fallback for unsupported blocks")

    return result.to_dict()


def _check_size(field: str, text: str) -> None:
    if len(text) > settings.max_input_chars:
        raise ValidationError(
            f"Input exceeds {settings.max_input_chars} characters.",
            code="input_too_large",
            field=field,
            constraint="max_input_chars",
        )


def _check_blocks(blocks: Any) -> None:
    if isinstance(blocks, (str, bytes, Mapping)) or not isinstance(blocks, Sequence):
        raise ValidationError(
            "Blocks must be a list of block records.",
            code="invalid_blocks",
            field="blocks",
        )
    for index, block in enumerate(blocks):
        if not isinstance(block, (Block, Mapping)):
            raise ValidationError(
                f"Block {index} is not a block record.",
                code="invalid_blocks",
                field="blocks",
                value=type(block).__name__,
            )
