"""Markdown <-> block content conversion.

Key components:
- blocks_models: Block, BlockType, ConversionResult dataclasses
- inline: inline Markdown <-> HTML formatting
- markdown_parser: Markdown -> Blocks conversion
- markdown_renderer: Blocks -> Markdown export
- serializer: comment-delimited block content
- service: validated, host-facing conversion operations
"""

from .blocks_models import Block, BlockType, ConversionResult
from .errors import BlockmarkError, ConversionError, ValidationError
from .inline import html_to_markdown, markdown_to_html
from .markdown_parser import classify_line, parse_markdown
from .markdown_renderer import render_markdown
from .serializer import parse_serialized_blocks, serialize_blocks
from .service import blocks_to_markdown, markdown_to_blocks

__all__ = [
    "Block",
    "BlockType",
    "ConversionResult",
    "BlockmarkError",
    "ConversionError",
    "ValidationError",
    "html_to_markdown",
    "markdown_to_html",
    "classify_line",
    "parse_markdown",
    "render_markdown",
    "parse_serialized_blocks",
    "serialize_blocks",
    "blocks_to_markdown",
    "markdown_to_blocks",
]
