"""Data models for the block-based document representation.

A document is a flat list of blocks. Each block carries a type name, a small
set of typed attributes, and a single HTML fragment holding its rendered
content.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class BlockType(str, Enum):
    """Block types understood by the converters."""

    # Text blocks
    HEADING = "core/heading"
    PARAGRAPH = "core/paragraph"
    QUOTE = "core/quote"
    LIST = "core/list"

    # Special blocks
    CODE = "core/code"
    SEPARATOR = "core/separator"
    IMAGE = "core/image"


@dataclass
class Block:
    """A single content block.

    Blocks are never nested; ``children`` exists only so the record shape
    matches what hosts expect and is always empty.
    """

    type: str
    attributes: dict[str, Any] = field(default_factory=dict)
    body_html: str = ""
    children: list[Block] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.type, BlockType):
            self.type = self.type.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        ``inner_content`` mirrors ``body_html`` for host compatibility.
        """
        return {
            "type": self.type,
            "attributes": dict(self.attributes),
            "body_html": self.body_html,
            "children": [],
            "inner_content": [self.body_html],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Block:
        """Create from dictionary, treating missing or mistyped fields as empty."""
        block_type = data.get("type") or ""
        if isinstance(block_type, BlockType):
            block_type = block_type.value

        attributes = data.get("attributes")
        body_html = data.get("body_html")

        return cls(
            type=str(block_type),
            attributes=dict(attributes) if isinstance(attributes, Mapping) else {},
            body_html=body_html if isinstance(body_html, str) else "",
        )


@dataclass
class ConversionResult:
    """Result of rendering a block list to Markdown."""

    markdown: str
    has_fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "markdown": self.markdown,
            "has_html_fallback": self.has_fallback,
        }
