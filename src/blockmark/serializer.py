"""Serialize blocks to comment-delimited block content and back.

Each block is written as::

    <!-- wp:core/heading {"level":2} -->
    <h2 class="wp-block-heading">Title</h2>
    <!-- /wp:core/heading -->

The JSON segment is left out when a block has no attributes. Blocks are
separated by a blank line.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Iterable, Mapping

from .blocks_models import Block

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "core"

_DELIMITER_RE = re.compile(
    r"<!--\s+(?P<closer>/)?wp:(?P<name>[a-z][a-z0-9_-]*(?:/[a-z][a-z0-9_-]*)?)"
    r"\s+(?P<attrs>\{.*?\}\s+)?(?P<void>/)?-->",
    re.DOTALL,
)


def serialize_blocks(blocks: Iterable[Block | Mapping[str, Any]]) -> str:
    """Serialize blocks to comment-delimited block content.

    Blocks without a type are skipped.
    """
    parts = []

    for block in blocks:
        if not isinstance(block, Block):
            block = Block.from_dict(block)
        if not block.type:
            continue

        if block.attributes:
            attrs_json = json.dumps(block.attributes, ensure_ascii=False, separators=(",", ":"))
            opener = f"<!-- wp:{block.type} {attrs_json} -->"
        else:
            opener = f"<!-- wp:{block.type} -->"

        parts.append(f"{opener}\n{block.body_html}\n<!-- /wp:{block.type} -->")

    return "\n\n".join(parts).strip()


def parse_serialized_blocks(content: str) -> list[Block]:
    """Parse comment-delimited block content into a flat list of blocks.

    Names without a namespace are read as ``core/<name>``. Non-whitespace
    text outside any block becomes a block with an empty type. Delimiters
    nested inside an open block are kept verbatim in its body.
    """
    blocks: list[Block] = []
    cursor = 0
    depth = 0
    current: tuple[str, dict[str, Any], int] | None = None

    for match in _DELIMITER_RE.finditer(content):
        is_closer = match.group("closer") is not None
        is_void = match.group("void") is not None

        if current is not None:
            if is_closer:
                depth -= 1
            elif not is_void:
                depth += 1
            if depth > 0:
                continue

            name, attributes, body_start = current
            body = _trim_body(content[body_start:match.start()])
            blocks.append(Block(type=name, attributes=attributes, body_html=body))
            current = None
            cursor = match.end()
            continue

        _append_freeform(blocks, content[cursor:match.start()])
        cursor = match.end()

        if is_closer:
            # Stray closer with no opener
            logger.debug("Ignoring unmatched block closer %r", match.group("name"))
            continue

        name = _qualified_name(match.group("name"))
        attributes = _parse_attributes(match.group("attrs"))

        if is_void:
            blocks.append(Block(type=name, attributes=attributes))
        else:
            current = (name, attributes, match.end())
            depth = 1

    if current is not None:
        name, attributes, body_start = current
        logger.warning("Unclosed block %r; reading body to end of content", name)
        blocks.append(
            Block(type=name, attributes=attributes, body_html=_trim_body(content[body_start:]))
        )
    else:
        _append_freeform(blocks, content[cursor:])

    return blocks


def _qualified_name(name: str) -> str:
    if "/" in name:
        return name
    return f"{DEFAULT_NAMESPACE}/{name}"


def _parse_attributes(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        attributes = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Invalid block attributes JSON: %s", raw.strip()[:100])
        return {}
    return attributes if isinstance(attributes, dict) else {}


def _trim_body(body: str) -> str:
    """Drop the single newline the serializer puts on each side of a body."""
    if body.startswith("\n"):
        body = body[1:]
    if body.endswith("\n"):
        body = body[:-1]
    return body


def _append_freeform(blocks: list[Block], text: str) -> None:
    if text.strip():
        blocks.append(Block(type="", body_html=text.strip()))
