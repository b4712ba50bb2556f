"""Command-line interface for Markdown <-> blocks conversion.

Usage:
    blockmark to-blocks [FILE] [--serialized]
    blockmark to-markdown [FILE] [--serialized]

FILE defaults to stdin. ``to-blocks`` prints the conversion result as JSON
(or only the serialized block content with ``--serialized``).
``to-markdown`` reads a JSON block list (or, with ``--serialized``,
comment-delimited block content) and prints Markdown.

Environment Variables:
    BLOCKMARK_LOG_LEVEL         Logging level (default: INFO)
    BLOCKMARK_LOG_PATH          Optional rotating log file
    BLOCKMARK_MAX_INPUT_CHARS   Largest accepted input (default: 1000000)
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .errors import BlockmarkError, ValidationError
from .logging_setup import configure_logging
from .service import blocks_to_markdown, markdown_to_blocks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockmark",
        description="Convert between Markdown and block content",
        epilog="""
Examples:
  blockmark to-blocks post.md
  blockmark to-blocks --serialized post.md > post.html
  blockmark to-markdown blocks.json
  cat post.html | blockmark to-markdown --serialized
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides BLOCKMARK_LOG_LEVEL)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    to_blocks = sub.add_parser("to-blocks", help="Convert Markdown to blocks")
    to_blocks.add_argument("file", nargs="?", default="-", help="Markdown file (default: stdin)")
    to_blocks.add_argument(
        "--serialized",
        action="store_true",
        help="Print only the comment-delimited block content",
    )

    to_markdown = sub.add_parser("to-markdown", help="Convert blocks to Markdown")
    to_markdown.add_argument("file", nargs="?", default="-", help="Block input (default: stdin)")
    to_markdown.add_argument(
        "--serialized",
        action="store_true",
        help="Read comment-delimited block content instead of JSON",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        if args.command == "to-blocks":
            return cmd_to_blocks(args.file, serialized=args.serialized)
        return cmd_to_markdown(args.file, serialized=args.serialized)
    except BlockmarkError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_to_blocks(source: str, *, serialized: bool = False) -> int:
    """Convert Markdown to blocks."""
    result = markdown_to_blocks(_read_input(source))

    if serialized:
        print(result["block_content"])
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


def cmd_to_markdown(source: str, *, serialized: bool = False) -> int:
    """Convert blocks to Markdown."""
    raw = _read_input(source)

    if serialized:
        result = blocks_to_markdown(content=raw)
    else:
        result = blocks_to_markdown(blocks=_load_blocks(raw))

    print(result["markdown"])
    if result["has_html_fallback"]:
        print("Warning: some blocks were kept as raw HTML", file=sys.stderr)
    return 0


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _load_blocks(raw: str) -> Any:
    """Load a JSON block list, also accepting the output of ``to-blocks``."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}", code="invalid_blocks", field="blocks") from e

    if isinstance(data, dict) and "blocks" in data:
        return data["blocks"]
    return data
