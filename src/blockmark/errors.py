"""Blockmark Error Hierarchy.

The converters themselves never raise on malformed input. These errors are
raised by the service layer that wraps them:
- BlockmarkError: Base exception for all application errors
- ValidationError: Caller input rejected before conversion
- ConversionError: Unexpected failure while converting

Each error type includes:
- Descriptive message
- A stable ``code`` and an HTTP-style ``status`` for host adapters
- Optional context for debugging
- Structured representation for API responses

Usage:
    from blockmark.errors import ValidationError

    if not markdown.strip():
        raise ValidationError("Markdown content cannot be empty.", code="empty_markdown")
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable

logger = logging.getLogger(__name__)


# =============================================================================
# Error Base Class
# =============================================================================


class BlockmarkError(Exception):
    """Base exception for all Blockmark errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code
        status: HTTP-style status a host should report
        recoverable: Whether the operation can be retried
        context: Additional context for debugging
    """

    code = "error"
    status = 500

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        recoverable: bool = False,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.recoverable = recoverable
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured dictionary for API responses."""
        return {
            "type": type(self).__name__.lower().replace("error", ""),
            "code": self.code,
            "message": self.message,
            "status": self.status,
            "recoverable": self.recoverable,
            **{k: v for k, v in self.context.items() if v is not None},
        }


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(BlockmarkError):
    """Input validation failed.

    Example:
        raise ValidationError("Input too large", field="markdown", constraint="max_chars")
    """

    code = "invalid_input"
    status = 400

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
    ) -> None:
        context: dict[str, Any] = {}
        if field:
            context["field"] = field
        if constraint:
            context["constraint"] = constraint
        if value is not None:
            context["value"] = _truncate(str(value), 100)
        super().__init__(message, code=code, recoverable=False, context=context)
        self.field = field
        self.constraint = constraint


# =============================================================================
# Conversion Errors
# =============================================================================


class ConversionError(BlockmarkError):
    """A conversion failed unexpectedly."""

    code = "conversion_failed"
    status = 500

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        error_type: str | None = None,
    ) -> None:
        super().__init__(
            message,
            recoverable=False,
            context={"operation": operation, "error_type": error_type},
        )
        self.operation = operation


# =============================================================================
# Error Handling Decorator
# =============================================================================


def handle_errors(operation: str) -> Callable:
    """Decorator that standardizes exception handling around a conversion.

    BlockmarkError exceptions propagate as-is since they're already
    structured. Anything else is logged and re-raised as ConversionError,
    chained to the original exception.

    Usage:
        @handle_errors("convert Markdown")
        def markdown_to_blocks(markdown: str) -> dict:
            ...
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except BlockmarkError:
                raise
            except Exception as e:
                logger.error(
                    "Failed to %s: %s (function=%s)",
                    operation,
                    e,
                    func.__name__,
                    exc_info=True,
                )
                raise ConversionError(
                    f"Failed to {operation}: {e}",
                    operation=operation,
                    error_type=type(e).__name__,
                ) from e

        return wrapper

    return decorator


def _truncate(value: str | None, max_len: int) -> str | None:
    """Truncate a string value for safe logging."""
    if value is None:
        return None
    if len(value) <= max_len:
        return value
    return value[: max_len - 3] + "..."
