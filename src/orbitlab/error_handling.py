"""Standardized Error Handling Utilities

Provides the OrbitLab exception hierarchy and consistent error handling
patterns for configuration, rendering and encoding failures.
"""

from __future__ import annotations

import logging
import traceback
from contextlib import contextmanager
from typing import Any


class OrbitLabError(Exception):
    """Base exception class for all OrbitLab errors."""

    def __init__(
        self, message: str, cause: Exception | None = None, context: dict | None = None
    ):
        super().__init__(message)
        self.cause = cause
        self.context = context or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.cause:
            return f"{base_msg} (caused by: {self.cause})"
        return base_msg


class ConfigurationError(OrbitLabError):
    """Raised when animation parameters are inconsistent.

    Covers step counts that cannot be partitioned, mismatched pattern
    lengths and invalid frame dimensions. Always raised at construction
    time, before any rendering begins.
    """

    pass


class RenderError(OrbitLabError):
    """Raised when rasterizing a frame fails."""

    pass


class EncodingError(OrbitLabError):
    """Raised when the animation cannot be written to disk."""

    pass


class StepOutOfRangeError(OrbitLabError, IndexError):
    """Raised when a pattern is evaluated at a step outside its period."""

    pass


def handle_error(
    error: Exception,
    operation: str,
    error_type: type[OrbitLabError] = RenderError,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> None:
    """Log ``error`` and re-raise it as ``error_type``.

    Args:
        error: Original exception that occurred
        operation: Description of operation that failed
        error_type: Type of OrbitLabError to raise
        context: Additional context information
        logger: Logger to use (defaults to module logger)

    Raises:
        OrbitLabError: The transformed error, chained to ``error``
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    error_context = dict(context or {})
    error_context.update(
        {
            "operation": operation,
            "original_error_type": type(error).__name__,
        }
    )

    log_message = f"🚨 {operation.capitalize()} failed: {error}"
    context_str = ", ".join(
        f"{k}={v}" for k, v in error_context.items() if k != "operation"
    )
    if context_str:
        log_message += f" (context: {context_str})"

    logger.error(log_message)
    logger.debug(f"Traceback for {operation}: {traceback.format_exc()}")

    raise error_type(
        f"Failed to {operation}: {error}", cause=error, context=error_context
    ) from error


@contextmanager
def error_context(
    operation: str,
    error_type: type[OrbitLabError] = RenderError,
    context: dict | None = None,
    logger: logging.Logger | None = None,
) -> Any:
    """Context manager for standardized error handling.

    Usage:
        with error_context("write animation", EncodingError, context={'path': 'out.gif'}):
            risky_operation()

    Args:
        operation: Description of operation being performed
        error_type: Type of OrbitLabError to raise on failure
        context: Additional context information
        logger: Logger to use
    """
    try:
        yield
    except OrbitLabError:
        # Already in the package's vocabulary
        raise
    except Exception as e:
        handle_error(e, operation, error_type, context, logger)


def log_warning_with_context(
    message: str, context: dict | None = None, logger: logging.Logger | None = None
) -> None:
    """Log a warning with standardized context formatting.

    Args:
        message: Warning message
        context: Additional context information
        logger: Logger to use
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    warning_msg = f"⚠️  {message}"
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        warning_msg += f" (context: {context_str})"

    logger.warning(warning_msg)
