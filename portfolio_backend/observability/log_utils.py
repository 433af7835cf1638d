"""
Structured log context helpers.

Log records carry portfolio ids, blob URLs and skill names as `extra`
attributes. safe_log_value() turns each of them into a bounded string so
a log call never fails or floods the handler, whatever the caller passes.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any
from uuid import UUID

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a context value as a string of at most max_length characters.

    UUIDs render bare. Lists, tuples and sets are joined with ", " so URL
    and skill-name lists stay readable; bytes are reduced to their size.

    Args:
        value: Context value
        max_length: Length above which the rendering is truncated

    Returns:
        str: Loggable rendering
    """
    try:
        if value is None:
            text = "None"
        elif isinstance(value, UUID):
            text = str(value)
        elif isinstance(value, (bytes, bytearray)):
            text = f"bytes({len(value)})"
        elif isinstance(value, (list, tuple, set, frozenset)):
            text = ", ".join(safe_log_value(item, max_length) for item in value)
        elif isinstance(value, dict):
            text = ", ".join(f"{key}={safe_log_value(val, max_length)}" for key, val in value.items())
        else:
            text = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    exc_info: bool = False,
    **context: Any,
) -> None:
    """
    Log a message with every context value rendered by safe_log_value().

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        exc_info: Attach the exception being handled
        **context: Record attributes; must not shadow LogRecord fields
    """
    extra = {key: safe_log_value(value) for key, value in context.items()}
    logger.log(level, message, extra=extra, exc_info=exc_info)
