"""Utility functions and helpers.

- logging: Structured logging with chat content redaction
"""

from loop_chat.utils.logging import (
    LogFormat,
    LogLevel,
    bind_context,
    clear_context,
    configure_logging,
    unbind_context,
)

__all__ = [
    "LogFormat",
    "LogLevel",
    "bind_context",
    "clear_context",
    "configure_logging",
    "unbind_context",
]
