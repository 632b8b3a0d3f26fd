"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging. Implementations MUST keep logs
structured (key-value context) and safe: never log passwords, raw access
or refresh tokens, or password reset tokens.

Usage:
    from keystone.core.container import get_logger

    logger = get_logger()
    logger.info("session_created", user_id=str(user.id), session_id=str(sid))

    scoped = logger.bind(user_id=str(user.id))
    scoped.warning("account_locked")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Five standard levels plus context binding.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message with optional exception details."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger with context permanently attached."""
        ...
