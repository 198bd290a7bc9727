"""
ErrorHandler — turns a failed relay run into a message the chat can see.

Usage:
    handler = ErrorHandler()

    try:
        raw = await orchestrator.run(...)
    except Exception as e:
        friendly = handler.handle(e, context="chat:123")
        reply(friendly.message)
"""

import logging
from dataclasses import replace

from agent.errors.catalog import ERROR_PATTERNS, GENERIC_ERROR
from agent.errors.models import ErrorSeverity, FriendlyError

logger = logging.getLogger("relay.errors")

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.CONFIG: logging.WARNING,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


class ErrorHandler:
    """Matches exceptions against the error catalog."""

    def handle(self, error: Exception, context: str = "") -> FriendlyError:
        """
        Args:
            error: The exception that ended the run.
            context: Log context, e.g. "chat:123".

        Returns:
            The first matching catalog entry, or the generic fallback, with
            original_error set to "<ExceptionClass>: <message>".
        """
        error_str = f"{type(error).__name__}: {error}"

        template = next(
            (t for pattern, t in ERROR_PATTERNS if pattern.search(error_str)),
            None,
        )
        friendly = replace(template or GENERIC_ERROR, original_error=error_str)

        prefix = f"[{context}] " if context else ""
        code = friendly.error_code if template else "UNMATCHED"
        logger.log(
            _LOG_LEVELS.get(friendly.severity, logging.ERROR),
            f"{prefix}{code}: {error_str}",
        )
        return friendly
