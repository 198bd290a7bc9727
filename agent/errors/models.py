"""
Friendly error models.

What the chat sees after a fatal relay error. The raw exception text is
kept for logs only.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """How serious the error is and who can fix it."""

    INFO = "info"          # Transient, a retry likely works
    CONFIG = "config"      # Bad key, quota or model settings
    CRITICAL = "critical"  # Missing infrastructure (table, model access)


@dataclass
class FriendlyError:
    """A chat-facing error message with guidance for whoever runs the bot."""

    message: str                          # Sent to the chat
    severity: ErrorSeverity
    error_code: str = ""                  # e.g. PROVIDER_AUTH, TOOL_LOOP_EXHAUSTED
    action: str = ""                      # What the operator should do
    admin_required: bool = False
    original_error: str = ""              # "<ExceptionClass>: <message>", logged only

    def to_dict(self) -> dict:
        return {
            "type": "error",
            "severity": self.severity.value,
            "message": self.message,
            "action": self.action,
            "admin_required": self.admin_required,
            "error_code": self.error_code,
        }
