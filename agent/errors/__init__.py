from agent.errors.models import FriendlyError, ErrorSeverity
from agent.errors.handler import ErrorHandler
from agent.errors.exceptions import (
    RelayError, ConversionError, ToolExecutionError,
    OrchestrationExhausted, ProviderTransportError,
)

__all__ = [
    "FriendlyError", "ErrorSeverity", "ErrorHandler",
    "RelayError", "ConversionError", "ToolExecutionError",
    "OrchestrationExhausted", "ProviderTransportError",
]
