"""
Relay exception taxonomy.

Unknown content tags are not errors (adapters skip them) and reply decoding
never fails (it falls back to plain text), so neither has a class here.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for relay failures."""


class ConversionError(RelayError):
    """No wire adapter is registered for the requested provider."""


class ToolExecutionError(RelayError):
    """A tool failed. Fed back to the model as the tool result, never fatal."""

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f"Error executing function {name}: {cause}")


class OrchestrationExhausted(RelayError):
    """The model kept requesting tools past the cycle bound."""

    def __init__(self, max_cycles: int, provider: str = "the AI provider"):
        self.max_cycles = max_cycles
        super().__init__(
            f"Reached the limit of {max_cycles} communication cycles with {provider}."
        )


class ProviderTransportError(RelayError):
    """Network or API failure talking to a provider."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
