"""
Provider wire adapters, selected by provider.
Add a provider by adding a WireAdapter subclass and a registry entry.
"""

from agent.conversion.base import WireAdapter, redact_media
from agent.conversion.claude import ClaudeAdapter
from agent.conversion.deepseek import DeepSeekAdapter
from agent.conversion.generic import GenericAdapter
from agent.conversion.openai_responses import OpenAIResponsesAdapter
from agent.conversion.qwen import QwenAdapter
from agent.errors.exceptions import ConversionError
from agent.models.ai_models import Provider

ADAPTERS: dict[Provider, type[WireAdapter]] = {
    Provider.CLAUDE: ClaudeAdapter,
    Provider.DEEPSEEK: DeepSeekAdapter,
    Provider.OPENAI: OpenAIResponsesAdapter,
    Provider.QWEN: QwenAdapter,
    Provider.CUSTOM: GenericAdapter,
    Provider.DEEPINFRA: GenericAdapter,
}


def get_adapter(provider: Provider) -> WireAdapter:
    """Return a fresh adapter for the provider. Raises ConversionError if none."""
    adapter_cls = ADAPTERS.get(provider)
    if adapter_cls is None:
        raise ConversionError(f"No wire adapter registered for provider '{provider}'")
    return adapter_cls()


__all__ = [
    "WireAdapter", "redact_media", "get_adapter", "ADAPTERS",
    "ClaudeAdapter", "DeepSeekAdapter", "GenericAdapter",
    "OpenAIResponsesAdapter", "QwenAdapter",
]
