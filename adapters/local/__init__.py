from adapters.local.anthropic_provider import AnthropicProvider
from adapters.local.chat_completions_provider import ChatCompletionsProvider
from adapters.local.direct_dispatcher import DirectDispatcher
from adapters.local.memory_cache import InMemoryConversationCache
from adapters.local.openai_provider import OpenAIResponsesProvider
from adapters.local.sqlite_store import SQLiteConversationCache

__all__ = [
    "AnthropicProvider",
    "ChatCompletionsProvider",
    "DirectDispatcher",
    "InMemoryConversationCache",
    "OpenAIResponsesProvider",
    "SQLiteConversationCache",
]
