"""
Relay Interfaces — collaborator contracts.

All orchestration code depends on these interfaces only.
Concrete transports and stores live in adapters/.
"""

from agent.interfaces.ai_provider import AIProvider, AIResponse, ToolDefinition, ToolCall
from agent.interfaces.conversation_cache import ConversationCache
from agent.interfaces.function_dispatcher import FunctionDispatcher

__all__ = [
    "AIProvider", "AIResponse", "ToolDefinition", "ToolCall",
    "ConversationCache",
    "FunctionDispatcher",
]
