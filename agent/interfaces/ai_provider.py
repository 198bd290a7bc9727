"""
AI Provider Interface

Transport abstraction for LLM interactions.
Implementations: AnthropicProvider, OpenAIResponsesProvider,
ChatCompletionsProvider (local), BedrockProvider (AWS).

Providers receive messages that are already in their wire shape (see
agent.conversion) and return a normalized AIResponse.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ToolDefinition:
    """A skill exposed to the AI as a callable tool."""
    name: str
    description: str
    input_schema: dict


@dataclass
class ToolCall:
    """AI's request to invoke a specific tool."""
    tool_name: str
    tool_params: dict
    tool_use_id: str  # For correlating tool results back to AI


@dataclass
class AIResponse:
    """Normalized AI response."""
    text: Optional[str] = None          # Direct text response (if no tool use)
    tool_calls: list[ToolCall] = field(default_factory=list)  # Tool invocations
    stop_reason: str = ""               # "end_turn", "tool_use", etc.
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def has_tool_use(self) -> bool:
        return len(self.tool_calls) > 0


class AIProvider(ABC):
    """
    Abstract base class for AI model providers.

    The orchestrator calls this once per cycle. The implementation handles
    the HTTP/SDK specifics of Anthropic, OpenAI, Bedrock, etc.
    """

    @abstractmethod
    async def chat(
        self,
        model: str,
        system: str,
        messages: list[dict],
        tools: list[dict],
        max_tokens: int = 2048,
    ) -> AIResponse:
        """
        Send a conversation to the AI model and get a response.

        Args:
            model: Model identifier (e.g., "claude-sonnet-4-5-20250929")
            system: System prompt
            messages: Wire messages, already shaped for this provider
            tools: Tool declarations, already shaped for this provider
            max_tokens: Maximum response tokens

        Returns:
            AIResponse with either text or tool calls
        """
        ...

    async def complete(
        self,
        model: str,
        system: str,
        messages: list[dict],
        max_tokens: int = 2048,
    ) -> str:
        """Single-turn completion without tools. Returns the raw text."""
        response = await self.chat(model, system, messages, [], max_tokens)
        return response.text or ""
