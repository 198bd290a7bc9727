"""
Wire Adapter — base class for provider-specific message shaping.

Every AI provider wants a different structure: alternating roles or free
role sequences, block arrays or single strings, distinct keys for assistant
and user text. A WireAdapter turns canonical messages into that structure and
knows how the provider expects tool calls and tool results to be replayed.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Optional

from agent.interfaces.ai_provider import AIResponse, ToolCall, ToolDefinition
from agent.models.envelope import MetadataEnvelope
from agent.models.message import CanonicalMessage, ContentItem

logger = logging.getLogger(__name__)

_DATA_URI = re.compile(r"data:[\w/+.-]+;base64,[A-Za-z0-9+/=]+")
_BASE64_RUN = re.compile(r"[A-Za-z0-9+/]{256,}={0,2}")


def to_data_uri(mimetype: Optional[str], value: str) -> str:
    return f"data:{mimetype};base64,{value}"


def redact_media(payload: str) -> str:
    """Replace inline base64 media with a size marker, for debug logs."""
    payload = _DATA_URI.sub(lambda m: f"<base64 {len(m.group())} chars>", payload)
    return _BASE64_RUN.sub(lambda m: f"<base64 {len(m.group())} chars>", payload)


class WireAdapter(ABC):
    """
    Base class for all provider wire adapters.

    Subclasses must implement convert(). The tool-related hooks default to
    the OpenAI chat-completions shape, which most compatible providers share.
    """

    @abstractmethod
    def convert(self, messages: list[CanonicalMessage]) -> list[dict]:
        """Convert canonical messages into this provider's wire messages."""
        ...

    def extend(self, conversation: list[dict], messages: list[CanonicalMessage]) -> None:
        """Append the converted messages to an existing wire conversation."""
        conversation.extend(self.convert(messages))

    def format_tools(self, tools: list[ToolDefinition]) -> list[dict]:
        """Shape tool declarations the way this provider expects them."""
        return [
            {
                "type": "function",
                "function": {
                    "name": t.name,
                    "description": t.description,
                    "parameters": t.input_schema,
                },
            }
            for t in tools
        ]

    def tool_call_entries(self, response: AIResponse) -> list[dict]:
        """Wire entries recording the assistant's tool-call turn."""
        return [
            {
                "role": "assistant",
                "content": response.text,
                "tool_calls": [
                    {
                        "id": call.tool_use_id,
                        "type": "function",
                        "function": {
                            "name": call.tool_name,
                            "arguments": json.dumps(call.tool_params, ensure_ascii=False),
                        },
                    }
                    for call in response.tool_calls
                ],
            }
        ]

    def tool_result_entries(self, results: list[tuple[ToolCall, str]]) -> list[dict]:
        """Wire entries carrying serialized tool results, in call order."""
        return [
            {"role": "tool", "tool_call_id": call.tool_use_id, "content": output}
            for call, output in results
        ]

    def final_entry(self, response: AIResponse) -> Optional[dict]:
        """Wire entry for the final assistant reply. None if there is no text."""
        if not response.text:
            return None
        return {"role": "assistant", "content": response.text}

    # --- Helpers ---

    def envelope_text(
        self,
        message: CanonicalMessage,
        item: ContentItem,
        text: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> str:
        return MetadataEnvelope.build(message, item, text=text, tag=tag).serialize()

    def skip(self, item: ContentItem) -> None:
        logger.debug(
            f"{type(self).__name__}: ignoring unsupported content type '{item.type}'"
        )
