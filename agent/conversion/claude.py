"""
Claude wire adapter.

The Messages API wants strictly alternating user/assistant turns, each a list
of content blocks, and the conversation must open with a user turn.
"""

from typing import Optional

from agent.conversion.base import WireAdapter
from agent.interfaces.ai_provider import AIResponse, ToolCall, ToolDefinition
from agent.models.envelope import ATTACHMENT_FALLBACK_MSG
from agent.models.message import CanonicalMessage, ContentType, Role


class ClaudeAdapter(WireAdapter):

    def convert(self, messages: list[CanonicalMessage]) -> list[dict]:
        wire = self._blocks(messages)

        # The first turn must come from the user
        if wire and wire[0]["role"] != Role.USER.value:
            wire.pop(0)

        return wire

    def extend(self, conversation: list[dict], messages: list[CanonicalMessage]) -> None:
        if not conversation:
            conversation.extend(self.convert(messages))
            return
        for entry in self._blocks(messages):
            self._push(conversation, entry["role"], entry["content"])

    def _blocks(self, messages: list[CanonicalMessage]) -> list[dict]:
        wire: list[dict] = []
        current_role = Role.USER.value
        block: list[dict] = []

        for message in messages:
            role = self._wire_role(message)
            if role != current_role:
                self._push(wire, current_role, block)
                block = []
                current_role = role

            has_text = message.has_text_like()
            for item in message.content:
                if item.is_text_like:
                    block.append({"type": "text", "text": self.envelope_text(message, item)})
                elif item.type == ContentType.IMAGE:
                    block.append({
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": item.mimetype,
                            "data": item.value,
                        },
                    })
                    if not has_text:
                        block.append({
                            "type": "text",
                            "text": self.envelope_text(
                                message, item, text=ATTACHMENT_FALLBACK_MSG, tag="text"
                            ),
                        })
                else:
                    self.skip(item)

        self._push(wire, current_role, block)
        return wire

    def format_tools(self, tools: list[ToolDefinition]) -> list[dict]:
        return [
            {
                "name": t.name,
                "description": t.description,
                "input_schema": t.input_schema,
            }
            for t in tools
        ]

    def tool_call_entries(self, response: AIResponse) -> list[dict]:
        content = []
        if response.text:
            content.append({"type": "text", "text": response.text})
        for call in response.tool_calls:
            content.append({
                "type": "tool_use",
                "id": call.tool_use_id,
                "name": call.tool_name,
                "input": call.tool_params,
            })
        return [{"role": "assistant", "content": content}]

    def tool_result_entries(self, results: list[tuple[ToolCall, str]]) -> list[dict]:
        # All results for one assistant turn go back in a single user turn
        return [
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": call.tool_use_id,
                        "content": output,
                    }
                    for call, output in results
                ],
            }
        ]

    def final_entry(self, response: AIResponse) -> Optional[dict]:
        if not response.text:
            return None
        return {"role": "assistant", "content": [{"type": "text", "text": response.text}]}

    @staticmethod
    def _wire_role(message: CanonicalMessage) -> str:
        # The API rejects assistant-authored images, and has no system turns
        if message.role == Role.ASSISTANT and message.has_image():
            return Role.USER.value
        if message.role == Role.SYSTEM:
            return Role.USER.value
        return message.role.value

    @staticmethod
    def _push(wire: list[dict], role: str, block: list[dict]) -> None:
        if not block:
            return
        if wire and wire[-1]["role"] == role:
            wire[-1]["content"].extend(block)
        else:
            wire.append({"role": role, "content": list(block)})
