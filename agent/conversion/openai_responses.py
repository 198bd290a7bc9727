"""
OpenAI Responses wire adapter.

Content is an array of typed blocks. Text is tagged output_text when the
assistant wrote it and input_text otherwise; images and files travel as
data URIs.
"""

import json
from typing import Optional

from agent.conversion.base import WireAdapter, to_data_uri
from agent.interfaces.ai_provider import AIResponse, ToolCall, ToolDefinition
from agent.models.envelope import ATTACHMENT_FALLBACK_MSG
from agent.models.message import CanonicalMessage, ContentType, Role


class OpenAIResponsesAdapter(WireAdapter):

    def convert(self, messages: list[CanonicalMessage]) -> list[dict]:
        wire: list[dict] = []

        for message in messages:
            text_type = "output_text" if message.role == Role.ASSISTANT else "input_text"
            has_text = message.has_text_like()
            content = []

            for item in message.content:
                if item.type == ContentType.IMAGE:
                    content.append({
                        "type": "input_image",
                        "image_url": to_data_uri(item.mimetype, item.value),
                    })
                elif item.type == ContentType.FILE:
                    content.append({
                        "type": "input_file",
                        "file_data": to_data_uri(item.mimetype, item.value),
                        "filename": item.filename,
                    })
                elif item.is_text_like:
                    content.append({"type": text_type, "text": self.envelope_text(message, item)})
                    continue
                else:
                    self.skip(item)
                    continue

                if not has_text:
                    content.append({
                        "type": text_type,
                        "text": self.envelope_text(
                            message, item, text=ATTACHMENT_FALLBACK_MSG, tag="text"
                        ),
                    })

            wire.append({"role": message.role.value, "content": content})

        return wire

    def format_tools(self, tools: list[ToolDefinition]) -> list[dict]:
        return [
            {
                "type": "function",
                "name": t.name,
                "description": t.description,
                "parameters": t.input_schema,
                "strict": False,
            }
            for t in tools
        ]

    def tool_call_entries(self, response: AIResponse) -> list[dict]:
        text_entry = self.final_entry(response)
        entries = [text_entry] if text_entry else []
        return entries + [
            {
                "type": "function_call",
                "call_id": call.tool_use_id,
                "name": call.tool_name,
                "arguments": json.dumps(call.tool_params, ensure_ascii=False),
            }
            for call in response.tool_calls
        ]

    def tool_result_entries(self, results: list[tuple[ToolCall, str]]) -> list[dict]:
        return [
            {"type": "function_call_output", "call_id": call.tool_use_id, "output": output}
            for call, output in results
        ]

    def final_entry(self, response: AIResponse) -> Optional[dict]:
        if not response.text:
            return None
        return {
            "role": "assistant",
            "content": [{"type": "output_text", "text": response.text}],
        }
