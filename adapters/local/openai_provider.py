"""
Local AI Provider — OpenAI Responses API.

Expects input items from OpenAIResponsesAdapter.
"""

from agent.interfaces.ai_provider import AIProvider, AIResponse, ToolCall
from adapters.local.http import decode_tool_arguments, post_json_async


class OpenAIResponsesProvider(AIProvider):
    """Calls POST /v1/responses using urllib."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 120,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def chat(
        self,
        model: str,
        system: str,
        messages: list[dict],
        tools: list[dict],
        max_tokens: int = 2048,
    ) -> AIResponse:
        body = {
            "model": model,
            "instructions": system,
            "input": messages,
            "max_output_tokens": max_tokens,
            "store": True,
        }

        if tools:
            body["tools"] = tools

        result = await post_json_async(
            f"{self.base_url}/responses",
            body,
            {"Authorization": f"Bearer {self.api_key}"},
            self.timeout,
        )
        return self._parse_response(result)

    def _parse_response(self, result: dict) -> AIResponse:
        """Collect output_text parts and function_call items."""
        text_parts = []
        tool_calls = []

        for item in result.get("output", []):
            if item.get("type") == "message":
                for part in item.get("content", []):
                    if part.get("type") == "output_text":
                        text_parts.append(part.get("text", ""))
            elif item.get("type") == "function_call":
                tool_calls.append(
                    ToolCall(
                        tool_name=item["name"],
                        tool_params=decode_tool_arguments(item.get("arguments")),
                        tool_use_id=item["call_id"],
                    )
                )

        usage = result.get("usage") or {}
        return AIResponse(
            text="".join(text_parts) if text_parts else None,
            tool_calls=tool_calls,
            stop_reason=result.get("status", ""),
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
        )
