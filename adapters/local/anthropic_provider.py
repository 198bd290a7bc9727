"""
Local AI Provider — Direct Anthropic API.

Expects wire messages from ClaudeAdapter. No SDK dependency.
"""

from agent.interfaces.ai_provider import AIProvider, AIResponse, ToolCall
from adapters.local.http import post_json_async


class AnthropicProvider(AIProvider):
    """Calls the Anthropic Messages API directly using urllib."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.anthropic.com/v1",
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
            "system": system,
            "messages": messages,
            "max_tokens": max_tokens,
        }

        if tools:
            body["tools"] = tools

        result = await self._call_api(body)
        return self._parse_response(result)

    async def _call_api(self, body: dict) -> dict:
        """Make HTTP request to Anthropic API."""
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
        }
        return await post_json_async(
            f"{self.base_url}/messages", body, headers, self.timeout
        )

    def _parse_response(self, result: dict) -> AIResponse:
        """Parse Anthropic API response into AIResponse."""
        text_parts = []
        tool_calls = []

        for block in result.get("content", []):
            if block["type"] == "text":
                text_parts.append(block["text"])
            elif block["type"] == "tool_use":
                tool_calls.append(
                    ToolCall(
                        tool_name=block["name"],
                        tool_params=block["input"],
                        tool_use_id=block["id"],
                    )
                )

        return AIResponse(
            text="\n".join(text_parts) if text_parts else None,
            tool_calls=tool_calls,
            stop_reason=result.get("stop_reason", ""),
            input_tokens=result.get("usage", {}).get("input_tokens", 0),
            output_tokens=result.get("usage", {}).get("output_tokens", 0),
        )
