"""
Local AI Provider — OpenAI-compatible chat completions.

Serves DeepSeek, Qwen, DeepInfra and any custom endpoint that speaks
POST {base_url}/chat/completions.
"""

import asyncio
import logging
from typing import Optional

from agent.errors.exceptions import ProviderTransportError
from agent.interfaces.ai_provider import AIProvider, AIResponse, ToolCall
from adapters.local.http import decode_tool_arguments, post_json_async

logger = logging.getLogger(__name__)


class ChatCompletionsProvider(AIProvider):
    """Calls an OpenAI-compatible /chat/completions endpoint using urllib."""

    MAX_RETRIES = 1
    RETRY_BACKOFF_SECONDS = 0.5

    def __init__(
        self,
        api_key: str,
        base_url: str,
        provider_name: str = "CUSTOM",
        timeout: float = 120,
    ):
        if not base_url:
            raise ValueError(f"base_url is required for provider {provider_name}")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.provider_name = provider_name
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
            "messages": self._with_system(messages, system),
            "max_tokens": max_tokens,
        }

        if tools:
            body["tools"] = tools

        result = await self._call_api(body)
        return self._parse_response(result)

    async def complete(
        self,
        model: str,
        system: str,
        messages: list[dict],
        max_tokens: int = 2048,
    ) -> str:
        """
        Single-turn JSON completion. Retries once after a fixed backoff;
        an empty completion counts as a failure.
        """
        body = {
            "model": model,
            "messages": self._with_system(messages, system),
            "max_tokens": max_tokens,
            "response_format": {"type": "json_object"},
        }
        attempts = self.MAX_RETRIES + 1
        last_error: Optional[ProviderTransportError] = None

        for attempt in range(1, attempts + 1):
            try:
                text = self._parse_response(await self._call_api(body)).text
                if not text:
                    raise ProviderTransportError(
                        f"{self.provider_name} returned an empty response."
                    )
                return text
            except ProviderTransportError as e:
                last_error = e
                if attempt < attempts:
                    logger.warning(
                        f"[{self.provider_name}->complete] Attempt {attempt}/{attempts} failed: {e}"
                    )
                    await asyncio.sleep(self.RETRY_BACKOFF_SECONDS)

        logger.error(
            f"[{self.provider_name}->complete] All {attempts} attempts failed. Last error: {last_error}"
        )
        raise ProviderTransportError(
            f"Failed after {attempts} attempts. Last error: {last_error}",
            status_code=last_error.status_code if last_error else None,
        )

    async def _call_api(self, body: dict) -> dict:
        headers = {"Authorization": f"Bearer {self.api_key}"} if self.api_key else {}
        return await post_json_async(
            f"{self.base_url}/chat/completions", body, headers, self.timeout
        )

    @staticmethod
    def _with_system(messages: list[dict], system: str) -> list[dict]:
        """Put the system prompt first, replacing any leading system message."""
        if not system:
            return list(messages)
        rest = messages[1:] if messages and messages[0].get("role") == "system" else messages
        return [{"role": "system", "content": system}] + list(rest)

    def _parse_response(self, result: dict) -> AIResponse:
        choices = result.get("choices") or []
        if not choices:
            raise ProviderTransportError(f"{self.provider_name} returned no choices")

        choice = choices[0]
        message = choice.get("message", {})
        tool_calls = []

        for call in message.get("tool_calls") or []:
            if call.get("type", "function") != "function":
                logger.error(
                    f"[{self.provider_name}] Unknown tool call type received: '{call.get('type')}'"
                )
                continue
            function = call.get("function", {})
            tool_calls.append(
                ToolCall(
                    tool_name=function.get("name", ""),
                    tool_params=decode_tool_arguments(function.get("arguments")),
                    tool_use_id=call.get("id", ""),
                )
            )

        usage = result.get("usage") or {}
        return AIResponse(
            text=message.get("content") or None,
            tool_calls=tool_calls,
            stop_reason=choice.get("finish_reason", ""),
            input_tokens=usage.get("prompt_tokens", 0),
            output_tokens=usage.get("completion_tokens", 0),
        )
