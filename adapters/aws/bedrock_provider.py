"""
AWS AI Provider — Amazon Bedrock.

Calls Claude via Bedrock. Uses IAM role auth (no API key needed).
Takes the same wire messages and tool definitions as the direct
Anthropic provider and converts them to Converse format.
"""

import asyncio
import base64
import json

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from agent.errors.exceptions import ProviderTransportError
from agent.interfaces.ai_provider import AIProvider, AIResponse, ToolCall


class BedrockProvider(AIProvider):
    """Calls Claude via Amazon Bedrock using the Converse API."""

    def __init__(
        self,
        region: str = "us-east-1",
        model_id: str | None = None,
        client=None,
    ):
        if not model_id:
            raise ValueError(
                "model_id is required — set CHAT_MODEL env var or pass explicitly"
            )
        self.client = client or boto3.client("bedrock-runtime", region_name=region or "us-east-1")
        self.model_id = model_id

    async def chat(
        self,
        model: str,
        system: str,
        messages: list[dict],
        tools: list[dict],
        max_tokens: int = 2048,
    ) -> AIResponse:
        request = self._build_request(model, system, messages, tools, max_tokens)
        try:
            response = await asyncio.to_thread(lambda: self.client.converse(**request))
        except (ClientError, BotoCoreError) as e:
            raise ProviderTransportError(str(e)) from e
        return self._parse_response(response)

    def _build_request(
        self,
        model: str,
        system: str,
        messages: list[dict],
        tools: list[dict],
        max_tokens: int,
    ) -> dict:
        """Build Bedrock Converse API request."""
        request = {
            "modelId": model or self.model_id,
            "messages": self._convert_messages(messages),
            "inferenceConfig": {
                "maxTokens": max_tokens,
            },
        }

        if system:
            request["system"] = [{"text": system}]

        if tools:
            request["toolConfig"] = {
                "tools": [
                    {
                        "toolSpec": {
                            "name": t["name"],
                            "description": t.get("description", ""),
                            "inputSchema": {"json": t.get("input_schema", {"type": "object"})},
                        }
                    }
                    for t in tools
                ]
            }

        return request

    def _convert_messages(self, messages: list[dict]) -> list[dict]:
        """Convert Anthropic-format messages to Bedrock Converse format."""
        converted = []
        for msg in messages:
            content = msg.get("content")

            if isinstance(content, list):
                bedrock_content = [self._convert_block(block) for block in content]
            else:
                bedrock_content = [{"text": str(content)}]

            converted.append({
                "role": msg["role"],
                "content": bedrock_content,
            })

        return converted

    @staticmethod
    def _convert_block(block) -> dict:
        if not isinstance(block, dict):
            return {"text": str(block)}

        kind = block.get("type")
        if kind == "text":
            return {"text": block["text"]}
        if kind == "image":
            source = block["source"]
            return {
                "image": {
                    "format": source["media_type"].split("/")[-1],
                    "source": {"bytes": base64.b64decode(source["data"])},
                }
            }
        if kind == "tool_use":
            return {
                "toolUse": {
                    "toolUseId": block["id"],
                    "name": block["name"],
                    "input": block["input"],
                }
            }
        if kind == "tool_result":
            return {
                "toolResult": {
                    "toolUseId": block["tool_use_id"],
                    "content": [_tool_result_content(block["content"])],
                }
            }
        # Already in Bedrock-native format
        if "toolUse" in block or "toolResult" in block:
            return block
        return {"text": str(block)}

    def _parse_response(self, response: dict) -> AIResponse:
        """Parse Bedrock Converse API response."""
        text_parts = []
        tool_calls = []

        output = response.get("output", {})
        message = output.get("message", {})

        for block in message.get("content", []):
            if "text" in block:
                text_parts.append(block["text"])
            elif "toolUse" in block:
                tu = block["toolUse"]
                tool_calls.append(
                    ToolCall(
                        tool_name=tu["name"],
                        tool_params=tu["input"],
                        tool_use_id=tu["toolUseId"],
                    )
                )

        usage = response.get("usage", {})
        stop_reason = response.get("stopReason", "")

        return AIResponse(
            text="\n".join(text_parts) if text_parts else None,
            tool_calls=tool_calls,
            stop_reason=stop_reason,
            input_tokens=usage.get("inputTokens", 0),
            output_tokens=usage.get("outputTokens", 0),
        )


def _tool_result_content(content) -> dict:
    if isinstance(content, dict):
        return {"json": content}
    try:
        parsed = json.loads(content)
    except (TypeError, ValueError):
        return {"text": str(content)}
    return {"json": parsed} if isinstance(parsed, dict) else {"text": str(content)}
