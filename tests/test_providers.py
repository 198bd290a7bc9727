"""
Provider transport tests.

No network: the HTTP helper and the boto3 client are replaced, and the
tests check what each transport sends and how it reads the reply.
"""

import base64
import io
import json
import sys
import urllib.error
import urllib.request
from pathlib import Path

import pytest
from botocore.exceptions import ClientError

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import adapters.local.anthropic_provider as anthropic_module
import adapters.local.chat_completions_provider as chat_module
import adapters.local.openai_provider as openai_module
from agent.errors.exceptions import ProviderTransportError
from adapters.aws.bedrock_provider import BedrockProvider
from adapters.local.anthropic_provider import AnthropicProvider
from adapters.local.chat_completions_provider import ChatCompletionsProvider
from adapters.local.http import decode_tool_arguments, post_json
from adapters.local.openai_provider import OpenAIResponsesProvider


class FakePost:
    """Stands in for post_json_async; records requests, replays responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[dict] = []

    async def __call__(self, url, body, headers, timeout=120):
        self.requests.append({"url": url, "body": body, "headers": headers})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


# --- HTTP helper ---


def test_http_error_becomes_transport_error(monkeypatch):
    def fake_urlopen(req, timeout=None):
        raise urllib.error.HTTPError(
            req.full_url, 401, "Unauthorized", {}, io.BytesIO(b'{"error": "invalid x-api-key"}')
        )

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(ProviderTransportError) as exc:
        post_json("https://api.example.com/v1/messages", {}, {})

    assert exc.value.status_code == 401
    assert str(exc.value).startswith("HTTP 401 from api.example.com:")


def test_unreachable_host_becomes_transport_error(monkeypatch):
    def fake_urlopen(req, timeout=None):
        raise urllib.error.URLError("Name or service not known")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(ProviderTransportError) as exc:
        post_json("https://nowhere.invalid/v1", {}, {})

    assert exc.value.status_code is None


@pytest.mark.parametrize("raw, expected", [
    ('{"city": "Lisbon"}', {"city": "Lisbon"}),
    ("", {}),
    (None, {}),
    ({"already": "dict"}, {"already": "dict"}),
    ("not json", {"input": "not json"}),
])
def test_decode_tool_arguments(raw, expected):
    assert decode_tool_arguments(raw) == expected


# --- Anthropic ---


async def test_anthropic_request_and_tool_use(monkeypatch):
    fake = FakePost({
        "content": [
            {"type": "text", "text": "Let me check."},
            {"type": "tool_use", "id": "tu-1", "name": "ping", "input": {"echo": "x"}},
        ],
        "stop_reason": "tool_use",
        "usage": {"input_tokens": 12, "output_tokens": 7},
    })
    monkeypatch.setattr(anthropic_module, "post_json_async", fake)

    provider = AnthropicProvider("sk-test")
    tools = [{"name": "ping", "description": "d", "input_schema": {"type": "object"}}]
    response = await provider.chat("claude-x", "sys", [{"role": "user", "content": "hi"}], tools)

    request = fake.requests[0]
    assert request["url"] == "https://api.anthropic.com/v1/messages"
    assert request["headers"]["x-api-key"] == "sk-test"
    assert request["body"]["tools"] == tools
    assert request["body"]["system"] == "sys"

    assert response.text == "Let me check."
    assert response.tool_calls[0].tool_use_id == "tu-1"
    assert response.tool_calls[0].tool_params == {"echo": "x"}
    assert response.input_tokens == 12


async def test_anthropic_omits_empty_tools(monkeypatch):
    fake = FakePost({"content": [{"type": "text", "text": "hi"}]})
    monkeypatch.setattr(anthropic_module, "post_json_async", fake)

    await AnthropicProvider("sk-test").chat("claude-x", "sys", [], [])

    assert "tools" not in fake.requests[0]["body"]


# --- OpenAI Responses ---


async def test_openai_parses_output_items(monkeypatch):
    fake = FakePost({
        "status": "completed",
        "output": [
            {"type": "reasoning", "summary": []},
            {"type": "function_call", "call_id": "call-1", "name": "ping", "arguments": '{"echo": "y"}'},
            {"type": "message", "content": [{"type": "output_text", "text": "ok"}]},
        ],
        "usage": {"input_tokens": 3, "output_tokens": 4},
    })
    monkeypatch.setattr(openai_module, "post_json_async", fake)

    response = await OpenAIResponsesProvider("sk-test").chat("gpt-x", "sys", [], [])

    body = fake.requests[0]["body"]
    assert fake.requests[0]["url"] == "https://api.openai.com/v1/responses"
    assert body["instructions"] == "sys"
    assert body["input"] == []
    assert response.text == "ok"
    assert response.tool_calls[0].tool_use_id == "call-1"
    assert response.tool_calls[0].tool_params == {"echo": "y"}


# --- Chat completions ---


async def test_chat_completions_replaces_leading_system(monkeypatch):
    fake = FakePost({"choices": [{"message": {"content": "hi"}, "finish_reason": "stop"}]})
    monkeypatch.setattr(chat_module, "post_json_async", fake)

    provider = ChatCompletionsProvider("key", "https://api.deepseek.com/", provider_name="DEEPSEEK")
    await provider.chat(
        "deepseek-chat", "new system",
        [{"role": "system", "content": "old"}, {"role": "user", "content": "hi"}],
        [],
    )

    request = fake.requests[0]
    assert request["url"] == "https://api.deepseek.com/chat/completions"
    assert request["body"]["messages"] == [
        {"role": "system", "content": "new system"},
        {"role": "user", "content": "hi"},
    ]


async def test_chat_completions_parses_tool_calls(monkeypatch):
    fake = FakePost({
        "choices": [{
            "message": {
                "content": None,
                "tool_calls": [{
                    "id": "call-3",
                    "type": "function",
                    "function": {"name": "ping", "arguments": '{"echo": "z"}'},
                }],
            },
            "finish_reason": "tool_calls",
        }],
        "usage": {"prompt_tokens": 5, "completion_tokens": 2},
    })
    monkeypatch.setattr(chat_module, "post_json_async", fake)

    response = await ChatCompletionsProvider("key", "https://x.test/v1").chat("m", "", [], [])

    assert response.text is None
    assert response.has_tool_use
    assert response.tool_calls[0].tool_name == "ping"
    assert response.tool_calls[0].tool_params == {"echo": "z"}
    assert response.input_tokens == 5


def test_chat_completions_requires_base_url():
    with pytest.raises(ValueError):
        ChatCompletionsProvider("key", "", provider_name="CUSTOM")


async def test_complete_retries_once_then_succeeds(monkeypatch):
    fake = FakePost(
        ProviderTransportError("HTTP 500 from x.test: oops", 500),
        {"choices": [{"message": {"content": '{"message": "ok"}'}}]},
    )
    monkeypatch.setattr(chat_module, "post_json_async", fake)

    provider = ChatCompletionsProvider("key", "https://x.test/v1")
    provider.RETRY_BACKOFF_SECONDS = 0

    text = await provider.complete("m", "sys", [{"role": "user", "content": "hi"}])

    assert text == '{"message": "ok"}'
    assert len(fake.requests) == 2
    assert fake.requests[0]["body"]["response_format"] == {"type": "json_object"}


async def test_complete_gives_up_after_second_failure(monkeypatch):
    fake = FakePost(
        {"choices": [{"message": {"content": ""}}]},
        ProviderTransportError("HTTP 503 from x.test: down", 503),
    )
    monkeypatch.setattr(chat_module, "post_json_async", fake)

    provider = ChatCompletionsProvider("key", "https://x.test/v1")
    provider.RETRY_BACKOFF_SECONDS = 0

    with pytest.raises(ProviderTransportError) as exc:
        await provider.complete("m", "sys", [])

    assert len(fake.requests) == 2
    assert "Failed after 2 attempts" in str(exc.value)
    assert exc.value.status_code == 503


# --- Bedrock ---


class FakeBedrockClient:
    def __init__(self, response=None, error=None):
        self.response = response or {
            "output": {"message": {"content": [{"text": "hello"}]}},
            "stopReason": "end_turn",
            "usage": {"inputTokens": 1, "outputTokens": 2},
        }
        self.error = error
        self.requests: list[dict] = []

    def converse(self, **kwargs):
        self.requests.append(kwargs)
        if self.error:
            raise self.error
        return self.response


async def test_bedrock_converts_claude_wire_messages():
    client = FakeBedrockClient()
    provider = BedrockProvider(model_id="anthropic.claude-x", client=client)
    png = base64.b64encode(b"png-bytes").decode()

    messages = [
        {"role": "user", "content": [
            {"type": "text", "text": "look"},
            {"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": png}},
        ]},
        {"role": "assistant", "content": [
            {"type": "tool_use", "id": "tu-1", "name": "ping", "input": {}},
        ]},
        {"role": "user", "content": [
            {"type": "tool_result", "tool_use_id": "tu-1", "content": '{"success": true}'},
        ]},
    ]
    tools = [{"name": "ping", "description": "d", "input_schema": {"type": "object"}}]

    response = await provider.chat("", "sys", messages, tools)

    request = client.requests[0]
    assert request["modelId"] == "anthropic.claude-x"
    assert request["system"] == [{"text": "sys"}]
    converted = request["messages"]
    assert converted[0]["content"][1] == {"image": {"format": "png", "source": {"bytes": b"png-bytes"}}}
    assert converted[1]["content"][0]["toolUse"]["toolUseId"] == "tu-1"
    assert converted[2]["content"][0]["toolResult"]["content"] == [{"json": {"success": True}}]
    assert request["toolConfig"]["tools"][0]["toolSpec"]["inputSchema"] == {"json": {"type": "object"}}
    assert response.text == "hello"


async def test_bedrock_client_error_becomes_transport_error():
    error = ClientError(
        {"Error": {"Code": "ThrottlingException", "Message": "Too many requests"}}, "Converse"
    )
    provider = BedrockProvider(model_id="anthropic.claude-x", client=FakeBedrockClient(error=error))

    with pytest.raises(ProviderTransportError) as exc:
        await provider.chat("", "sys", [{"role": "user", "content": "hi"}], [])

    assert "ThrottlingException" in str(exc.value)


def test_bedrock_requires_model_id():
    with pytest.raises(ValueError):
        BedrockProvider(client=FakeBedrockClient())
