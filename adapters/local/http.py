"""
JSON-over-HTTP helper for the provider transports.

Uses urllib (no dependencies). Every failure surfaces as a
ProviderTransportError whose text starts with "HTTP <status>" when the
server answered, so the error catalog can match it.
"""

import asyncio
import json
import urllib.error
import urllib.request
from urllib.parse import urlparse

from agent.errors.exceptions import ProviderTransportError


def post_json(url: str, body: dict, headers: dict, timeout: float = 120) -> dict:
    """POST a JSON body and decode the JSON response."""
    data = json.dumps(body).encode()
    host = urlparse(url).netloc

    req = urllib.request.Request(url, data=data, method="POST")
    for key, value in headers.items():
        req.add_header(key, value)
    req.add_header("content-type", "application/json")

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode()
    except urllib.error.HTTPError as e:
        detail = e.read().decode(errors="replace")[:300]
        raise ProviderTransportError(
            f"HTTP {e.code} from {host}: {detail}", status_code=e.code
        ) from e
    except urllib.error.URLError as e:
        raise ProviderTransportError(f"URLError talking to {host}: {e.reason}") from e
    except TimeoutError as e:
        raise ProviderTransportError(f"Request to {host} timed out after {timeout}s") from e

    try:
        return json.loads(raw)
    except ValueError as e:
        raise ProviderTransportError(f"Invalid JSON from {host}: {raw[:200]}") from e


async def post_json_async(url: str, body: dict, headers: dict, timeout: float = 120) -> dict:
    """post_json() off the event loop, so other chats keep moving."""
    return await asyncio.to_thread(post_json, url, body, headers, timeout)


def decode_tool_arguments(arguments) -> dict:
    """Decode tool-call arguments sent as a JSON string."""
    if isinstance(arguments, dict):
        return arguments
    if not arguments:
        return {}
    try:
        parsed = json.loads(arguments)
    except ValueError:
        return {"input": arguments}
    return parsed if isinstance(parsed, dict) else {"input": parsed}
