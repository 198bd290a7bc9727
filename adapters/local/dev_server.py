"""
Relay Local Development Server

A small HTTP server that wires the relay together from .env settings.

Endpoints:
    POST /api/chat   {"chat_id", "messages": [...], "system"?, "skills"?}
    POST /api/reset  {"chat_id"}
    GET  /health

Usage:
    python -m adapters.local.dev_server
"""

import asyncio
import json
import logging
import os
import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from agent.config import RelayConfig
from agent.models.message import CanonicalMessage
from agent.router.router import Router
from adapters.factory import create_router

logger = logging.getLogger("relay.dev")

DEFAULT_CHAT = "dashboard-default"

# --- Global state (initialized in main) ---
config: RelayConfig
router: Router
loop: asyncio.AbstractEventLoop


class BadRequest(ValueError):
    pass


def parse_chat_request(body: dict) -> tuple[str, list[CanonicalMessage], Optional[str], Optional[list[str]]]:
    """Validate a /api/chat body and build the canonical messages."""
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")

    chat_id = str(body.get("chat_id") or DEFAULT_CHAT)
    raw_messages = body.get("messages")
    if not isinstance(raw_messages, list) or not raw_messages:
        raise BadRequest("'messages' must be a non-empty list")
    if not all(isinstance(m, dict) for m in raw_messages):
        raise BadRequest("Each message must be a JSON object")

    try:
        messages = [CanonicalMessage.from_dict(m) for m in raw_messages]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise BadRequest(f"Invalid message: {e}") from e

    skills = body.get("skills")
    if skills is not None and not isinstance(skills, list):
        raise BadRequest("'skills' must be a list of skill names")

    return chat_id, messages, body.get("system"), skills


def parse_reset_request(body: dict) -> str:
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object")
    return str(body.get("chat_id") or DEFAULT_CHAT)


def default_system_prompt(bot_name: str) -> str:
    return f"""You are {bot_name}, a member of a group chat.
Every user message is a JSON object with the fields message, msg_id, type,
author_id, author_name and date.
Reply with a single JSON object: {{"message": "...", "author": "{bot_name}", "type": "text"}}.
Set "message" to null when you have nothing to say."""


def _run_async(coro):
    """Run a coroutine on the server's event loop and wait for the result."""
    return asyncio.run_coroutine_threadsafe(coro, loop).result()


class DevHandler(BaseHTTPRequestHandler):
    """HTTP request handler for local development."""

    def do_GET(self):
        path = urlparse(self.path).path

        if path == "/health":
            self._json_response({
                "status": "ok",
                "provider": config.provider.value,
                "model": config.model,
                "cache": config.cache_backend,
            })
        else:
            self.send_error(404)

    def do_POST(self):
        path = urlparse(self.path).path

        if path == "/api/chat":
            self._handle_chat()
        elif path == "/api/reset":
            self._handle_reset()
        else:
            self.send_error(404)

    def _read_body(self) -> dict:
        length = int(self.headers.get("Content-Length") or 0)
        return json.loads(self.rfile.read(length) or b"{}")

    def _handle_chat(self):
        try:
            chat_id, messages, system, skills = parse_chat_request(self._read_body())
        except (BadRequest, ValueError) as e:
            self._json_response({"error": str(e)}, 400)
            return

        logger.info(f"Chat {chat_id}: {len(messages)} message(s)")
        try:
            answer = _run_async(router.handle_message(
                chat_id,
                messages,
                system or default_system_prompt(config.bot_name),
                config.bot_name,
                enabled_skills=skills,
            ))
        except Exception as e:
            logger.exception("Chat error")
            self._json_response({"error": str(e)}, 500)
            return

        self._json_response({
            "chat_id": chat_id,
            "answer": answer.to_dict() if answer else None,
        })

    def _handle_reset(self):
        try:
            chat_id = parse_reset_request(self._read_body())
        except ValueError as e:
            self._json_response({"error": str(e)}, 400)
            return
        _run_async(router.reset(chat_id))
        self._json_response({"reset": True, "chat_id": chat_id})

    def _json_response(self, data: dict, status: int = 200):
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(data, ensure_ascii=False).encode())

    def do_OPTIONS(self):
        self.send_response(204)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()

    def log_message(self, format, *args):
        pass


def init():
    """Initialize all components."""
    global config, router, loop

    config = RelayConfig.from_env(".env")
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    try:
        config.validate()
    except ValueError as e:
        logger.error(f"{e} Copy .env.example to .env and fill it in.")
        sys.exit(1)

    router = create_router(config)

    loop = asyncio.new_event_loop()
    threading.Thread(target=loop.run_forever, daemon=True).start()


def main():
    init()

    port = int(os.getenv("PORT", "8080"))
    server = ThreadingHTTPServer(("0.0.0.0", port), DevHandler)

    logger.info(f"Relay dev server on http://localhost:{port} ({config.provider.value})")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        server.server_close()
        loop.call_soon_threadsafe(loop.stop)


if __name__ == "__main__":
    main()
