"""
Local Conversation Cache — in-process dict.

Entries live for ttl_seconds from their last write. A ttl of zero or
less keeps an entry until it is deleted.
"""

import copy
import time
from typing import Callable

from agent.interfaces.conversation_cache import ConversationCache


class InMemoryConversationCache(ConversationCache):
    """Dict-backed cache for a single process."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, list[dict]]] = {}

    async def get(self, chat_id: str) -> list[dict]:
        entry = self._entries.get(chat_id)
        if entry is None:
            return []

        expires_at, messages = entry
        if expires_at <= self._clock():
            del self._entries[chat_id]
            return []

        return copy.deepcopy(messages)

    async def set(self, chat_id: str, messages: list[dict], ttl_seconds: int) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds > 0 else float("inf")
        self._entries[chat_id] = (expires_at, copy.deepcopy(messages))

    async def delete(self, chat_id: str) -> None:
        self._entries.pop(chat_id, None)

    def __len__(self) -> int:
        return len(self._entries)
