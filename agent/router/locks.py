"""
Lock Registry — serializes relay runs per chat.

The conversation cache is last-writer-wins, so two runs for the same chat
must never overlap. Different chats proceed independently.
"""

import asyncio
from contextlib import asynccontextmanager


class ChatLockRegistry:

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}  # holders + waiters per chat

    def is_busy(self, chat_id: str) -> bool:
        lock = self._locks.get(chat_id)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, chat_id: str):
        lock = self._locks.setdefault(chat_id, asyncio.Lock())
        self._users[chat_id] = self._users.get(chat_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[chat_id] -= 1
            if self._users[chat_id] == 0:
                del self._users[chat_id]
                del self._locks[chat_id]
