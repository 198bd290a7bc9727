"""
Conversation Cache Interface

Per-chat, TTL-bounded store of already converted wire messages.
Implementations: InMemoryConversationCache, SQLiteConversationCache (local),
DynamoDBConversationCache (AWS).
"""

from abc import ABC, abstractmethod


class ConversationCache(ABC):
    """
    Abstract base class for the wire conversation cache.

    Entries are keyed by chat identity. Writes are last-writer-wins; callers
    serialize runs per chat (see agent.router.locks).
    """

    @abstractmethod
    async def get(self, chat_id: str) -> list[dict]:
        """
        Return the cached wire messages for a chat.

        Returns a fresh list (empty when missing or expired). Callers may
        mutate it without affecting the stored entry.
        """
        ...

    @abstractmethod
    async def set(self, chat_id: str, messages: list[dict], ttl_seconds: int) -> None:
        """Replace the chat's entry and restart its time-to-live."""
        ...

    @abstractmethod
    async def delete(self, chat_id: str) -> None:
        """Drop the chat's entry. No-op when missing."""
        ...
