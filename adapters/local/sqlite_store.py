"""
Local Conversation Cache — SQLite.

For local development. No DynamoDB dependency.
Keeps each chat's wire history in a local SQLite file so it survives
a restart of the dev server.
"""

import json
import sqlite3
import time
from datetime import datetime, timezone
from pathlib import Path

from agent.interfaces.conversation_cache import ConversationCache


class SQLiteConversationCache(ConversationCache):
    """SQLite-backed conversation cache for local development."""

    def __init__(self, db_path: str = "data/relay.db"):
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS conversation_cache (
                    chat_id TEXT PRIMARY KEY,
                    messages TEXT NOT NULL DEFAULT '[]',
                    expires_at REAL,
                    updated_at TEXT NOT NULL
                )
            """)

    async def get(self, chat_id: str) -> list[dict]:
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT messages, expires_at FROM conversation_cache WHERE chat_id = ?",
                (chat_id,),
            ).fetchone()

            if not row:
                return []

            messages, expires_at = row
            if expires_at is not None and expires_at <= time.time():
                conn.execute("DELETE FROM conversation_cache WHERE chat_id = ?", (chat_id,))
                return []

        return json.loads(messages)

    async def set(self, chat_id: str, messages: list[dict], ttl_seconds: int) -> None:
        now = datetime.now(timezone.utc).isoformat()
        expires_at = time.time() + ttl_seconds if ttl_seconds > 0 else None
        payload = json.dumps(messages, ensure_ascii=False)

        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """INSERT INTO conversation_cache (chat_id, messages, expires_at, updated_at)
                   VALUES (?, ?, ?, ?)
                   ON CONFLICT(chat_id)
                   DO UPDATE SET messages = ?, expires_at = ?, updated_at = ?""",
                (chat_id, payload, expires_at, now, payload, expires_at, now),
            )

    async def delete(self, chat_id: str) -> None:
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM conversation_cache WHERE chat_id = ?", (chat_id,))
