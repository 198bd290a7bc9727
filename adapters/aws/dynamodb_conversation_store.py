"""
AWS Conversation Cache — DynamoDB.

Schema:
  pk: {chat_id}
  messages: JSON list of wire messages
  updated_at: ISO timestamp
  ttl: Unix timestamp (absent when the entry never expires)

DynamoDB deletes expired items lazily, so get() also checks ttl.
"""

import json
import time
from datetime import datetime, timezone

import boto3

from agent.interfaces.conversation_cache import ConversationCache


class DynamoDBConversationCache(ConversationCache):
    """DynamoDB-backed conversation cache."""

    def __init__(self, table_name: str, region: str = "us-east-1", table=None):
        self.table = table or boto3.resource("dynamodb", region_name=region).Table(table_name)

    async def get(self, chat_id: str) -> list[dict]:
        response = self.table.get_item(Key={"pk": chat_id})

        item = response.get("Item")
        if not item:
            return []

        ttl = item.get("ttl")
        if ttl is not None and int(ttl) <= int(time.time()):
            return []

        return json.loads(item.get("messages", "[]"))

    async def set(self, chat_id: str, messages: list[dict], ttl_seconds: int) -> None:
        item = {
            "pk": chat_id,
            "messages": json.dumps(messages, ensure_ascii=False),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        if ttl_seconds > 0:
            item["ttl"] = int(time.time()) + ttl_seconds

        self.table.put_item(Item=item)

    async def delete(self, chat_id: str) -> None:
        self.table.delete_item(Key={"pk": chat_id})
