"""
Metadata envelope.

Providers only accept plain text (or content blocks), yet the model must be
able to quote a message id back when it calls a tool. Every text-like item is
therefore sent as a small JSON object serialized to a string:

    {"message": "...", "msg_id": "...", "type": "text",
     "author_id": "...", "author_name": "...", "date": "..."}
"""

import json
from dataclasses import dataclass
from typing import Optional

from agent.models.message import CanonicalMessage, ContentItem

ATTACHMENT_FALLBACK_MSG = (
    "SYSTEM: this message is only to include the msg_id of the attached "
    "file/image. Do not mention msg_id in the chat"
)


def unsupported_message(content_type: str, body: str = "") -> str:
    """Placeholder text for content a provider cannot receive natively."""
    body_part = f', body:"{body}"' if body else ""
    return f'<Unsupported message: {{type:"{content_type}"{body_part}}}>'


@dataclass
class MetadataEnvelope:
    message: Optional[str]
    msg_id: Optional[str]
    type: str
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def build(
        cls,
        message: CanonicalMessage,
        item: ContentItem,
        text: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> "MetadataEnvelope":
        """
        Build the envelope for one content item.

        Args:
            message: The canonical message the item belongs to
            item: The content item being described
            text: Overrides the envelope message (defaults to item.value)
            tag: Overrides the envelope type (defaults to item.type)
        """
        return cls(
            message=text if text is not None else item.value,
            msg_id=item.msg_id,
            type=tag if tag is not None else str(item.type),
            author_id=item.author_id,
            author_name=item.author_name or message.name,
            date=item.date_string,
        )

    def to_dict(self) -> dict:
        data = {"message": self.message, "msg_id": self.msg_id, "type": self.type}
        for key in ("author_id", "author_name", "date"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    def serialize(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def deserialize(cls, raw: str) -> "MetadataEnvelope":
        data = json.loads(raw)
        return cls(
            message=data.get("message"),
            msg_id=data.get("msg_id"),
            type=data.get("type", "text"),
            author_id=data.get("author_id"),
            author_name=data.get("author_name"),
            date=data.get("date"),
        )
