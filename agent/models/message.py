"""
Canonical message models.
Provider-agnostic representations that every wire adapter consumes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ContentType(str, Enum):
    """Tag of a single content item."""
    TEXT = "text"
    ASR = "asr"        # Transcribed audio
    IMAGE = "image"
    FILE = "file"


TEXT_LIKE = (ContentType.TEXT, ContentType.ASR)


@dataclass
class ContentItem:
    """
    One semantic payload inside a message.

    `value` is plain text for text/asr items and base64 data for image/file
    items. `type` is kept as a plain string so unknown tags survive parsing
    and can be skipped by the adapters.
    """

    type: str
    value: str = ""
    msg_id: Optional[str] = None
    author_id: Optional[str] = None
    author_name: Optional[str] = None
    date_string: Optional[str] = None
    mimetype: Optional[str] = None      # image/file only
    filename: Optional[str] = None      # file only

    def __post_init__(self):
        if isinstance(self.type, ContentType):
            self.type = self.type.value

    @property
    def is_text_like(self) -> bool:
        return self.type in TEXT_LIKE

    @classmethod
    def from_dict(cls, data: dict) -> "ContentItem":
        return cls(
            type=str(data.get("type", "")).lower(),
            value=data.get("value", ""),
            msg_id=data.get("msgId", data.get("msg_id")),
            author_id=data.get("authorId", data.get("author_id")),
            author_name=data.get("authorName", data.get("author_name")),
            date_string=data.get("dateString", data.get("date")),
            mimetype=data.get("mimetype"),
            filename=data.get("filename"),
        )


@dataclass
class CanonicalMessage:
    """A single conversation turn, as produced by the chat transport."""

    role: Role
    content: list[ContentItem] = field(default_factory=list)
    name: Optional[str] = None

    def __post_init__(self):
        self.role = Role(self.role)

    def has_text_like(self) -> bool:
        return any(c.is_text_like for c in self.content)

    def has_image(self) -> bool:
        return any(c.type == ContentType.IMAGE for c in self.content)

    def first_text_like(self) -> Optional[ContentItem]:
        return next((c for c in self.content if c.is_text_like), None)

    @classmethod
    def from_dict(cls, data: dict) -> "CanonicalMessage":
        return cls(
            role=Role(data.get("role", "user")),
            content=[ContentItem.from_dict(c) for c in data.get("content", [])],
            name=data.get("name"),
        )


@dataclass
class StructuredAnswer:
    """Decoded model reply."""

    message: Optional[str]
    author: Optional[str] = None
    type: Optional[str] = None
    emoji_react: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "StructuredAnswer":
        message = data.get("message")
        return cls(
            message=message if message is None else str(message),
            author=data.get("author"),
            type=data.get("type"),
            emoji_react=data.get("emojiReact"),
        )

    def to_dict(self) -> dict:
        result = {"message": self.message}
        if self.author is not None:
            result["author"] = self.author
        if self.type is not None:
            result["type"] = self.type
        if self.emoji_react is not None:
            result["emojiReact"] = self.emoji_react
        return result
