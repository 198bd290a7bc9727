"""
DeepSeek wire adapter.

One wire message per canonical message. Assistant turns collapse to a single
JSON string; user turns are arrays of text parts. There is no native image or
file input, so attachments are described in text.
"""

import json

from agent.conversion.base import WireAdapter
from agent.models.envelope import unsupported_message
from agent.models.message import CanonicalMessage, ContentType, Role


class DeepSeekAdapter(WireAdapter):

    def convert(self, messages: list[CanonicalMessage]) -> list[dict]:
        wire: list[dict] = []

        for message in messages:
            if message.role == Role.ASSISTANT:
                item = message.first_text_like()
                if item is None:
                    continue
                content = json.dumps(
                    {"type": "text", "text": self.envelope_text(message, item)},
                    ensure_ascii=False,
                )
                wire.append(self._named({"role": message.role.value, "content": content}, message))
                continue

            parts = []
            for item in message.content:
                if item.type in (ContentType.IMAGE, ContentType.FILE):
                    parts.append({
                        "type": "text",
                        "text": self.envelope_text(
                            message, item, text=unsupported_message(item.type)
                        ),
                    })
                elif item.is_text_like:
                    parts.append({"type": "text", "text": self.envelope_text(message, item)})
                else:
                    self.skip(item)

            wire.append(self._named({"role": message.role.value, "content": parts}, message))

        return wire

    @staticmethod
    def _named(entry: dict, message: CanonicalMessage) -> dict:
        if message.name:
            entry["name"] = message.name
        return entry
