"""
Qwen wire adapter.

Array content in the chat-completions style. Images go as image_url parts.
When the message also carries text, the raw envelope dict for the image is
appended after it; attachment-only messages get no carrier at all, the
opposite of the other adapters. Kept as observed.
"""

from agent.conversion.base import WireAdapter, to_data_uri
from agent.models.envelope import MetadataEnvelope
from agent.models.message import CanonicalMessage, ContentType


class QwenAdapter(WireAdapter):

    def convert(self, messages: list[CanonicalMessage]) -> list[dict]:
        wire: list[dict] = []

        for message in messages:
            has_text = message.has_text_like()
            content = []

            for item in message.content:
                if item.is_text_like:
                    content.append({"type": "text", "text": self.envelope_text(message, item)})
                elif item.type == ContentType.IMAGE:
                    content.append({
                        "type": "image_url",
                        "image_url": {"url": to_data_uri(item.mimetype, item.value)},
                    })
                    if has_text:
                        content.append(MetadataEnvelope.build(message, item).to_dict())
                else:
                    self.skip(item)

            entry = {"role": message.role.value, "content": content}
            if message.name:
                entry["name"] = message.name
            wire.append(entry)

        return wire
