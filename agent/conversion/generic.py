"""
Generic wire adapter (Custom and DeepInfra endpoints).

Plain string content only. Assistant turns carry their first text item;
user turns carry only the first serialized item, the rest are dropped.
"""

import logging

from agent.conversion.base import WireAdapter
from agent.models.envelope import unsupported_message
from agent.models.message import CanonicalMessage, ContentType, Role

logger = logging.getLogger(__name__)


class GenericAdapter(WireAdapter):

    def convert(self, messages: list[CanonicalMessage]) -> list[dict]:
        wire: list[dict] = []

        for message in messages:
            if message.role == Role.ASSISTANT:
                item = message.first_text_like()
                if item is None:
                    continue
                entry = {"role": message.role.value, "content": self.envelope_text(message, item)}
                if message.name:
                    entry["name"] = message.name
                wire.append(entry)
                continue

            aggregated = []
            for item in message.content:
                if item.type in (ContentType.IMAGE, ContentType.FILE):
                    aggregated.append(
                        self.envelope_text(message, item, text=unsupported_message(item.type))
                    )
                elif item.is_text_like:
                    aggregated.append(self.envelope_text(message, item))
                else:
                    self.skip(item)

            if not aggregated:
                continue
            if len(aggregated) > 1:
                logger.debug(
                    f"GenericAdapter: keeping 1 of {len(aggregated)} content items"
                )
            wire.append({"role": message.role.value, "content": aggregated[0]})

        return wire
