"""
Metadata envelope tests.

The envelope is what lets the model quote msg_id back in tool calls, so
its keys and omission rules matter.
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from agent.models.envelope import (
    ATTACHMENT_FALLBACK_MSG,
    MetadataEnvelope,
    unsupported_message,
)
from agent.models.message import CanonicalMessage, ContentItem, ContentType, Role


def _item(**kwargs) -> ContentItem:
    defaults = {"type": ContentType.TEXT, "value": "hello", "msg_id": "m-1"}
    defaults.update(kwargs)
    return ContentItem(**defaults)


def test_build_uses_item_fields():
    item = _item(author_id="u-7", author_name="Ana", date_string="2025-03-01 10:00")
    message = CanonicalMessage(role=Role.USER, content=[item])

    envelope = MetadataEnvelope.build(message, item)

    assert envelope.to_dict() == {
        "message": "hello",
        "msg_id": "m-1",
        "type": "text",
        "author_id": "u-7",
        "author_name": "Ana",
        "date": "2025-03-01 10:00",
    }


def test_enum_type_serializes_as_plain_tag():
    item = _item(type=ContentType.ASR)
    message = CanonicalMessage(role=Role.USER, content=[item])

    data = json.loads(MetadataEnvelope.build(message, item).serialize())
    assert data["type"] == "asr"


def test_author_name_falls_back_to_message_name():
    item = _item()
    message = CanonicalMessage(role=Role.ASSISTANT, content=[item], name="Roboto")

    assert MetadataEnvelope.build(message, item).author_name == "Roboto"


def test_missing_optional_fields_are_omitted():
    item = _item()
    message = CanonicalMessage(role=Role.USER, content=[item])

    data = json.loads(MetadataEnvelope.build(message, item).serialize())
    assert set(data) == {"message", "msg_id", "type"}


def test_overrides_for_attachment_carrier():
    item = _item(type=ContentType.IMAGE, value="aGVsbG8=", msg_id="img-1")
    message = CanonicalMessage(role=Role.USER, content=[item])

    envelope = MetadataEnvelope.build(message, item, text=ATTACHMENT_FALLBACK_MSG, tag="text")

    assert envelope.message == ATTACHMENT_FALLBACK_MSG
    assert envelope.type == "text"
    assert envelope.msg_id == "img-1"


def test_serialize_keeps_non_ascii():
    item = _item(value="olá, tudo bem?")
    message = CanonicalMessage(role=Role.USER, content=[item])

    raw = MetadataEnvelope.build(message, item).serialize()
    assert "olá" in raw
    assert MetadataEnvelope.deserialize(raw).message == "olá, tudo bem?"


def test_unsupported_message():
    assert unsupported_message("image") == '<Unsupported message: {type:"image"}>'
    assert unsupported_message("file", "report.pdf") == (
        '<Unsupported message: {type:"file", body:"report.pdf"}>'
    )
