from agent.models.message import (
    Role, ContentType, ContentItem, CanonicalMessage, StructuredAnswer,
)
from agent.models.envelope import MetadataEnvelope, ATTACHMENT_FALLBACK_MSG
from agent.models.ai_models import Provider
from agent.models.context import RequestContext

__all__ = [
    "Role", "ContentType", "ContentItem", "CanonicalMessage", "StructuredAnswer",
    "MetadataEnvelope", "ATTACHMENT_FALLBACK_MSG",
    "Provider",
    "RequestContext",
]
