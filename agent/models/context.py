"""
Request Context — flows through a single relay run.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from agent.models.ai_models import Provider


@dataclass
class RequestContext:
    """
    Context for one handled message.
    Created by the router, used for log correlation.
    """

    chat_id: str
    provider: Provider
    bot_name: str = ""
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def log_prefix(self) -> str:
        """For structured logging."""
        return f"[{self.chat_id}:{self.provider.value}:{self.request_id[:8]}]"
