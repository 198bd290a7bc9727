"""
Router — entry point of the relay.

Receives a chat's new canonical messages, serializes work per chat, runs the
tool-call orchestrator, and decodes the model's reply into a StructuredAnswer.
"""

import logging
from typing import Optional

from agent.conversion.reply_decoder import extract_answer
from agent.errors.handler import ErrorHandler
from agent.interfaces.conversation_cache import ConversationCache
from agent.models.ai_models import Provider
from agent.models.context import RequestContext
from agent.models.message import CanonicalMessage, StructuredAnswer
from agent.router.locks import ChatLockRegistry
from agent.router.orchestrator import Orchestrator
from agent.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)


class Router:
    """
    Central message handler. Provider-agnostic — all dependencies injected.
    """

    def __init__(
        self,
        provider: Provider,
        orchestrator: Orchestrator,
        cache: ConversationCache,
        skills: SkillRegistry,
        locks: Optional[ChatLockRegistry] = None,
        errors: Optional[ErrorHandler] = None,
    ):
        self.provider = provider
        self.orchestrator = orchestrator
        self.cache = cache
        self.skills = skills
        self.locks = locks or ChatLockRegistry()
        self.errors = errors or ErrorHandler()

    async def handle_message(
        self,
        chat_id: str,
        messages: list[CanonicalMessage],
        system_prompt: str,
        bot_name: str,
        enabled_skills: Optional[list[str]] = None,
    ) -> Optional[StructuredAnswer]:
        """
        Main entry point. Handles one batch of inbound messages end-to-end.

        Returns:
            The decoded answer, None when there is nothing to send back, or an
            answer of type "error" carrying a friendly message after a failure
            (the chat's cached conversation is reset in that case).
        """
        ctx = RequestContext(chat_id=chat_id, provider=self.provider, bot_name=bot_name)

        async with self.locks.hold(chat_id):
            logger.info(f"{ctx.log_prefix()} Handling {len(messages)} message(s)")
            tools = self.skills.get_tools(enabled_skills)

            try:
                raw = await self.orchestrator.run(
                    chat_id,
                    messages,
                    system_prompt,
                    tools,
                    log_prefix=ctx.log_prefix(),
                )
                answer = extract_answer(raw, bot_name)
            except Exception as e:
                friendly = self.errors.handle(e, context=f"chat:{chat_id}")
                logger.error(f"{ctx.log_prefix()} Chat context is being reset due to errors")
                await self.cache.delete(chat_id)
                return StructuredAnswer(
                    message=friendly.message, author=bot_name, type="error"
                )

        if answer is None or answer.message is None:
            logger.info(f"{ctx.log_prefix()} Nothing to send back")
            return None
        return answer

    async def reset(self, chat_id: str) -> None:
        """Forget the chat's conversation (the -reset command)."""
        async with self.locks.hold(chat_id):
            await self.cache.delete(chat_id)
        logger.info(f"[{chat_id}] Conversation reset")

    async def append_to_cache(self, chat_id: str, messages: list[CanonicalMessage]) -> None:
        """
        Record messages the bot sent on its own, e.g. a tool's image reply.

        Waits for any run in progress on the chat, so schedule it as a task
        from inside a tool instead of awaiting it there.
        """
        async with self.locks.hold(chat_id):
            await self.orchestrator.append(chat_id, messages)
