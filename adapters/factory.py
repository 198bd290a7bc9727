"""
Wiring — builds the relay's collaborators from a RelayConfig.

Local development and the AWS deployment share this; the config decides
which transport and which conversation cache are used.
"""

import logging
from typing import Optional

from agent.config import RelayConfig
from agent.conversion import get_adapter
from agent.interfaces.ai_provider import AIProvider
from agent.interfaces.conversation_cache import ConversationCache
from agent.interfaces.function_dispatcher import FunctionDispatcher
from agent.models.ai_models import Provider, get_defaults
from agent.router.orchestrator import Orchestrator
from agent.router.router import Router
from agent.skills.registry import BUILTIN_SKILLS_DIR, SkillRegistry
from adapters.local.anthropic_provider import AnthropicProvider
from adapters.local.chat_completions_provider import ChatCompletionsProvider
from adapters.local.direct_dispatcher import DirectDispatcher
from adapters.local.memory_cache import InMemoryConversationCache
from adapters.local.openai_provider import OpenAIResponsesProvider
from adapters.local.sqlite_store import SQLiteConversationCache

logger = logging.getLogger(__name__)


def create_provider(config: RelayConfig) -> AIProvider:
    """Pick the transport for the configured provider."""
    if config.provider == Provider.CLAUDE:
        if config.use_bedrock:
            from adapters.aws.bedrock_provider import BedrockProvider

            return BedrockProvider(region=config.aws_region, model_id=config.model)
        return AnthropicProvider(config.api_key, base_url=config.base_url)

    if config.provider == Provider.OPENAI:
        return OpenAIResponsesProvider(config.api_key, base_url=config.base_url)

    return ChatCompletionsProvider(
        config.api_key,
        base_url=config.base_url,
        provider_name=config.provider.value,
    )


def create_cache(config: RelayConfig) -> ConversationCache:
    """Pick the conversation cache backend."""
    if config.cache_backend == "sqlite":
        return SQLiteConversationCache(config.sqlite_path)
    if config.cache_backend == "dynamodb":
        from adapters.aws.dynamodb_conversation_store import DynamoDBConversationCache

        return DynamoDBConversationCache(config.dynamodb_table, region=config.aws_region)
    return InMemoryConversationCache()


def create_router(
    config: RelayConfig,
    skills: Optional[SkillRegistry] = None,
    ai: Optional[AIProvider] = None,
    cache: Optional[ConversationCache] = None,
    dispatcher: Optional[FunctionDispatcher] = None,
) -> Router:
    """
    Build a ready Router. Anything passed in is used as-is; the rest is
    created from config (skills default to the built-in skill directory).
    """
    if skills is None:
        skills = SkillRegistry()
        skills.load_from_directory(BUILTIN_SKILLS_DIR)
    ai = ai or create_provider(config)
    cache = cache or create_cache(config)
    dispatcher = dispatcher or DirectDispatcher(skills)

    orchestrator = Orchestrator(
        adapter=get_adapter(config.provider),
        ai=ai,
        dispatcher=dispatcher,
        cache=cache,
        model=config.model,
        provider_name=get_defaults(config.provider).display_name,
        max_cycles=config.max_cycles,
        cache_ttl=config.cache_ttl_seconds,
        max_tokens=config.max_tokens,
    )

    logger.info(
        f"Relay ready: provider={config.provider.value} model={config.model} "
        f"cache={config.cache_backend} skills={skills.list_skill_names()}"
    )
    return Router(config.provider, orchestrator, cache, skills)
