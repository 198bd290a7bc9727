"""
Tool-Call Orchestrator.

Drives the send → tool call → tool result → send loop against one provider:

  1. Load the chat's cached wire conversation and append the new messages.
  2. Send everything, with tool declarations, to the provider.
  3. No tool calls: persist the conversation and return the raw text.
  4. Tool calls: record the call turn, run each tool through the
     dispatcher, record the results, and go back to 2.

The loop is bounded by max_cycles. Nothing is written to the cache unless
the run finishes.
"""

import json
import logging
from agent.conversion.base import WireAdapter, redact_media
from agent.errors.exceptions import OrchestrationExhausted, ToolExecutionError
from agent.interfaces.ai_provider import AIProvider, ToolCall, ToolDefinition
from agent.interfaces.conversation_cache import ConversationCache
from agent.interfaces.function_dispatcher import FunctionDispatcher
from agent.models.message import CanonicalMessage

logger = logging.getLogger(__name__)

MAX_CYCLES = 5
DEFAULT_CACHE_TTL = 3600


class Orchestrator:
    """
    Runs one provider conversation per call. All collaborators injected.
    """

    def __init__(
        self,
        adapter: WireAdapter,
        ai: AIProvider,
        dispatcher: FunctionDispatcher,
        cache: ConversationCache,
        model: str,
        provider_name: str = "the AI provider",
        max_cycles: int = MAX_CYCLES,
        cache_ttl: int = DEFAULT_CACHE_TTL,
        max_tokens: int = 2048,
    ):
        self.adapter = adapter
        self.ai = ai
        self.dispatcher = dispatcher
        self.cache = cache
        self.model = model
        self.provider_name = provider_name
        self.max_cycles = max_cycles
        self.cache_ttl = cache_ttl
        self.max_tokens = max_tokens

    async def run(
        self,
        chat_id: str,
        messages: list[CanonicalMessage],
        system_prompt: str,
        tools: list[ToolDefinition],
        log_prefix: str = "",
    ) -> str:
        """
        Run the loop for one inbound batch of messages.

        Returns:
            The raw text of the final reply, for the reply decoder.

        Raises:
            OrchestrationExhausted: the model still wanted tools after max_cycles
            ProviderTransportError: the provider call failed
        """
        conversation = await self.cache.get(chat_id)
        self.adapter.extend(conversation, messages)
        wire_tools = self.adapter.format_tools(tools)

        cycles = 0
        while cycles < self.max_cycles:
            logger.info(
                f"{log_prefix} Sending {len(conversation)} messages to "
                f"{self.provider_name} (model={self.model}, cycle={cycles + 1})"
            )
            if conversation:
                logger.debug(
                    f"{log_prefix} Last message: "
                    f"{redact_media(json.dumps(conversation[-1], ensure_ascii=False))}"
                )

            response = await self.ai.chat(
                model=self.model,
                system=system_prompt,
                messages=conversation,
                tools=wire_tools,
                max_tokens=self.max_tokens,
            )

            logger.info(
                f"{log_prefix} AI response: "
                f"tool_use={response.has_tool_use}, "
                f"tokens={response.input_tokens}+{response.output_tokens}"
            )

            if not response.has_tool_use:
                final = self.adapter.final_entry(response)
                if final is not None:
                    conversation.append(final)
                await self.cache.set(chat_id, conversation, self.cache_ttl)
                return response.text or ""

            conversation.extend(self.adapter.tool_call_entries(response))

            results: list[tuple[ToolCall, str]] = []
            for call in response.tool_calls:
                results.append((call, await self._execute(call, log_prefix)))
            conversation.extend(self.adapter.tool_result_entries(results))

            cycles += 1

        logger.error(f"{log_prefix} Gave up after {self.max_cycles} tool-call cycles")
        raise OrchestrationExhausted(self.max_cycles, self.provider_name)

    async def append(self, chat_id: str, messages: list[CanonicalMessage]) -> None:
        """Append messages the bot sent outside a run (e.g. a generated image)."""
        conversation = await self.cache.get(chat_id)
        self.adapter.extend(conversation, messages)
        await self.cache.set(chat_id, conversation, self.cache_ttl)

    async def _execute(self, call: ToolCall, log_prefix: str = "") -> str:
        """Run one tool call. Failures become a serialized error result."""
        logger.info(
            f"{log_prefix} Executing function: {call.tool_name} "
            f"with args: {json.dumps(call.tool_params, ensure_ascii=False)}"
        )
        try:
            result = await self.dispatcher.execute(call.tool_name, call.tool_params)
        except Exception as e:
            error = ToolExecutionError(call.tool_name, e)
            logger.error(f"{log_prefix} {error}")
            return json.dumps({"success": False, "result": str(error)}, ensure_ascii=False)

        return json.dumps(result, ensure_ascii=False, default=str)

