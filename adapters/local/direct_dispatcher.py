"""
Local Function Dispatcher — Direct function call.

Skill workers run in-process and their result is handed straight back
to the orchestrator.
"""

import inspect
import logging

from agent.interfaces.function_dispatcher import FunctionDispatcher
from agent.skills.registry import SkillRegistry

logger = logging.getLogger(__name__)


class DirectDispatcher(FunctionDispatcher):
    """
    Calls skill workers directly. Worker results are normalized to
    {"success": bool, "result": ...}. Unknown skills raise SkillNotFound;
    worker exceptions propagate so the orchestrator can report them.
    """

    def __init__(self, skills: SkillRegistry):
        self.skills = skills

    async def execute(self, name: str, args: dict) -> dict:
        worker_fn = self.skills.get_worker(name)

        logger.info(f"DirectDispatcher: executing skill '{name}'")
        result = worker_fn(args or {})
        if inspect.isawaitable(result):
            result = await result

        if isinstance(result, dict) and "success" in result:
            return result
        return {"success": True, "result": result}
