"""
Function Dispatcher Interface

Executes the tools the model asks for.
Implementations: DirectDispatcher (local, in-process skill workers).
"""

from abc import ABC, abstractmethod


class FunctionDispatcher(ABC):
    """
    Abstract base class for tool execution.

    The orchestrator calls execute() once per tool-call directive. Raising is
    allowed: the orchestrator converts the failure into a tool result so the
    model can recover.
    """

    @abstractmethod
    async def execute(self, name: str, args: dict) -> dict:
        """
        Run a tool.

        Args:
            name: Tool name as declared to the model
            args: Decoded tool arguments

        Returns:
            {"success": bool, "result": <any JSON-serializable value>}
        """
        ...
