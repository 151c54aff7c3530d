"""Execution of a single subtask against one agent."""

import json
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..config import GenerationSettings
from ..integrations.oracle_client import OracleClient
from ..schemas.models import Agent, Subtask, SubtaskResult
from .prompts import EXECUTION_PROMPT

if TYPE_CHECKING:
    from ..core.memory import MemoryStore


logger = logging.getLogger(__name__)


def serialize_context(context: dict[str, Any]) -> str:
    """Render a task context mapping as JSON; unknown types fall back to str."""
    return json.dumps(context, default=str, ensure_ascii=False)


class SubtaskExecutor:
    """Executes subtasks with the agent's recent memory as prompt context.

    Only the most recent ``memory.context_window`` entries are included, so
    request size stays bounded however long the agent's history grows.
    """

    def __init__(
        self,
        oracle: OracleClient,
        memory: "MemoryStore",
        generation: GenerationSettings,
    ):
        """Initialize with the oracle, memory store and execution profile."""
        self.oracle = oracle
        self.memory = memory
        self.options = generation.options_for("execution")

    async def execute(
        self, agent: Agent, subtask: Subtask, context: dict[str, Any] | None = None
    ) -> SubtaskResult:
        """Execute one subtask.

        Args:
            agent: Agent performing the work
            subtask: Subtask to execute
            context: Task context mapping, serialized into the prompt

        Returns:
            The oracle's answer wrapped as a SubtaskResult

        Raises:
            ServiceError: If the oracle call fails

        """
        messages = EXECUTION_PROMPT.format_messages(
            agent_name=agent.name,
            agent_type=agent.type,
            capabilities=", ".join(agent.capabilities),
            knowledge=" ".join(agent.knowledge),
            memory=self.memory.context_text(agent),
            subtask_description=subtask.description,
            context=serialize_context(context or {}),
        )

        logger.info(f"Agent {agent.id} executing subtask '{subtask.id}'")
        reply = await self.oracle.complete(messages, self.options)

        return SubtaskResult(
            subtask_id=subtask.id, result=reply, timestamp=datetime.now()
        )
