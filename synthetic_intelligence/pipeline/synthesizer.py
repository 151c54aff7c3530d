"""Synthesis of subtask results into one final answer."""

import logging

from ..config import GenerationSettings
from ..integrations.oracle_client import OracleClient
from ..schemas.models import Agent, SubtaskResult, TaskAssignment
from .prompts import COLLABORATIVE_SYNTHESIS_PROMPT, SYNTHESIS_PROMPT


logger = logging.getLogger(__name__)


class ResultSynthesizer:
    """Merges ordered subtask results through one oracle call.

    Both synthesis flavors return the oracle text verbatim.
    """

    def __init__(self, oracle: OracleClient, generation: GenerationSettings):
        """Initialize with the oracle and the synthesis profile."""
        self.oracle = oracle
        self.options = generation.options_for("synthesis")

    async def synthesize(
        self, agent: Agent, description: str, results: list[SubtaskResult]
    ) -> str:
        """Combine the results a single agent produced for one task.

        Args:
            agent: Agent that executed the subtasks
            description: Original task description
            results: Subtask results in execution order

        Returns:
            The synthesized answer

        """
        lines = "\n".join(f"- {r.subtask_id}: {r.result}" for r in results)
        messages = SYNTHESIS_PROMPT.format_messages(
            task_description=description, results=lines
        )

        logger.info(f"Synthesizing {len(results)} results for agent {agent.id}")
        return await self.oracle.complete(messages, self.options)

    async def synthesize_collaborative(
        self,
        description: str,
        results: list[SubtaskResult],
        assignments: list[TaskAssignment],
        agents: dict[str, Agent],
    ) -> str:
        """Combine contributions from several agents.

        Each contribution is labelled with the agent that produced it and
        the reason it was assigned, so the oracle can weigh overlapping or
        conflicting answers.

        Args:
            description: Original task description
            results: Subtask results in execution order
            assignments: Assignments the results were produced from
            agents: Assigned agents by identifier

        Returns:
            The synthesized answer

        """
        by_subtask = {a.subtask.id: a for a in assignments}
        lines = []
        for result in results:
            assignment = by_subtask.get(result.subtask_id)
            if assignment is None:
                lines.append(f"- {result.subtask_id}: {result.result}")
                continue
            agent = agents.get(assignment.agent_id)
            author = (
                f"{agent.name}, {agent.type}" if agent else assignment.agent_id
            )
            lines.append(
                f"- {result.subtask_id} (by {author}; {assignment.reason}): "
                f"{result.result}"
            )

        messages = COLLABORATIVE_SYNTHESIS_PROMPT.format_messages(
            task_description=description, contributions="\n".join(lines)
        )

        logger.info(
            f"Synthesizing {len(results)} contributions from "
            f"{len({a.agent_id for a in assignments})} agents"
        )
        return await self.oracle.complete(messages, self.options)
