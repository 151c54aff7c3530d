"""Subtask-to-agent assignment with pluggable scoring.

The assigner filters the registry down to the eligible agents and asks a
scorer to rank them. The coordination flow only depends on
:meth:`AgentAssigner.select_agent`, so a better scorer can be dropped in
without touching it.
"""

import logging
from collections.abc import Callable

from ..errors import NoEligibleAgentError
from ..schemas.models import Agent, Subtask, TaskAssignment
from .agent_registry import AgentRegistry


logger = logging.getLogger(__name__)

AgentScorer = Callable[[Subtask, Agent], float]


def first_eligible(subtask: Subtask, agent: Agent) -> float:
    """Baseline scorer: every agent ties, so registry order decides."""
    return 0.0


def capability_overlap(subtask: Subtask, agent: Agent) -> float:
    """Score agents by capability keywords found in the subtask description."""
    task_text = subtask.description.lower()
    score = 0.0

    for capability in agent.capabilities:
        if any(
            keyword and keyword in task_text
            for keyword in capability.lower().replace("-", "_").split("_")
        ):
            score += 10

    if agent.type.lower() in task_text:
        score += 5

    return score


class AgentAssigner:
    """Maps subtasks to agents drawn from an eligible subset of the registry."""

    def __init__(
        self,
        registry: AgentRegistry,
        scorer: AgentScorer = first_eligible,
        policy_name: str | None = None,
    ):
        """Initialize with the registry and a scoring function."""
        self.registry = registry
        self.scorer = scorer
        self.policy_name = policy_name or getattr(scorer, "__name__", "custom")

    def select_agent(self, subtask: Subtask, eligible_agent_ids: list[str]) -> Agent:
        """Pick the agent for a subtask.

        Candidates are visited in registry order and the highest score wins;
        on ties the earliest candidate is kept.

        Args:
            subtask: Subtask to place
            eligible_agent_ids: Identifiers the caller allows

        Returns:
            The selected agent

        Raises:
            NoEligibleAgentError: If no registered agent is eligible

        """
        eligible = set(eligible_agent_ids)
        candidates = [
            agent for agent in self.registry.list_agents() if agent.id in eligible
        ]
        if not candidates:
            raise NoEligibleAgentError(eligible_agent_ids)

        best_agent = candidates[0]
        best_score = self.scorer(subtask, best_agent)
        for agent in candidates[1:]:
            score = self.scorer(subtask, agent)
            if score > best_score:
                best_agent, best_score = agent, score

        return best_agent

    def assign(
        self, subtasks: list[Subtask], eligible_agent_ids: list[str]
    ) -> list[TaskAssignment]:
        """Assign every subtask, preserving subtask order."""
        assignments = []
        for subtask in subtasks:
            agent = self.select_agent(subtask, eligible_agent_ids)
            assignments.append(
                TaskAssignment(
                    subtask=subtask,
                    agent_id=agent.id,
                    reason=f"Best match for subtask requirements ({self.policy_name})",
                )
            )
            logger.debug(f"Subtask '{subtask.id}' assigned to {agent.id}")
        return assignments
