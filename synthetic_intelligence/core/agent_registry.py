"""Agent registry for creating, training and looking up agents.

Agents become visible only after creation fully succeeds: when an initial
training prompt is supplied and training fails, nothing is registered.
"""

import logging
from datetime import datetime
from uuid import uuid4

from ..config import GenerationSettings
from ..errors import AgentNotFoundError, ServiceError, TrainingFailureError
from ..integrations.oracle_client import OracleClient
from ..pipeline.prompts import TRAINING_PROMPT
from ..schemas.models import Agent, AgentConfig, AgentStatus
from .memory import MemoryStore


logger = logging.getLogger(__name__)


def generate_agent_id() -> str:
    """Create a fresh agent identifier."""
    return f"agent_{uuid4().hex[:12]}"


class AgentRegistry:
    """Registry owning every agent of an orchestration context.

    Provides functionality for:
    - Agent creation with optional initial training
    - Training of registered agents
    - Lookup by identifier and iteration in creation order
    """

    def __init__(
        self,
        oracle: OracleClient,
        memory: MemoryStore,
        generation: GenerationSettings | None = None,
    ):
        """Initialize empty registry."""
        self.oracle = oracle
        self.memory = memory
        self.generation = generation or GenerationSettings()
        self._agents: dict[str, Agent] = {}

    async def create_agent(self, config: AgentConfig | dict) -> Agent:
        """Create, optionally train, and register a new agent.

        Args:
            config: Agent configuration or a dictionary of its fields

        Returns:
            The registered agent

        Raises:
            TrainingFailureError: If initial training fails; the agent is not
                registered

        """
        if isinstance(config, dict):
            config = AgentConfig(**config)

        agent = Agent(
            id=generate_agent_id(),
            name=config.name,
            type=config.type,
            capabilities=list(config.capabilities),
            knowledge=list(config.knowledge),
            created_at=datetime.now(),
            status=AgentStatus.ACTIVE,
        )

        if config.initial_prompt:
            await self._train(agent, config.initial_prompt)

        self._agents[agent.id] = agent
        logger.info(
            f"Registered agent '{agent.name}' ({agent.id}) with capabilities: "
            f"{agent.capabilities}"
        )
        return agent

    async def train_agent(self, agent_id: str, training_text: str) -> str:
        """Train a registered agent.

        Args:
            agent_id: Identifier of the agent to train
            training_text: Knowledge to teach the agent

        Returns:
            The oracle's acknowledgment

        Raises:
            AgentNotFoundError: If the agent is unknown
            TrainingFailureError: If the oracle call fails

        """
        agent = self.require_agent(agent_id)
        return await self._train(agent, training_text)

    async def _train(self, agent: Agent, training_text: str) -> str:
        messages = TRAINING_PROMPT.format_messages(
            agent_type=agent.type,
            capabilities=", ".join(agent.capabilities),
            training_data=training_text,
        )

        try:
            acknowledgment = await self.oracle.complete(
                messages, self.generation.options_for("training")
            )
        except ServiceError as e:
            logger.error(f"Error training agent {agent.id}: {e}")
            raise TrainingFailureError(agent.id) from e

        self.memory.append_training(agent, training_text, acknowledgment)
        logger.info(f"Agent {agent.id} trained")
        return acknowledgment

    def get_agent(self, agent_id: str) -> Agent | None:
        """Get agent by identifier, or None if not found."""
        return self._agents.get(agent_id)

    def require_agent(self, agent_id: str) -> Agent:
        """Get agent by identifier.

        Raises:
            AgentNotFoundError: If the agent is unknown

        """
        agent = self._agents.get(agent_id)
        if agent is None:
            raise AgentNotFoundError(agent_id)
        return agent

    def list_agents(self) -> list[Agent]:
        """All registered agents in creation order."""
        return list(self._agents.values())

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._agents

    def __len__(self) -> int:
        return len(self._agents)
