"""Orchestration context: the state every operation works against.

A context bundles the agent registry, the task queue, the memory store and
the oracle. Callers create as many independent contexts as they need;
nothing is kept in module globals.
"""

import asyncio

from ..config import OrchestrationSettings, get_settings
from ..integrations.oracle_client import LangChainOracle, OracleClient
from .agent_registry import AgentRegistry
from .memory import MemoryStore
from .task_queue import TaskQueue


class OrchestrationContext:
    """Owns the registry, task queue and per-agent execution locks."""

    def __init__(
        self,
        oracle: OracleClient,
        settings: OrchestrationSettings | None = None,
    ):
        """Initialize an empty context around an oracle."""
        self.oracle = oracle
        self.settings = settings or get_settings()
        self.memory = MemoryStore(self.settings.memory)
        self.registry = AgentRegistry(oracle, self.memory, self.settings.generation)
        self.tasks = TaskQueue()
        self._agent_locks: dict[str, asyncio.Lock] = {}

    @classmethod
    def from_settings(
        cls, settings: OrchestrationSettings | None = None
    ) -> "OrchestrationContext":
        """Create a context with the default LangChain oracle."""
        settings = settings or get_settings()
        return cls(LangChainOracle(settings.openai), settings)

    def agent_lock(self, agent_id: str) -> asyncio.Lock:
        """Lock serializing execute-and-learn steps of one agent.

        Two tasks driven concurrently against the same agent would otherwise
        interleave an execution with another task's memory update.
        """
        lock = self._agent_locks.get(agent_id)
        if lock is None:
            lock = asyncio.Lock()
            self._agent_locks[agent_id] = lock
        return lock
