"""Per-agent memory log with a retention policy.

Agents' ``memory`` lists are only ever mutated through :class:`MemoryStore`.
Execution events enforce the retention policy; training events do not, so a
burst of training may leave a log above the threshold until the next
execution event trims it.
"""

import logging
from datetime import datetime

from ..config import MemorySettings
from ..schemas.models import Agent, MemoryEntry, MemoryKind, Subtask, SubtaskResult


logger = logging.getLogger(__name__)


class MemoryStore:
    """Append-only memory operations with trim-on-execution retention."""

    def __init__(self, settings: MemorySettings | None = None):
        """Initialize with a retention policy."""
        self.settings = settings or MemorySettings()

    def append_training(
        self, agent: Agent, training_text: str, response: str
    ) -> MemoryEntry:
        """Record a training event. No trimming is applied."""
        entry = MemoryEntry(
            kind=MemoryKind.TRAINING,
            data=training_text,
            timestamp=datetime.now(),
            response=response,
        )
        agent.memory.append(entry)
        return entry

    def record_execution(
        self, agent: Agent, subtask: Subtask, result: SubtaskResult
    ) -> MemoryEntry:
        """Record a successful subtask execution and apply retention.

        Args:
            agent: Agent that executed the subtask
            subtask: The executed subtask
            result: Its result

        Returns:
            The appended entry

        """
        entry = MemoryEntry(
            kind=MemoryKind.EXECUTION,
            data=subtask.description,
            timestamp=datetime.now(),
            success=True,
            result=result.result,
        )
        agent.memory.append(entry)

        if len(agent.memory) > self.settings.max_entries:
            dropped = len(agent.memory) - self.settings.retain_entries
            del agent.memory[: -self.settings.retain_entries]
            logger.debug(f"Trimmed {dropped} memory entries from agent {agent.id}")

        return entry

    def recent(self, agent: Agent, limit: int) -> list[MemoryEntry]:
        """Most recent ``limit`` entries, most recent last."""
        if limit <= 0:
            return []
        return list(agent.memory[-limit:])

    def context_text(self, agent: Agent, window: int | None = None) -> str:
        """Payload texts of the recent memory window joined for prompting."""
        if window is None:
            window = self.settings.context_window
        return " ".join(entry.data for entry in self.recent(agent, window))
