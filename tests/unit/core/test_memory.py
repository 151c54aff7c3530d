"""Tests for the agent memory store and its retention policy."""

import pytest

from synthetic_intelligence.config import MemorySettings
from synthetic_intelligence.core.memory import MemoryStore
from synthetic_intelligence.schemas.models import (
    Agent,
    MemoryKind,
    Subtask,
    SubtaskResult,
)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def plain_agent():
    return Agent(id="agent_1", name="Ada", type="research")


def record(store, agent, index):
    subtask = Subtask(id=str(index), description=f"step {index}")
    return store.record_execution(
        agent, subtask, SubtaskResult(subtask_id=subtask.id, result=f"result {index}")
    )


class TestMemoryStore:
    """Test memory recording."""

    def test_record_execution(self, store, plain_agent):
        """Execution entries carry the description, result and success flag."""
        entry = record(store, plain_agent, 1)

        assert plain_agent.memory == [entry]
        assert entry.kind == MemoryKind.EXECUTION
        assert entry.data == "step 1"
        assert entry.result == "result 1"
        assert entry.success is True

    def test_append_training(self, store, plain_agent):
        entry = store.append_training(plain_agent, "Know the market", "Ready")

        assert entry.kind == MemoryKind.TRAINING
        assert entry.data == "Know the market"
        assert entry.response == "Ready"
        assert entry.success is None

    def test_recent_returns_tail_in_order(self, store, plain_agent):
        for i in range(5):
            record(store, plain_agent, i)

        recent = store.recent(plain_agent, 3)

        assert [e.data for e in recent] == ["step 2", "step 3", "step 4"]
        assert store.recent(plain_agent, 0) == []

    def test_context_text_uses_window(self, store, plain_agent):
        """Only the configured window of recent entries reaches prompts."""
        for i in range(15):
            record(store, plain_agent, i)

        text = store.context_text(plain_agent)

        assert text.split(" step ")[0] == "step 5"
        assert text.endswith("step 14")
        assert store.context_text(plain_agent, window=2) == "step 13 step 14"

    def test_context_text_empty_memory(self, store, plain_agent):
        assert store.context_text(plain_agent) == ""


class TestMemoryRetention:
    """Test the trim-on-execution policy."""

    def test_no_trim_at_threshold(self, store, plain_agent):
        """Exactly max_entries entries are kept."""
        for i in range(100):
            record(store, plain_agent, i)

        assert len(plain_agent.memory) == 100

    def test_trim_after_exceeding_threshold(self, store, plain_agent):
        """The 101st execution trims the log to the 50 most recent entries."""
        for i in range(101):
            record(store, plain_agent, i)

        assert len(plain_agent.memory) == 50
        assert plain_agent.memory[0].data == "step 51"
        assert plain_agent.memory[-1].data == "step 100"

    def test_training_does_not_trim(self, store, plain_agent):
        """Training can push the log over the threshold until the next execution."""
        for i in range(120):
            store.append_training(plain_agent, f"lesson {i}", "ok")

        assert len(plain_agent.memory) == 120

        record(store, plain_agent, 0)

        assert len(plain_agent.memory) == 50
        assert plain_agent.memory[-1].kind == MemoryKind.EXECUTION

    def test_custom_policy(self, plain_agent):
        store = MemoryStore(MemorySettings(max_entries=5, retain_entries=2))

        for i in range(6):
            record(store, plain_agent, i)

        assert [e.data for e in plain_agent.memory] == ["step 4", "step 5"]
