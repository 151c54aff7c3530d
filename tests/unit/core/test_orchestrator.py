"""Test suite for core/orchestrator.py.

Tests the TaskOrchestrator workflow: complexity routing, decomposition,
sequential execution with memory learning, synthesis, task status tracking
and collaborative execution across agents.
"""

import asyncio

import pytest

from synthetic_intelligence.config import OrchestrationSettings
from synthetic_intelligence.core.assigner import capability_overlap
from synthetic_intelligence.core.context import OrchestrationContext
from synthetic_intelligence.core.orchestrator import TaskOrchestrator
from synthetic_intelligence.errors import (
    AgentNotFoundError,
    DecompositionParseError,
    NoEligibleAgentError,
    ServiceError,
    TaskNotFoundError,
    TaskStateError,
)
from synthetic_intelligence.schemas.models import MemoryKind, Task, TaskStatus


class TestOrchestratorInitialization:
    """Test orchestrator construction."""

    def test_workflow_compiled(self, orchestrator):
        """The workflow graph contains every pipeline node."""
        nodes = set(orchestrator.workflow.get_graph().nodes)

        assert {
            "classify",
            "decompose",
            "execute_subtasks",
            "synthesize",
            "execute_simple",
        } <= nodes

    def test_shares_context(self, context, orchestrator):
        assert orchestrator.context is context
        assert orchestrator.executor.memory is context.memory
        assert orchestrator.assigner.registry is context.registry


class TestComplexPath:
    """Test high complexity tasks."""

    @pytest.mark.asyncio
    async def test_decompose_execute_synthesize(
        self, orchestrator, context, agent, mock_oracle, decomposition_reply, prompt_of
    ):
        """Subtasks run in order, each learned before the next, then one synthesis."""
        mock_oracle.complete.side_effect = [
            "high",
            decomposition_reply(
                ("1", "Research the market", []),
                ("2", "Write the launch plan", ["1"]),
            ),
            "market researched",
            "plan written",
            "final launch plan",
        ]

        result = await orchestrator.execute_task(agent.id, "Plan a product launch")

        assert result == "final launch plan"
        assert mock_oracle.complete.await_count == 5

        first_system, first_human = prompt_of(2)
        second_system, second_human = prompt_of(3)
        assert "Current subtask: Research the market" in first_human
        assert "Current subtask: Write the launch plan" in second_human
        assert "Research the market" not in first_system
        assert "Memory: Research the market" in second_system

        _, synthesis_human = prompt_of(4)
        assert "ORIGINAL TASK: Plan a product launch" in synthesis_human
        assert "- 1: market researched\n- 2: plan written" in synthesis_human

        assert [e.kind for e in agent.memory] == [MemoryKind.EXECUTION] * 2
        assert [e.result for e in agent.memory] == ["market researched", "plan written"]

        [task] = list(context.tasks)
        assert task.status == TaskStatus.COMPLETED
        assert task.result == "final launch plan"
        assert task.complexity == "high"
        assert task.completed_at is not None
        assert task.error is None

    @pytest.mark.asyncio
    async def test_dependencies_reorder_execution(
        self, orchestrator, agent, mock_oracle, decomposition_reply, prompt_of
    ):
        """A subtask listed before its dependency runs after it."""
        mock_oracle.complete.side_effect = [
            "high",
            decomposition_reply(
                ("report", "Write the report", ["data"]),
                ("data", "Collect the data", []),
            ),
            "data collected",
            "report written",
            "done",
        ]

        await orchestrator.execute_task(agent.id, "Produce a report")

        assert "Current subtask: Collect the data" in prompt_of(2)[1]
        assert "Current subtask: Write the report" in prompt_of(3)[1]
        assert "- data: data collected\n- report: report written" in prompt_of(4)[1]

    @pytest.mark.asyncio
    async def test_dependency_ordering_can_be_disabled(
        self, mock_oracle, sample_agent_config, decomposition_reply, prompt_of
    ):
        settings = OrchestrationSettings(respect_dependencies=False)
        context = OrchestrationContext(mock_oracle, settings)
        agent = await context.registry.create_agent(sample_agent_config)
        mock_oracle.complete.side_effect = [
            "high",
            decomposition_reply(
                ("report", "Write the report", ["data"]),
                ("data", "Collect the data", []),
            ),
            "report written",
            "data collected",
            "done",
        ]

        await TaskOrchestrator(context).execute_task(agent.id, "Produce a report")

        assert "Current subtask: Write the report" in prompt_of(2)[1]
        assert "Current subtask: Collect the data" in prompt_of(3)[1]

    @pytest.mark.asyncio
    async def test_task_context_reaches_every_execution(
        self, orchestrator, agent, mock_oracle, decomposition_reply, prompt_of
    ):
        mock_oracle.complete.side_effect = [
            "high",
            decomposition_reply(("1", "One", []), ("2", "Two", [])),
            "a",
            "b",
            "c",
        ]

        await orchestrator.execute_task(
            agent.id, "Plan", task_context={"market": "EU"}
        )

        assert 'Context: {"market": "EU"}' in prompt_of(2)[1]
        assert 'Context: {"market": "EU"}' in prompt_of(3)[1]

    @pytest.mark.asyncio
    async def test_empty_decomposition_still_synthesizes(
        self, orchestrator, agent, mock_oracle
    ):
        mock_oracle.complete.side_effect = ["high", "[]", "nothing to merge"]

        result = await orchestrator.execute_task(agent.id, "Plan")

        assert result == "nothing to merge"
        assert agent.memory == []


class TestSimplePath:
    """Test low and medium complexity tasks."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("label", ["low", "Medium", "unsure"])
    async def test_single_execution_without_synthesis(
        self, orchestrator, context, agent, mock_oracle, prompt_of, label
    ):
        """Anything but high is one execution call whose answer is the result."""
        mock_oracle.complete.side_effect = [label, "direct answer"]

        result = await orchestrator.execute_task(agent.id, "Name the product")

        assert result == "direct answer"
        assert mock_oracle.complete.await_count == 2
        assert "Current subtask: Name the product" in prompt_of(1)[1]

        [entry] = agent.memory
        assert entry.data == "Name the product"
        assert entry.result == "direct answer"
        assert entry.success is True

        [task] = list(context.tasks)
        assert task.status == TaskStatus.COMPLETED
        assert task.result == "direct answer"
        assert task.complexity == label.lower()

    @pytest.mark.asyncio
    async def test_concurrent_tasks_on_one_agent(self, orchestrator, agent, mock_oracle):
        """Concurrent tasks for one agent both complete and both are learned."""
        mock_oracle.complete.return_value = "low"

        results = await asyncio.gather(
            orchestrator.execute_task(agent.id, "First"),
            orchestrator.execute_task(agent.id, "Second"),
        )

        assert results == ["low", "low"]
        assert sorted(e.data for e in agent.memory) == ["First", "Second"]


class TestFailures:
    """Test error propagation and task failure recording."""

    @pytest.mark.asyncio
    async def test_unknown_agent_creates_no_task(self, orchestrator, context, mock_oracle):
        with pytest.raises(AgentNotFoundError):
            await orchestrator.execute_task("agent_missing", "Plan")

        assert len(context.tasks) == 0
        mock_oracle.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_parse_error_fails_task(self, orchestrator, context, agent, mock_oracle):
        """An unparseable decomposition marks the task failed and re-raises."""
        mock_oracle.complete.side_effect = ["high", "Sure! Step one: research."]

        with pytest.raises(DecompositionParseError):
            await orchestrator.execute_task(agent.id, "Plan a launch")

        [task] = list(context.tasks)
        assert task.status == TaskStatus.FAILED
        assert "Could not parse task decomposition" in task.error
        assert task.result is None
        assert agent.memory == []

    @pytest.mark.asyncio
    async def test_service_error_keeps_completed_learning(
        self, orchestrator, context, agent, mock_oracle, decomposition_reply
    ):
        """Subtasks finished before a failure stay in memory."""
        mock_oracle.complete.side_effect = [
            "high",
            decomposition_reply(("1", "One", []), ("2", "Two", [])),
            "first result",
            ServiceError("quota exceeded"),
        ]

        with pytest.raises(ServiceError):
            await orchestrator.execute_task(agent.id, "Plan")

        [task] = list(context.tasks)
        assert task.status == TaskStatus.FAILED
        assert task.error == "quota exceeded"
        assert [e.data for e in agent.memory] == ["One"]

    @pytest.mark.asyncio
    async def test_classification_failure(self, orchestrator, context, agent, mock_oracle):
        mock_oracle.complete.side_effect = ServiceError("unavailable")

        with pytest.raises(ServiceError):
            await orchestrator.execute_task(agent.id, "Plan")

        [task] = list(context.tasks)
        assert task.status == TaskStatus.FAILED
        assert task.complexity is None

    @pytest.mark.asyncio
    async def test_process_unknown_task(self, orchestrator):
        with pytest.raises(TaskNotFoundError):
            await orchestrator.process_task("task_missing")

    @pytest.mark.asyncio
    async def test_process_finished_task(self, orchestrator, context, agent, mock_oracle):
        """A finished task cannot be processed again."""
        mock_oracle.complete.side_effect = ["low", "answer"]
        await orchestrator.execute_task(agent.id, "Plan")
        [task] = list(context.tasks)

        with pytest.raises(TaskStateError):
            await orchestrator.process_task(task.id)

        assert task.status == TaskStatus.COMPLETED
        assert task.result == "answer"

    @pytest.mark.asyncio
    async def test_process_queued_task(self, orchestrator, context, agent, mock_oracle):
        """Tasks appended to the queue directly can be processed by id."""
        mock_oracle.complete.side_effect = ["low", "answer"]
        context.tasks.append(Task(id="task_manual", agent_id=agent.id, description="X"))

        assert await orchestrator.process_task("task_manual") == "answer"
        assert orchestrator.get_task("task_manual").status == TaskStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_process_task_of_removed_agent(self, orchestrator, context, mock_oracle):
        """A queued task whose agent is unknown fails when processed."""
        context.tasks.append(
            Task(id="task_orphan", agent_id="agent_missing", description="X")
        )

        with pytest.raises(AgentNotFoundError):
            await orchestrator.process_task("task_orphan")

        assert context.tasks.require("task_orphan").status == TaskStatus.FAILED
        mock_oracle.complete.assert_not_awaited()


class TestCollaborativeExecution:
    """Test multi-agent execution."""

    @pytest.mark.asyncio
    async def test_collaborative_execution(
        self, orchestrator, context, mock_oracle, decomposition_reply, prompt_of
    ):
        """Subtasks go to eligible agents and merge in one collaborative synthesis."""
        researcher = await context.registry.create_agent(
            {"name": "Ada", "type": "research", "capabilities": ["market_research"]}
        )
        writer = await context.registry.create_agent(
            {"name": "Bo", "type": "writing", "capabilities": ["copy_writing"]}
        )
        mock_oracle.complete.side_effect = [
            decomposition_reply(
                ("1", "Research competitors", []),
                ("2", "Draft the announcement", ["1"]),
            ),
            "competitor notes",
            "announcement draft",
            "merged launch package",
        ]

        result = await orchestrator.collaborative_execution(
            "Prepare the launch", [researcher.id, writer.id]
        )

        assert result == "merged launch package"
        assert mock_oracle.complete.await_count == 4
        assert "Context: {}" in prompt_of(1)[1]
        assert prompt_of(1)[0].startswith("You are Ada.")
        assert prompt_of(2)[0].startswith("You are Ada.")

        _, synthesis_human = prompt_of(3)
        assert "- 1 (by Ada, research;" in synthesis_human
        assert "announcement draft" in synthesis_human

        assert researcher.memory == []
        assert writer.memory == []
        assert len(context.tasks) == 0

    @pytest.mark.asyncio
    async def test_collaborative_with_capability_scorer(
        self, context, mock_oracle, decomposition_reply, prompt_of
    ):
        researcher = await context.registry.create_agent(
            {"name": "Ada", "type": "research", "capabilities": ["competitors"]}
        )
        writer = await context.registry.create_agent(
            {"name": "Bo", "type": "writing", "capabilities": ["announcement"]}
        )
        orchestrator = TaskOrchestrator(context, scorer=capability_overlap)
        mock_oracle.complete.side_effect = [
            decomposition_reply(
                ("1", "Research competitors", []),
                ("2", "Draft the announcement", []),
            ),
            "notes",
            "draft",
            "merged",
        ]

        await orchestrator.collaborative_execution(
            "Prepare the launch", [researcher.id, writer.id]
        )

        assert prompt_of(1)[0].startswith("You are Ada.")
        assert prompt_of(2)[0].startswith("You are Bo.")
        assert "(by Bo, writing; Best match for subtask requirements " in prompt_of(3)[1]

    @pytest.mark.asyncio
    async def test_no_eligible_agents(
        self, orchestrator, agent, mock_oracle, decomposition_reply
    ):
        mock_oracle.complete.return_value = decomposition_reply(("1", "One", []))

        with pytest.raises(NoEligibleAgentError):
            await orchestrator.collaborative_execution("Plan", [])

        assert mock_oracle.complete.await_count == 1


class TestPerformance:
    """Test performance reporting through the orchestrator."""

    def test_unknown_agent(self, orchestrator):
        assert orchestrator.performance("agent_missing") is None

    @pytest.mark.asyncio
    async def test_agent_without_tasks(self, orchestrator, agent):
        """No finished tasks means zero rates rather than division errors."""
        metrics = orchestrator.performance(agent.id)

        assert metrics.total_tasks == 0
        assert metrics.success_rate == 0.0
        assert metrics.average_completion_time == 0.0
        assert metrics.recent_activity == []

    @pytest.mark.asyncio
    async def test_completed_and_failed_tasks(self, orchestrator, agent, mock_oracle):
        mock_oracle.complete.side_effect = [
            "low",
            "answer",
            "high",
            "not json",
        ]

        await orchestrator.execute_task(agent.id, "Easy")
        with pytest.raises(DecompositionParseError):
            await orchestrator.execute_task(agent.id, "Hard")

        metrics = orchestrator.performance(agent.id)

        assert metrics.total_tasks == 2
        assert metrics.success_rate == 0.5
        assert metrics.average_completion_time >= 0.0
        assert [e.data for e in metrics.recent_activity] == ["Easy"]
