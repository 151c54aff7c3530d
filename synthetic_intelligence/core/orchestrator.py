"""Task orchestrator.

This module drives tasks through the pipeline with a LangGraph workflow:

    classify --high--> decompose -> execute_subtasks -> synthesize
        \\--otherwise--> execute_simple

Every step awaits one oracle call before the next begins; subtasks run
strictly one after another. The orchestrator owns task state: a task moves
``pending -> processing`` before the workflow starts and ends ``completed``
with the final result or ``failed`` with the error message, in which case
the error is re-raised to the caller.
"""

import logging
from typing import Any

from langgraph.graph import END, START, StateGraph

from ..pipeline.classifier import ComplexityClassifier
from ..pipeline.decomposer import TaskDecomposer, order_subtasks
from ..pipeline.executor import SubtaskExecutor
from ..pipeline.synthesizer import ResultSynthesizer
from ..schemas.models import (
    Agent,
    PerformanceMetrics,
    Subtask,
    SubtaskResult,
    Task,
    TaskAssignment,
    TaskComplexity,
)
from ..utils.performance import agent_performance
from .assigner import AgentAssigner, AgentScorer, first_eligible
from .context import OrchestrationContext
from .state import WorkflowState
from .task_queue import generate_task_id


logger = logging.getLogger(__name__)


class TaskOrchestrator:
    """Coordinates classification, decomposition, execution and synthesis.

    All state lives in the orchestration context passed in; several
    orchestrators may share one context.
    """

    def __init__(
        self,
        context: OrchestrationContext,
        scorer: AgentScorer = first_eligible,
    ):
        """Initialize the pipeline steps and compile the workflow."""
        self.context = context
        generation = context.settings.generation

        self.classifier = ComplexityClassifier(context.oracle, generation)
        self.decomposer = TaskDecomposer(context.oracle, generation)
        self.executor = SubtaskExecutor(context.oracle, context.memory, generation)
        self.synthesizer = ResultSynthesizer(context.oracle, generation)
        self.assigner = AgentAssigner(context.registry, scorer)

        self.workflow = self._create_workflow()

    def _create_workflow(self):
        """Create the LangGraph workflow for a single task."""
        workflow = StateGraph(WorkflowState)

        workflow.add_node("classify", self._classify)
        workflow.add_node("decompose", self._decompose)
        workflow.add_node("execute_subtasks", self._execute_subtasks)
        workflow.add_node("synthesize", self._synthesize)
        workflow.add_node("execute_simple", self._execute_simple)

        def route_by_complexity(state: WorkflowState) -> str:
            """Only high complexity tasks are decomposed."""
            if state.get("complexity") == TaskComplexity.HIGH:
                return "decompose"
            return "execute_simple"

        workflow.add_edge(START, "classify")
        workflow.add_conditional_edges(
            "classify", route_by_complexity, ["decompose", "execute_simple"]
        )
        workflow.add_edge("decompose", "execute_subtasks")
        workflow.add_edge("execute_subtasks", "synthesize")
        workflow.add_edge("synthesize", END)
        workflow.add_edge("execute_simple", END)

        return workflow.compile()

    # ------------------------------------------------------------------
    # Workflow nodes
    # ------------------------------------------------------------------

    async def _classify(self, state: WorkflowState) -> dict[str, Any]:
        task = state["task"]
        complexity = await self.classifier.classify(task.description)
        task.complexity = complexity
        logger.info(f"Task {task.id} classified as '{complexity}'")
        return {"complexity": complexity}

    async def _decompose(self, state: WorkflowState) -> dict[str, Any]:
        subtasks = await self.decomposer.decompose(state["task"].description)
        if self.context.settings.respect_dependencies:
            subtasks = order_subtasks(subtasks)
        return {"subtasks": subtasks}

    async def _execute_subtasks(self, state: WorkflowState) -> dict[str, Any]:
        agent = state["agent"]
        task = state["task"]

        results = []
        for subtask in state["subtasks"]:
            result = await self._execute_and_learn(agent, subtask, task.context)
            results.append(result)

        return {"results": results}

    async def _synthesize(self, state: WorkflowState) -> dict[str, Any]:
        result = await self.synthesizer.synthesize(
            state["agent"], state["task"].description, state["results"]
        )
        return {"result": result}

    async def _execute_simple(self, state: WorkflowState) -> dict[str, Any]:
        """Run a low or medium complexity task as one subtask.

        The subtask reuses the task identifier and description; its result
        is the task result as-is, without a synthesis call.
        """
        task = state["task"]
        subtask = Subtask(id=task.id, description=task.description)
        result = await self._execute_and_learn(state["agent"], subtask, task.context)
        return {"results": [result], "result": result.result}

    async def _execute_and_learn(
        self, agent: Agent, subtask: Subtask, task_context: dict[str, Any]
    ) -> SubtaskResult:
        """Execute a subtask and record it in the agent's memory."""
        async with self.context.agent_lock(agent.id):
            result = await self.executor.execute(agent, subtask, task_context)
            self.context.memory.record_execution(agent, subtask, result)
        return result

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def execute_task(
        self,
        agent_id: str,
        description: str,
        task_context: dict[str, Any] | None = None,
    ) -> str:
        """Submit a task for an agent and drive it to completion.

        Args:
            agent_id: Agent that owns the task
            description: Natural-language task description
            task_context: Mapping passed to every execution prompt

        Returns:
            The final result text

        Raises:
            AgentNotFoundError: If the agent is unknown; no task is created
            OrchestrationError: Any failure while processing, after the task
                has been marked failed

        """
        self.context.registry.require_agent(agent_id)

        task = Task(
            id=generate_task_id(),
            agent_id=agent_id,
            description=description,
            context=dict(task_context or {}),
        )
        self.context.tasks.append(task)
        logger.info(f"Task {task.id} submitted for agent {agent_id}")

        return await self.process_task(task.id)

    async def process_task(self, task_id: str) -> str:
        """Drive a pending task through the workflow.

        Raises:
            TaskNotFoundError: If the task is unknown
            TaskStateError: If the task is not pending

        """
        task = self.context.tasks.require(task_id)
        task.start()
        logger.info(f"Processing task {task.id}")

        try:
            agent = self.context.registry.require_agent(task.agent_id)
            final_state = await self.workflow.ainvoke(
                {
                    "task": task,
                    "agent": agent,
                    "complexity": None,
                    "subtasks": [],
                    "results": [],
                    "result": None,
                }
            )
            result = final_state["result"]
        except Exception as e:
            logger.error(f"Task {task.id} failed: {e}")
            task.fail(str(e))
            raise

        task.complete(result)
        logger.info(f"Task {task.id} completed")
        return result

    async def collaborative_execution(
        self, description: str, eligible_agent_ids: list[str]
    ) -> str:
        """Split a task across several agents and merge their answers.

        The task is decomposed once, every subtask is assigned to one
        eligible agent, and the subtasks run one after another with an empty
        context. No task record is created and no memory is recorded.

        Args:
            description: Natural-language task description
            eligible_agent_ids: Agents that may receive subtasks

        Returns:
            The collaboratively synthesized answer

        Raises:
            DecompositionParseError: If decomposition cannot be parsed
            NoEligibleAgentError: If no eligible agent is registered
            ServiceError: If an oracle call fails

        """
        subtasks = await self.decomposer.decompose(description)
        if self.context.settings.respect_dependencies:
            subtasks = order_subtasks(subtasks)

        assignments = self.assign_subtasks(subtasks, eligible_agent_ids)

        agents: dict[str, Agent] = {}
        results: list[SubtaskResult] = []
        for assignment in assignments:
            agent = self.context.registry.require_agent(assignment.agent_id)
            agents[agent.id] = agent
            async with self.context.agent_lock(agent.id):
                result = await self.executor.execute(agent, assignment.subtask, {})
            results.append(result)

        return await self.synthesizer.synthesize_collaborative(
            description, results, assignments, agents
        )

    def assign_subtasks(
        self, subtasks: list[Subtask], eligible_agent_ids: list[str]
    ) -> list[TaskAssignment]:
        """Assign each subtask to one eligible agent, in order."""
        return self.assigner.assign(subtasks, eligible_agent_ids)

    def get_task(self, task_id: str) -> Task:
        """Get a task by identifier.

        Raises:
            TaskNotFoundError: If the task is unknown

        """
        return self.context.tasks.require(task_id)

    def performance(self, agent_id: str) -> PerformanceMetrics | None:
        """Performance metrics for an agent, or None if it is unknown."""
        return agent_performance(self.context, agent_id)
