"""Agent performance calculations over the task queue.

Both ratios are defined as exactly zero when there is nothing to divide by,
so an agent without finished tasks reports 0.0 rather than NaN.
"""

from typing import TYPE_CHECKING

from ..schemas.models import PerformanceMetrics, Task, TaskStatus

if TYPE_CHECKING:
    from ..core.context import OrchestrationContext


class PerformanceCalculations:
    """Utility class for task-derived agent statistics."""

    @staticmethod
    def success_rate(completed: int, failed: int) -> float:
        """Completed share of finished tasks; 0.0 when none finished."""
        total = completed + failed
        if total == 0:
            return 0.0
        return completed / total

    @staticmethod
    def average_completion_time(completed_tasks: list[Task]) -> float:
        """Mean seconds from creation to completion; 0.0 when none completed."""
        durations = [
            (task.completed_at - task.created_at).total_seconds()
            for task in completed_tasks
            if task.completed_at is not None
        ]
        if not durations:
            return 0.0
        return sum(durations) / len(durations)


def agent_performance(
    context: "OrchestrationContext", agent_id: str
) -> PerformanceMetrics | None:
    """Compute performance metrics for one agent.

    Args:
        context: Orchestration context holding the registry and task queue
        agent_id: Agent to report on

    Returns:
        Metrics for the agent, or None if the agent is unknown

    """
    agent = context.registry.get_agent(agent_id)
    if agent is None:
        return None

    completed = context.tasks.for_agent(agent_id, {TaskStatus.COMPLETED})
    failed = context.tasks.for_agent(agent_id, {TaskStatus.FAILED})

    return PerformanceMetrics(
        total_tasks=len(completed) + len(failed),
        success_rate=PerformanceCalculations.success_rate(len(completed), len(failed)),
        average_completion_time=PerformanceCalculations.average_completion_time(
            completed
        ),
        recent_activity=context.memory.recent(
            agent, context.settings.metrics.recent_activity_limit
        ),
    )
