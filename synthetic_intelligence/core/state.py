"""State passed between the nodes of the task workflow graph."""

from typing import TypedDict

from ..schemas.models import Agent, Subtask, SubtaskResult, Task


class WorkflowState(TypedDict):
    """State of one task while the workflow drives it."""

    task: Task
    agent: Agent
    complexity: str | None
    subtasks: list[Subtask]
    results: list[SubtaskResult]
    result: str | None
