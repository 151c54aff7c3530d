"""Ordered task history with identifier lookup."""

from collections.abc import Iterator
from uuid import uuid4

from ..errors import TaskNotFoundError
from ..schemas.models import Task, TaskStatus


def generate_task_id() -> str:
    """Create a fresh task identifier."""
    return f"task_{uuid4().hex[:12]}"


class TaskQueue:
    """Insertion-ordered store of every submitted task.

    Tasks are never removed: the queue holds finished history and active
    work side by side. Iteration follows submission order.
    """

    def __init__(self):
        """Initialize an empty queue."""
        self._tasks: dict[str, Task] = {}

    def append(self, task: Task) -> None:
        """Add a task at the end of the queue.

        Raises:
            ValueError: If a task with the same identifier exists

        """
        if task.id in self._tasks:
            raise ValueError(f"Task '{task.id}' is already queued")
        self._tasks[task.id] = task

    def get(self, task_id: str) -> Task | None:
        """Get a task by identifier, or None."""
        return self._tasks.get(task_id)

    def require(self, task_id: str) -> Task:
        """Get a task by identifier.

        Raises:
            TaskNotFoundError: If the identifier is unknown

        """
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def for_agent(
        self, agent_id: str, statuses: set[TaskStatus] | None = None
    ) -> list[Task]:
        """Tasks owned by an agent, optionally filtered by status."""
        return [
            task
            for task in self._tasks.values()
            if task.agent_id == agent_id
            and (statuses is None or task.status in statuses)
        ]

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks.values()))

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks
