"""Exception taxonomy for the orchestration core.

Every error carries the identifiers it concerns as attributes so callers can
react without parsing messages. None of them is retried anywhere in the core.
"""


class OrchestrationError(Exception):
    """Base class for all orchestration failures."""


class AgentNotFoundError(OrchestrationError):
    """Raised when an agent identifier is not present in the registry."""

    def __init__(self, agent_id: str):
        """Initialize with the missing agent identifier."""
        self.agent_id = agent_id
        super().__init__(f"Agent not found: {agent_id}")


class TaskNotFoundError(OrchestrationError):
    """Raised when a task identifier is not present in the task queue."""

    def __init__(self, task_id: str):
        """Initialize with the missing task identifier."""
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class ServiceError(OrchestrationError):
    """Raised when the text-completion oracle fails.

    Covers transport and quota failures as well as malformed responses.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        """Initialize with a description and the underlying exception."""
        self.cause = cause
        super().__init__(message)


class TrainingFailureError(OrchestrationError):
    """Raised when an agent could not be trained."""

    def __init__(self, agent_id: str, message: str = "Failed to train AI agent"):
        """Initialize with the agent that failed training."""
        self.agent_id = agent_id
        super().__init__(f"{message} ({agent_id})")


class DecompositionParseError(OrchestrationError):
    """Raised when a decomposition reply is not a valid list of subtasks."""

    def __init__(self, message: str, raw_response: str):
        """Initialize with the parse problem and the raw oracle reply."""
        self.raw_response = raw_response
        super().__init__(f"Could not parse task decomposition: {message}")


class NoEligibleAgentError(OrchestrationError):
    """Raised when no registered agent matches the eligible identifiers."""

    def __init__(self, eligible_ids: list[str]):
        """Initialize with the identifiers that were offered."""
        self.eligible_ids = list(eligible_ids)
        super().__init__(
            f"No eligible agent among {self.eligible_ids or 'an empty selection'}"
        )


class TaskStateError(OrchestrationError):
    """Raised on an illegal task status transition."""

    def __init__(self, task_id: str, from_status: str, to_status: str):
        """Initialize with the attempted transition."""
        self.task_id = task_id
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Task {task_id} cannot move from {from_status} to {to_status}"
        )
