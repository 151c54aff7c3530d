"""Data model for agents, memory, tasks and decomposition results.

All models are Pydantic v2 models sharing one configuration. Agents and
tasks are mutable records owned by the registry and the task queue; the
remaining models are value objects produced by the pipeline steps.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import TaskStateError


# ============================================================================
# ENUMS
# ============================================================================


class AgentStatus(StrEnum):
    """Agent availability."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class MemoryKind(StrEnum):
    """Kind of event recorded in an agent's memory log."""

    TRAINING = "training"
    EXECUTION = "execution"


class TaskStatus(StrEnum):
    """Task lifecycle status."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class TaskComplexity(StrEnum):
    """Labels the complexity classifier is asked to produce."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ============================================================================
# CONFIGURATION
# ============================================================================


OrchestrationModelConfig = ConfigDict(
    validate_assignment=True,
    validate_default=True,
    extra="forbid",
)


class BaseOrchestrationModel(BaseModel):
    """Base for all orchestration records."""

    model_config = OrchestrationModelConfig


# ============================================================================
# AGENTS AND MEMORY
# ============================================================================


class MemoryEntry(BaseOrchestrationModel):
    """One event in an agent's memory log.

    ``data`` is the payload the executor feeds back into prompts: the training
    text for training events and the subtask description for executions.
    """

    kind: MemoryKind
    data: str
    timestamp: datetime = Field(default_factory=datetime.now)
    success: bool | None = None
    response: str | None = None
    result: str | None = None


class AgentConfig(BaseOrchestrationModel):
    """Request to create an agent."""

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1, description="Specialization tag")
    capabilities: list[str] = Field(default_factory=list)
    knowledge: list[str] = Field(default_factory=list)
    initial_prompt: str | None = Field(
        default=None, description="Training text applied before registration"
    )


class Agent(BaseOrchestrationModel):
    """A named, capability-tagged execution persona with its own memory."""

    id: str
    name: str
    type: str
    capabilities: list[str] = Field(default_factory=list)
    knowledge: list[str] = Field(default_factory=list)
    memory: list[MemoryEntry] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    status: AgentStatus = AgentStatus.ACTIVE


# ============================================================================
# DECOMPOSITION
# ============================================================================


class Subtask(BaseOrchestrationModel):
    """One unit of a decomposed task.

    The oracle frequently answers with numeric identifiers; they are
    normalized to strings so dependency lookups compare like with like.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    dependencies: list[str] = Field(default_factory=list)
    estimated_duration: float | None = Field(
        default=None, ge=0, description="Estimated duration in minutes"
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v: Any) -> Any:
        """Accept integer identifiers."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("dependencies", mode="before")
    @classmethod
    def normalize_dependencies(cls, v: Any) -> Any:
        """Accept null, a single identifier, or integer identifiers."""
        if v is None:
            return []
        if isinstance(v, str | int) and not isinstance(v, bool):
            v = [v]
        if isinstance(v, list):
            return [
                str(dep) if isinstance(dep, int) and not isinstance(dep, bool) else dep
                for dep in v
            ]
        return v


class SubtaskResult(BaseOrchestrationModel):
    """Output of executing one subtask."""

    subtask_id: str
    result: str
    timestamp: datetime = Field(default_factory=datetime.now)


class TaskAssignment(BaseOrchestrationModel):
    """A subtask bound to the agent chosen to execute it."""

    subtask: Subtask
    agent_id: str
    reason: str


# ============================================================================
# ORACLE REQUESTS
# ============================================================================


class GenerationOptions(BaseOrchestrationModel):
    """Sampling options sent with every oracle request."""

    temperature: float = Field(..., ge=0.0, le=2.0)
    max_output_tokens: int = Field(..., ge=1, le=200000)


# ============================================================================
# TASKS
# ============================================================================


def can_transition_status(from_status: TaskStatus, to_status: TaskStatus) -> bool:
    """Check if transition between statuses is valid."""
    valid_transitions = {
        TaskStatus.PENDING: [TaskStatus.PROCESSING],
        TaskStatus.PROCESSING: [TaskStatus.COMPLETED, TaskStatus.FAILED],
        TaskStatus.COMPLETED: [],
        TaskStatus.FAILED: [],
    }
    return to_status in valid_transitions.get(from_status, [])


class Task(BaseOrchestrationModel):
    """A unit of work tracked through its lifecycle.

    Status changes only through :meth:`start`, :meth:`complete` and
    :meth:`fail`, which enforce ``pending -> processing -> completed|failed``.
    """

    id: str
    agent_id: str
    description: str
    context: dict[str, Any] = Field(default_factory=dict)
    status: TaskStatus = TaskStatus.PENDING
    complexity: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    completed_at: datetime | None = None
    result: str | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        """Whether the task reached completed or failed."""
        return self.status in (TaskStatus.COMPLETED, TaskStatus.FAILED)

    def _transition(self, to_status: TaskStatus) -> None:
        if not can_transition_status(self.status, to_status):
            raise TaskStateError(self.id, self.status.value, to_status.value)
        self.status = to_status

    def start(self) -> None:
        """Move a pending task into processing."""
        self._transition(TaskStatus.PROCESSING)

    def complete(self, result: str) -> None:
        """Record the final result and completion time."""
        self._transition(TaskStatus.COMPLETED)
        self.result = result
        self.completed_at = datetime.now()

    def fail(self, error: str) -> None:
        """Record the failure message."""
        self._transition(TaskStatus.FAILED)
        self.error = error


# ============================================================================
# METRICS
# ============================================================================


class PerformanceMetrics(BaseOrchestrationModel):
    """Success and timing statistics for one agent."""

    total_tasks: int = Field(default=0, ge=0)
    success_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    average_completion_time: float = Field(
        default=0.0, ge=0.0, description="Mean seconds from creation to completion"
    )
    recent_activity: list[MemoryEntry] = Field(default_factory=list)
