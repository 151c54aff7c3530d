"""Schema package for the orchestration core.

Quick usage:
    from synthetic_intelligence.schemas import Agent, Task, TaskStatus
"""

from .models import (
    Agent,
    AgentConfig,
    AgentStatus,
    BaseOrchestrationModel,
    GenerationOptions,
    MemoryEntry,
    MemoryKind,
    PerformanceMetrics,
    Subtask,
    SubtaskResult,
    Task,
    TaskAssignment,
    TaskComplexity,
    TaskStatus,
    can_transition_status,
)


__all__ = [
    "Agent",
    "AgentConfig",
    "AgentStatus",
    "BaseOrchestrationModel",
    "GenerationOptions",
    "MemoryEntry",
    "MemoryKind",
    "PerformanceMetrics",
    "Subtask",
    "SubtaskResult",
    "Task",
    "TaskAssignment",
    "TaskComplexity",
    "TaskStatus",
    "can_transition_status",
]
