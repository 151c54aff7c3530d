"""Core orchestration components.

This module provides the agent registry, memory store, task queue,
assignment and the task orchestrator that drives the pipeline.
"""

from .agent_registry import AgentRegistry
from .assigner import AgentAssigner, AgentScorer, capability_overlap, first_eligible
from .context import OrchestrationContext
from .memory import MemoryStore
from .orchestrator import TaskOrchestrator
from .state import WorkflowState
from .task_queue import TaskQueue


__all__ = [
    "AgentAssigner",
    "AgentRegistry",
    "AgentScorer",
    "MemoryStore",
    "OrchestrationContext",
    "TaskOrchestrator",
    "TaskQueue",
    "WorkflowState",
    "capability_overlap",
    "first_eligible",
]
