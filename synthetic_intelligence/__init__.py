"""Synthetic Intelligence - agent pool and task orchestration.

This package manages a pool of specialized agents and orchestrates the
execution of natural-language tasks against a text-completion oracle.

Core Components:
- core: agent registry, memory store, task queue, assigner and orchestrator
- pipeline: classification, decomposition, execution and synthesis steps
- integrations: the oracle client contract and its LangChain implementation
- schemas: data models for agents, memory, tasks and subtasks
- utils: performance metrics

Typical usage example:
    context = OrchestrationContext.from_settings()
    agent = await context.registry.create_agent({...})
    orchestrator = TaskOrchestrator(context)
    result = await orchestrator.execute_task(agent.id, "Plan a product launch")
"""

from .config import OrchestrationSettings, configure_logging, get_settings, load_settings
from .core import (
    AgentAssigner,
    AgentRegistry,
    MemoryStore,
    OrchestrationContext,
    TaskOrchestrator,
    TaskQueue,
    capability_overlap,
    first_eligible,
)
from .errors import (
    AgentNotFoundError,
    DecompositionParseError,
    NoEligibleAgentError,
    OrchestrationError,
    ServiceError,
    TaskNotFoundError,
    TaskStateError,
    TrainingFailureError,
)
from .integrations import LangChainOracle, OracleClient
from .schemas import (
    Agent,
    AgentConfig,
    GenerationOptions,
    MemoryEntry,
    PerformanceMetrics,
    Subtask,
    SubtaskResult,
    Task,
    TaskAssignment,
    TaskStatus,
)
from .utils import agent_performance


__version__ = "0.1.0"

__all__ = [
    "Agent",
    "AgentAssigner",
    "AgentConfig",
    "AgentNotFoundError",
    "AgentRegistry",
    "DecompositionParseError",
    "GenerationOptions",
    "LangChainOracle",
    "MemoryEntry",
    "MemoryStore",
    "NoEligibleAgentError",
    "OracleClient",
    "OrchestrationContext",
    "OrchestrationError",
    "OrchestrationSettings",
    "PerformanceMetrics",
    "ServiceError",
    "Subtask",
    "SubtaskResult",
    "Task",
    "TaskAssignment",
    "TaskNotFoundError",
    "TaskOrchestrator",
    "TaskQueue",
    "TaskStateError",
    "TaskStatus",
    "TrainingFailureError",
    "agent_performance",
    "capability_overlap",
    "configure_logging",
    "first_eligible",
    "get_settings",
    "load_settings",
]
