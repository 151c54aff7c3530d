"""Utility modules for the orchestration core."""

from .performance import PerformanceCalculations, agent_performance

__all__ = ["PerformanceCalculations", "agent_performance"]
