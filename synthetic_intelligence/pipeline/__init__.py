"""Oracle-backed pipeline steps.

Each step builds its prompt, sends one request with its own generation
profile and interprets the reply. None of them touches task state.
"""

from .classifier import ComplexityClassifier
from .decomposer import TaskDecomposer, order_subtasks, parse_subtasks
from .executor import SubtaskExecutor, serialize_context
from .synthesizer import ResultSynthesizer


__all__ = [
    "ComplexityClassifier",
    "ResultSynthesizer",
    "SubtaskExecutor",
    "TaskDecomposer",
    "order_subtasks",
    "parse_subtasks",
    "serialize_context",
]
