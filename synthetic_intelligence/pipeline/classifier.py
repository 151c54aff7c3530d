"""Task complexity classification."""

import logging

from ..config import GenerationSettings
from ..integrations.oracle_client import OracleClient
from .prompts import CLASSIFICATION_PROMPT


logger = logging.getLogger(__name__)


class ComplexityClassifier:
    """Labels a task description as low, medium or high complexity.

    The reply is only normalized (trimmed, lowercased). Anything the oracle
    answers besides the three labels is passed through unchanged; callers
    treat every label other than ``high`` as the simple path.
    """

    def __init__(self, oracle: OracleClient, generation: GenerationSettings):
        self.oracle = oracle
        self.options = generation.options_for("classification")

    async def classify(self, description: str) -> str:
        messages = CLASSIFICATION_PROMPT.format_messages(task_description=description)
        reply = await self.oracle.complete(messages, self.options)
        label = reply.strip().lower()
        logger.debug(f"Classified task complexity as '{label}'")
        return label
