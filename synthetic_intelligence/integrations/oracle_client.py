"""Text-completion oracle client.

The orchestration core never talks to a model directly; every step goes
through an object implementing :class:`OracleClient`. The default
implementation wraps ``langchain_openai.ChatOpenAI`` and translates every
client failure into :class:`ServiceError`.
"""

import logging
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI

from ..config import OpenAISettings
from ..errors import ServiceError
from ..schemas.models import GenerationOptions


logger = logging.getLogger(__name__)


@runtime_checkable
class OracleClient(Protocol):
    """Contract of the external text-completion service."""

    async def complete(
        self, messages: Sequence[BaseMessage], options: GenerationOptions
    ) -> str:
        """Generate text for an ordered list of role-tagged messages.

        Args:
            messages: System and human messages, in order
            options: Sampling temperature and output token budget

        Returns:
            The generated text

        Raises:
            ServiceError: On transport, quota or malformed-response failures

        """
        ...


class LangChainOracle:
    """Oracle backed by an OpenAI-compatible chat model.

    The underlying client is built with ``max_retries=0``: a failed request
    surfaces immediately to the orchestration step that issued it.
    """

    def __init__(
        self,
        config: OpenAISettings | None = None,
        api_key: str | None = None,
        model: str | None = None,
    ):
        """Initialize the chat model from settings and optional overrides."""
        self.config = config or OpenAISettings()
        self.model_name = model or self.config.model
        self.client = ChatOpenAI(
            model=self.model_name,
            api_key=api_key or self.config.api_key,
            base_url=str(self.config.base_url),
            timeout=self.config.timeout_seconds,
            max_retries=0,
        )

    async def complete(
        self, messages: Sequence[BaseMessage], options: GenerationOptions
    ) -> str:
        """Send one chat completion request and return its text."""
        model = self.client.bind(
            temperature=options.temperature,
            max_tokens=options.max_output_tokens,
        )

        try:
            response = await model.ainvoke(list(messages))
        except Exception as e:
            logger.error(f"Oracle request to {self.model_name} failed: {e}")
            raise ServiceError(f"Oracle request failed: {e}", e) from e

        content = getattr(response, "content", None)
        if not isinstance(content, str):
            raise ServiceError(
                f"Oracle returned malformed content of type {type(content).__name__}"
            )

        return content
