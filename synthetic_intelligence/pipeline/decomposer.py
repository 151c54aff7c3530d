"""Task decomposition into ordered subtasks.

The oracle is asked for a JSON array of subtask records. The reply is parsed
strictly: apart from an optional surrounding markdown code fence, it must be
a JSON array whose items validate as :class:`Subtask`. Anything else raises
:class:`DecompositionParseError`; there is no retry.
"""

import json
import logging
import re

from pydantic import TypeAdapter, ValidationError

from ..config import GenerationSettings
from ..errors import DecompositionParseError
from ..integrations.oracle_client import OracleClient
from ..schemas.models import Subtask
from .prompts import DECOMPOSITION_PROMPT


logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"^\s*```[a-zA-Z]*\s*([\s\S]*?)\s*```\s*$")
_SUBTASK_LIST = TypeAdapter(list[Subtask])


def parse_subtasks(raw_response: str) -> list[Subtask]:
    """Parse an oracle reply into subtasks.

    Args:
        raw_response: Text returned by the oracle

    Returns:
        Subtasks in the order the oracle listed them

    Raises:
        DecompositionParseError: If the reply is not a JSON array of valid
            subtask records

    """
    text = raw_response
    fence_match = _FENCE_PATTERN.match(text)
    if fence_match:
        text = fence_match.group(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecompositionParseError(f"invalid JSON ({e})", raw_response) from e

    if not isinstance(data, list):
        raise DecompositionParseError(
            f"expected a JSON array, got {type(data).__name__}", raw_response
        )

    try:
        subtasks = _SUBTASK_LIST.validate_python(data)
    except ValidationError as e:
        raise DecompositionParseError(
            f"{e.error_count()} invalid subtask field(s)", raw_response
        ) from e

    seen: set[str] = set()
    for subtask in subtasks:
        if subtask.id in seen:
            raise DecompositionParseError(
                f"duplicate subtask id '{subtask.id}'", raw_response
            )
        seen.add(subtask.id)

    return subtasks


def order_subtasks(subtasks: list[Subtask]) -> list[Subtask]:
    """Order subtasks so that declared dependencies run first.

    The order is a stable topological sort: at every step the earliest
    subtask (in decomposition order) whose dependencies have all run is
    taken next, so a decomposition that already respects its dependencies
    comes back unchanged. Dependencies on unknown ids or on the subtask
    itself are ignored. If the dependencies form a cycle the original
    order is returned.

    Args:
        subtasks: Subtasks in decomposition order

    Returns:
        A new list in execution order

    """
    known_ids = {subtask.id for subtask in subtasks}
    requirements: dict[str, set[str]] = {}

    for subtask in subtasks:
        deps = set()
        for dep in subtask.dependencies:
            if dep == subtask.id or dep not in known_ids:
                logger.warning(
                    f"Ignoring dependency '{dep}' of subtask '{subtask.id}'"
                )
                continue
            deps.add(dep)
        requirements[subtask.id] = deps

    ordered: list[Subtask] = []
    done: set[str] = set()
    remaining = list(subtasks)

    while remaining:
        ready = next(
            (s for s in remaining if requirements[s.id] <= done),
            None,
        )
        if ready is None:
            logger.warning(
                "Subtask dependencies form a cycle; keeping decomposition order"
            )
            return list(subtasks)
        ordered.append(ready)
        done.add(ready.id)
        remaining.remove(ready)

    return ordered


class TaskDecomposer:
    """Turns a task description into an ordered list of subtasks."""

    def __init__(self, oracle: OracleClient, generation: GenerationSettings):
        """Initialize with the oracle and the decomposition profile."""
        self.oracle = oracle
        self.options = generation.options_for("decomposition")

    async def decompose(self, description: str) -> list[Subtask]:
        """Request and parse a decomposition.

        Raises:
            DecompositionParseError: If the reply cannot be parsed
            ServiceError: If the oracle call fails

        """
        messages = DECOMPOSITION_PROMPT.format_messages(task_description=description)
        reply = await self.oracle.complete(messages, self.options)
        subtasks = parse_subtasks(reply)
        logger.info(f"Decomposed task into {len(subtasks)} subtasks")
        return subtasks
