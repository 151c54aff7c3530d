"""Pytest configuration and fixtures for the orchestration tests."""

import json
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from synthetic_intelligence.config import OrchestrationSettings
from synthetic_intelligence.core.context import OrchestrationContext
from synthetic_intelligence.core.orchestrator import TaskOrchestrator
from synthetic_intelligence.schemas.models import AgentConfig


@pytest.fixture
def settings():
    """Settings with debug logging off."""
    return OrchestrationSettings(debug_mode=False, log_level="INFO")


@pytest.fixture
def mock_oracle():
    """Oracle double; tests script replies through ``complete``."""
    oracle = AsyncMock()
    oracle.complete.return_value = "ok"
    return oracle


@pytest.fixture
def context(mock_oracle, settings):
    """Fresh orchestration context around the mock oracle."""
    return OrchestrationContext(mock_oracle, settings)


@pytest.fixture
def orchestrator(context):
    """Task orchestrator over the test context."""
    return TaskOrchestrator(context)


@pytest.fixture
def sample_agent_config():
    """Agent configuration without initial training."""
    return AgentConfig(
        name="Ada",
        type="market research",
        capabilities=["data_collection", "competitive_analysis", "reporting"],
        knowledge=["The company sells developer tools."],
    )


@pytest_asyncio.fixture
async def agent(context, sample_agent_config):
    """Registered, untrained agent."""
    return await context.registry.create_agent(sample_agent_config)


@pytest.fixture
def decomposition_reply():
    """Build a JSON decomposition reply from (id, description, deps) tuples."""

    def build(*subtasks):
        return json.dumps(
            [
                {
                    "id": subtask_id,
                    "description": description,
                    "dependencies": list(dependencies),
                    "estimated_duration": 15,
                }
                for subtask_id, description, dependencies in subtasks
            ]
        )

    return build


@pytest.fixture
def prompt_of(mock_oracle):
    """System and human message contents of the n-th oracle call."""

    def get(index):
        messages = mock_oracle.complete.await_args_list[index].args[0]
        return messages[0].content, messages[1].content

    return get


@pytest.fixture
def options_of(mock_oracle):
    """Generation options sent with the n-th oracle call."""

    def get(index):
        return mock_oracle.complete.await_args_list[index].args[1]

    return get
