"""Fixtures for integration tests against a mocked GitHub API."""

from collections.abc import AsyncGenerator

import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr

from actions_cli.config import ActionsConfig
from actions_cli.github.client import GitHubActionsClient

API_BASE_URL = "http://github.test"
REPOSITORY = "octo-org/octo-repo"
REPO_URL = f"{API_BASE_URL}/repos/{REPOSITORY}"


@pytest.fixture
def config() -> ActionsConfig:
    """Create test configuration."""
    return ActionsConfig(token=SecretStr("test-token"), api_base_url=API_BASE_URL)


@pytest.fixture
async def client(
    config: ActionsConfig, aioresponses: aioresponses_cls
) -> AsyncGenerator[GitHubActionsClient, None]:
    """Create client with managed session."""
    async with GitHubActionsClient.from_config(config) as impl:
        yield impl


def request_count(aioresponses: aioresponses_cls) -> int:
    """Total number of requests seen by the mock."""
    return sum(len(calls) for calls in aioresponses.requests.values())
