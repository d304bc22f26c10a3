from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

from autofun_intel.backend.memory import InMemoryBackend
from autofun_intel.services.communication.twitter_service import TwitterService
from autofun_intel.services.infrastructure.runtime import AgentRuntime

AGENT_ID = UUID("00000000-0000-0000-0000-0000000000aa")


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def runtime(backend):
    return AgentRuntime(backend=backend, agent_id=AGENT_ID)


@pytest.fixture
def twitter_service():
    service = MagicMock(spec=TwitterService)
    service.search_recent_tweets = AsyncMock(return_value=[])
    return service


@pytest.fixture
def twitter_runtime(runtime, twitter_service):
    runtime.register_service("twitter", twitter_service)
    return runtime
