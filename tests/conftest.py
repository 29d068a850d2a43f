"""Pytest fixtures and shared test configuration.

Fixtures:
    - async_client: HTTPX client bound to the FastAPI app
    - agent_service: Mocked agent service patched into the chat route
    - client_config: Client config with no reveal delay
    - fake_transport: Scripted transport for the conversation manager
"""

import asyncio
from collections.abc import AsyncGenerator, Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from expert_chat.agent.chat_agent import AgentReply
from expert_chat.api import app
from expert_chat.chat.config import ClientConfig
from expert_chat.models.schemas import ChatReply, ChatRequest


class FakeTransport:
    """Replays scripted replies or errors, recording each request."""

    def __init__(self, *outcomes: ChatReply | Exception) -> None:
        self.requests: list[ChatRequest] = []
        self._outcomes = list(outcomes)

    async def send(self, request: ChatRequest) -> ChatReply:
        self.requests.append(request)
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class GatedTransport:
    """Holds every request until ``release`` is called."""

    def __init__(self, reply: ChatReply) -> None:
        self.requests: list[ChatRequest] = []
        self._reply = reply
        self._gate = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def send(self, request: ChatRequest) -> ChatReply:
        self.requests.append(request)
        await self._gate.wait()
        return self._reply


@pytest.fixture
def client_config() -> ClientConfig:
    """Client config pointing at the in-process app with no reveal delay."""
    return ClientConfig(api_base_url="http://test", reveal_delay=0.0, timeout=5.0)


@pytest.fixture
def agent_service() -> Iterator[MagicMock]:
    """Patch the chat route's agent service with a mock.

    Yields:
        The mock; ``respond`` returns a fixed reply unless reconfigured.
    """
    service = MagicMock()
    service.respond = AsyncMock(
        return_value=AgentReply(text="Hello there", response_id="resp_123")
    )
    with patch("expert_chat.api.chat.get_agent_service", return_value=service):
        yield service


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
