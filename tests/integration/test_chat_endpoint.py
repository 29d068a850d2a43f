"""Integration tests for the POST /api/chat endpoint.

Real HTTP requests through httpx AsyncClient and ASGITransport. Only the
agent service is mocked.
"""

from unittest.mock import MagicMock

import httpx
import openai
import pytest
from httpx import AsyncClient

from expert_chat.api.chat import classify_upstream_error
from expert_chat.models.schemas import ChatReply, ErrorResponse, ReasoningEffort, Verbosity

VALID_BODY = {
    "messages": [{"role": "user", "content": "How do I launch my product?"}],
    "expertType": "marketer",
    "reasoningEffort": "medium",
    "verbosity": "high",
}


class TestChatSuccess:
    """Tests for successful turns."""

    async def test_returns_text_role_and_response_id(
        self, async_client: AsyncClient, agent_service: MagicMock
    ) -> None:
        response = await async_client.post("/api/chat", json=VALID_BODY)

        assert response.status_code == 200
        assert response.json() == {
            "text": "Hello there",
            "role": "assistant",
            "responseId": "resp_123",
        }
        ChatReply.model_validate(response.json())

    async def test_forwards_settings_to_agent(
        self, async_client: AsyncClient, agent_service: MagicMock
    ) -> None:
        await async_client.post(
            "/api/chat", json={**VALID_BODY, "previous_response_id": "resp_000"}
        )

        kwargs = agent_service.respond.await_args.kwargs
        assert kwargs["expert_type"] == "marketer"
        assert kwargs["reasoning_effort"] == ReasoningEffort.MEDIUM
        assert kwargs["verbosity"] == Verbosity.HIGH
        assert kwargs["previous_response_id"] == "resp_000"
        assert [m.content for m in kwargs["messages"]] == ["How do I launch my product?"]

    async def test_settings_default_when_omitted(
        self, async_client: AsyncClient, agent_service: MagicMock
    ) -> None:
        response = await async_client.post(
            "/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]}
        )

        assert response.status_code == 200
        kwargs = agent_service.respond.await_args.kwargs
        assert kwargs["reasoning_effort"] == ReasoningEffort.LOW
        assert kwargs["verbosity"] == Verbosity.MEDIUM
        assert kwargs["previous_response_id"] is None

    async def test_unknown_expert_uses_default_prompt(
        self, async_client: AsyncClient, agent_service: MagicMock
    ) -> None:
        response = await async_client.post(
            "/api/chat", json={**VALID_BODY, "expertType": "astrologer"}
        )

        assert response.status_code == 200
        assert agent_service.respond.await_args.kwargs["expert_type"] == "marketer"


class TestChatValidation:
    """Tests for requests rejected before reaching the model."""

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"messages": "hello"},
            {"messages": []},
            {"messages": [{"content": "no role"}]},
        ],
    )
    async def test_bad_messages_rejected(
        self, async_client: AsyncClient, agent_service: MagicMock, body: dict
    ) -> None:
        response = await async_client.post("/api/chat", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "Messages are required"
        agent_service.respond.assert_not_awaited()

    async def test_invalid_reasoning_effort(
        self, async_client: AsyncClient, agent_service: MagicMock
    ) -> None:
        response = await async_client.post(
            "/api/chat", json={**VALID_BODY, "reasoningEffort": "maximal"}
        )

        assert response.status_code == 400
        body = ErrorResponse.model_validate(response.json())
        assert body.error == (
            "Invalid reasoning_effort. Must be one of: minimal, low, medium, high"
        )
        assert body.details
        agent_service.respond.assert_not_awaited()

    async def test_invalid_verbosity(
        self, async_client: AsyncClient, agent_service: MagicMock
    ) -> None:
        response = await async_client.post(
            "/api/chat", json={**VALID_BODY, "verbosity": "minimal"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid verbosity. Must be one of: low, medium, high"

    async def test_invalid_json(
        self, async_client: AsyncClient, agent_service: MagicMock
    ) -> None:
        response = await async_client.post(
            "/api/chat",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid JSON body"

    async def test_non_utf8_body_is_rejected_as_invalid_json(
        self, async_client: AsyncClient, agent_service: MagicMock
    ) -> None:
        response = await async_client.post(
            "/api/chat",
            content=b'{"messages": "\xff\xfe"}',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid JSON body"
        assert body["details"]
        agent_service.respond.assert_not_awaited()

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/chat")

        assert response.status_code == 405


class TestChatUpstreamErrors:
    """Tests for mapping upstream failures to the error contract."""

    @pytest.mark.parametrize(
        ("error", "expected_error", "expected_details"),
        [
            (
                Exception("Incorrect API key provided: sk-***"),
                "API key error",
                "Please ensure OPENAI_API_KEY is set in your environment variables",
            ),
            (
                Exception("The model `gpt-5` does not exist or you do not have access to it."),
                "Model access error",
                "Unable to access the AI model. Please check your API key.",
            ),
            (RuntimeError("rate limited"), "Internal server error", "rate limited"),
            (RuntimeError(), "Internal server error", "Unknown error"),
        ],
    )
    async def test_error_mapping(
        self,
        async_client: AsyncClient,
        agent_service: MagicMock,
        error: Exception,
        expected_error: str,
        expected_details: str,
    ) -> None:
        agent_service.respond.side_effect = error

        response = await async_client.post("/api/chat", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": expected_error, "details": expected_details}

    def test_connection_error_is_access_error(self) -> None:
        error = openai.APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/responses")
        )

        assert classify_upstream_error(error).error == "Model access error"


async def test_health_check(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "expert-chat"}
