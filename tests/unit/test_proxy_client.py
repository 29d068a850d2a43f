"""Unit tests for ProxyClient using httpx mock transports."""

import json

import httpx
import pytest

from expert_chat.chat.client import FAILED_RESPONSE, MALFORMED_RESPONSE, ProxyClient, ProxyError
from expert_chat.chat.config import ClientConfig
from expert_chat.models.schemas import ChatMessage, ChatRequest


def make_request(**overrides) -> ChatRequest:
    fields = {
        "messages": [ChatMessage(role="user", content="Hello")],
        "expert_type": "marketer",
        "reasoning_effort": "low",
        "verbosity": "medium",
    }
    fields.update(overrides)
    return ChatRequest(**fields)


def make_client(client_config: ClientConfig, handler) -> ProxyClient:
    return ProxyClient(client_config, transport=httpx.MockTransport(handler))


class TestSend:
    async def test_posts_wire_payload(self, client_config: ClientConfig) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(
                200, json={"text": "Hi", "role": "assistant", "responseId": "resp_1"}
            )

        reply = await make_client(client_config, handler).send(make_request())

        assert reply.text == "Hi"
        assert reply.response_id == "resp_1"
        request = captured[0]
        assert request.method == "POST"
        assert request.url == "http://test/api/chat"
        assert json.loads(request.content) == {
            "messages": [{"role": "user", "content": "Hello"}],
            "expertType": "marketer",
            "reasoningEffort": "low",
            "verbosity": "medium",
        }

    async def test_includes_chaining_id_when_present(self, client_config: ClientConfig) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"text": "ok", "responseId": "resp_2"})

        await make_client(client_config, handler).send(
            make_request(previous_response_id="resp_1")
        )

        assert bodies[0]["previous_response_id"] == "resp_1"


class TestFailures:
    async def test_error_details_preferred(self, client_config: ClientConfig) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                500, json={"error": "Model access error", "details": "Unable to access"}
            )

        with pytest.raises(ProxyError) as exc_info:
            await make_client(client_config, handler).send(make_request())

        assert exc_info.value.detail == "Unable to access"
        assert exc_info.value.status_code == 500

    async def test_error_without_details_uses_error(self, client_config: ClientConfig) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "Messages are required"})

        with pytest.raises(ProxyError, match="Messages are required"):
            await make_client(client_config, handler).send(make_request())

    async def test_non_json_error_body(self, client_config: ClientConfig) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(ProxyError) as exc_info:
            await make_client(client_config, handler).send(make_request())

        assert exc_info.value.detail == FAILED_RESPONSE
        assert exc_info.value.status_code == 502

    async def test_error_body_without_messages_uses_fallback(
        self, client_config: ClientConfig
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "", "details": ""})

        with pytest.raises(ProxyError, match=FAILED_RESPONSE):
            await make_client(client_config, handler).send(make_request())

    async def test_connection_failure(self, client_config: ClientConfig) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProxyError) as exc_info:
            await make_client(client_config, handler).send(make_request())

        assert exc_info.value.detail == "Connection failed: connection refused"
        assert exc_info.value.status_code is None

    async def test_timeout_without_message_names_exception(
        self, client_config: ClientConfig
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("", request=request)

        with pytest.raises(ProxyError) as exc_info:
            await make_client(client_config, handler).send(make_request())

        assert exc_info.value.detail == "Connection failed: ReadTimeout"

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, json={"role": "assistant"}),
            httpx.Response(200, json=["not", "an", "object"]),
            httpx.Response(200, text="<html>oops</html>"),
        ],
    )
    async def test_malformed_success_body(
        self, client_config: ClientConfig, response: httpx.Response
    ) -> None:
        with pytest.raises(ProxyError, match=MALFORMED_RESPONSE):
            await make_client(client_config, lambda request: response).send(make_request())


class TestClientConfig:
    def test_chat_url_joins_base_and_endpoint(self) -> None:
        config = ClientConfig(api_base_url="http://localhost:8000/", chat_endpoint="/api/chat")

        assert config.chat_url == "http://localhost:8000/api/chat"

    def test_negative_reveal_delay_rejected(self) -> None:
        with pytest.raises(ValueError):
            ClientConfig(reveal_delay=-1)
