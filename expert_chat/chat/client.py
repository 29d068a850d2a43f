"""HTTP client for the chat proxy endpoint."""

import logging

import httpx
from pydantic import ValidationError

from expert_chat.chat.config import ClientConfig, get_client_config
from expert_chat.models.schemas import ChatReply, ChatRequest

logger = logging.getLogger(__name__)

MALFORMED_RESPONSE = "Malformed response from chat endpoint"
FAILED_RESPONSE = "Failed to get response"


class ProxyError(Exception):
    """A chat request that did not produce a usable reply."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _error_detail(response: httpx.Response) -> str:
    """Pick the most specific message from a failure body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        detail = body.get("details") or body.get("error")
        if detail:
            return str(detail)
    return FAILED_RESPONSE


class ProxyClient:
    """Sends one chat turn to the proxy and returns the complete reply."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or get_client_config()
        self._transport = transport

    async def send(self, request: ChatRequest) -> ChatReply:
        """POST the request and parse the reply.

        Args:
            request: Messages, chaining id and generation settings.

        Returns:
            The full reply text and its chaining id.

        Raises:
            ProxyError: On connection failure, non-2xx status or malformed body.
        """
        async with httpx.AsyncClient(
            timeout=self._config.timeout, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    self._config.chat_url, json=request.to_payload()
                )
            except httpx.RequestError as e:
                reason = str(e) or type(e).__name__
                raise ProxyError(f"Connection failed: {reason}") from e

        if response.is_error:
            detail = _error_detail(response)
            logger.warning(f"Chat endpoint returned {response.status_code}: {detail}")
            raise ProxyError(detail, status_code=response.status_code)

        try:
            return ChatReply.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ProxyError(MALFORMED_RESPONSE, status_code=response.status_code) from e
