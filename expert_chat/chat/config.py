"""Client-side configuration for the chat page."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from expert_chat.chat.reveal import DEFAULT_REVEAL_DELAY

load_dotenv()


class ClientConfig(BaseModel):
    """Where the chat page sends requests and how it reveals answers.

    Attributes:
        api_base_url: Base URL of the chat proxy.
        chat_endpoint: Path of the chat endpoint.
        reveal_delay: Seconds between revealed words.
        timeout: HTTP timeout for one chat request.
    """

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000")
    )
    chat_endpoint: str = Field(default_factory=lambda: os.getenv("CHAT_ENDPOINT", "/api/chat"))
    reveal_delay: float = Field(
        default_factory=lambda: float(os.getenv("REVEAL_DELAY", str(DEFAULT_REVEAL_DELAY))),
        ge=0.0,
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("CLIENT_TIMEOUT", "60")),
        gt=0,
    )

    @property
    def chat_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}{self.chat_endpoint}"


def get_client_config() -> ClientConfig:
    return ClientConfig()
