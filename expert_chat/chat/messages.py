"""Chat message model and helpers."""

import random
import string
import time
from datetime import datetime

from pydantic import BaseModel, Field

from expert_chat.models.schemas import MessageRole

ERROR_PREFIX = "**Error:** "

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_message_id() -> str:
    """Time-based id with a random suffix, unique enough within a session."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"msg_{int(time.time() * 1000)}_{suffix}"


def format_error(detail: str) -> str:
    """Render a failure as assistant message content."""
    return f"{ERROR_PREFIX}{detail}"


class Message(BaseModel):
    """A single entry in the conversation.

    ``id``, ``role`` and ``timestamp`` are fixed at creation. ``content``,
    ``is_streaming`` and ``chain_id`` are only written by the conversation
    manager while this message is the active streaming message.

    Attributes:
        id: Unique message identifier.
        role: Who wrote the message.
        content: Message text; grows during a reveal.
        timestamp: Creation time.
        is_streaming: True while the message is being revealed.
        chain_id: Response identifier used to chain the next request.
    """

    id: str = Field(default_factory=new_message_id, frozen=True)
    role: MessageRole = Field(frozen=True)
    content: str = ""
    timestamp: datetime = Field(default_factory=datetime.now, frozen=True)
    is_streaming: bool = False
    chain_id: str | None = None
