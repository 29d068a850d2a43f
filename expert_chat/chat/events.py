"""Lifecycle events emitted by the conversation manager."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from expert_chat.chat.messages import Message

logger = logging.getLogger(__name__)


class ChatEventKind(str, Enum):
    """Events fired during a turn, listed in firing order."""

    MESSAGE_SENT = "message_sent"
    STREAMING_STARTED = "streaming_started"
    MESSAGE_UPDATED = "message_updated"
    MESSAGE_RECEIVED = "message_received"
    ERROR = "error"
    STREAMING_ENDED = "streaming_ended"


@dataclass
class ChatEvent:
    """An event observed during a chat turn."""

    kind: ChatEventKind
    text: str | None = None  # sent / received text
    message: Message | None = None  # updated message
    error: Exception | None = None


ChatListener = Callable[[ChatEvent], None]


class ChatEventBus:
    """Fan-out of chat events to registered listeners."""

    def __init__(self) -> None:
        self._listeners: list[ChatListener] = []

    def subscribe(self, listener: ChatListener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: ChatEvent) -> None:
        # Listeners observe only; a failing one must not break the turn
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Chat listener failed on {event.kind.value}")
