"""Conversation state manager for the chat page.

Owns the ordered message log together with the loading and streaming flags,
and runs one request/response/reveal cycle per user message.

One turn, in order:

1. append the user message and fire ``MESSAGE_SENT``
2. set loading, pick the chaining id of the latest answered assistant turn
3. append an empty streaming assistant message and fire ``STREAMING_STARTED``
4. POST the user message to the proxy
5. reveal the reply word by word (``MESSAGE_UPDATED`` per write), attach the
   new chaining id, fire ``MESSAGE_RECEIVED``; on failure write the error
   text instead and fire ``ERROR``
6. clear both flags, finalize the message, fire ``STREAMING_ENDED``

A send while loading is dropped. Nothing cancels an in-flight turn:
``clear_conversation`` and ``reset_streaming_state`` only detach the active
message so later writes from that turn land nowhere.
"""

import logging
from collections.abc import Callable
from typing import Protocol

from expert_chat.chat.client import ProxyError
from expert_chat.chat.events import ChatEvent, ChatEventBus, ChatEventKind, ChatListener
from expert_chat.chat.messages import Message, format_error
from expert_chat.chat.reveal import DEFAULT_REVEAL_DELAY, reveal
from expert_chat.models.schemas import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    MessageRole,
    ReasoningEffort,
    Verbosity,
)

logger = logging.getLogger(__name__)

FALLBACK_ERROR = "Failed to get response. Please try again."


class ChatTransport(Protocol):
    async def send(self, request: ChatRequest) -> ChatReply: ...


class ConversationManager:
    """Single owner of one conversation's messages and busy flags."""

    def __init__(
        self,
        transport: ChatTransport,
        reveal_delay: float = DEFAULT_REVEAL_DELAY,
    ) -> None:
        self._transport = transport
        self._reveal_delay = reveal_delay
        self._messages: list[Message] = []
        self._active: Message | None = None
        self._is_loading = False
        self._is_streaming = False
        self._events = ChatEventBus()

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_streaming(self) -> bool:
        return self._is_streaming

    @property
    def active_message(self) -> Message | None:
        return self._active

    def subscribe(self, listener: ChatListener) -> Callable[[], None]:
        return self._events.subscribe(listener)

    def _emit(self, kind: ChatEventKind, **payload) -> None:
        self._events.emit(ChatEvent(kind=kind, **payload))

    def _append(self, role: MessageRole, content: str, is_streaming: bool = False) -> Message:
        message = Message(role=role, content=content, is_streaming=is_streaming)
        self._messages.append(message)
        return message

    def _latest_chain_id(self) -> str | None:
        # A failed turn leaves its assistant message without a chain id, so
        # look past it to the last one that has one.
        for message in reversed(self._messages):
            if message.role == MessageRole.ASSISTANT and message.chain_id:
                return message.chain_id
        return None

    def _write_active(self, content: str) -> None:
        if self._active is None:
            return
        self._active.content = content
        self._emit(ChatEventKind.MESSAGE_UPDATED, message=self._active)

    def _finalize_active(self) -> None:
        if self._active is not None:
            self._active.is_streaming = False
            self._active = None

    async def send_message(
        self,
        text: str,
        expert_type: str,
        reasoning_effort: ReasoningEffort | str = ReasoningEffort.LOW,
        verbosity: Verbosity | str = Verbosity.MEDIUM,
    ) -> None:
        """Run one chat turn. Never raises.

        Args:
            text: Raw user input; ignored when blank.
            expert_type: Expert persona key.
            reasoning_effort: Passed through to the proxy.
            verbosity: Passed through to the proxy.
        """
        content = text.strip()
        if not content or self._is_loading:
            return

        user_message = self._append(MessageRole.USER, content)
        self._emit(ChatEventKind.MESSAGE_SENT, text=content)
        self._is_loading = True

        try:
            chain_id = self._latest_chain_id()

            self._active = self._append(MessageRole.ASSISTANT, "", is_streaming=True)
            self._is_streaming = True
            self._emit(ChatEventKind.STREAMING_STARTED)

            request = ChatRequest(
                messages=[ChatMessage(role=user_message.role, content=user_message.content)],
                previous_response_id=chain_id,
                expert_type=expert_type,
                reasoning_effort=reasoning_effort,
                verbosity=verbosity,
            )
            reply = await self._transport.send(request)

            target = self._active
            await reveal(reply.text, self._write_active, self._reveal_delay)
            if reply.response_id and target is not None and self._active is target:
                target.chain_id = reply.response_id

            self._emit(ChatEventKind.MESSAGE_RECEIVED, text=reply.text)
        except Exception as e:
            logger.exception("Chat turn failed")
            detail = e.detail if isinstance(e, ProxyError) else str(e) or FALLBACK_ERROR
            self._write_active(format_error(detail))
            self._emit(ChatEventKind.ERROR, error=e)
        finally:
            self._is_loading = False
            self._is_streaming = False
            self._finalize_active()
            self._emit(ChatEventKind.STREAMING_ENDED)

    def clear_conversation(self) -> None:
        """Drop all messages. Loading and streaming flags are left alone."""
        self._messages = []
        self._active = None

    def reset_streaming_state(self) -> None:
        """Detach the active message, e.g. when the page goes away mid-turn.

        The detached message is marked finished so it never stays streaming
        next to a later turn's message.
        """
        self._finalize_active()
        self._is_streaming = False
