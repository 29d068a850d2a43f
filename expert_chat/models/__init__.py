"""Pydantic models for the chat endpoint contract.

Shared by the FastAPI route and the client-side proxy so both ends agree on
field names, defaults and enum membership.

Models:
    - ChatMessage: role/content pair
    - ChatRequest: messages, chaining id and generation settings
    - ChatReply: full response text plus chaining id
    - ErrorResponse: {error, details} failure body
"""

from expert_chat.models.schemas import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    ErrorResponse,
    ExpertType,
    MessageRole,
    ReasoningEffort,
    Verbosity,
)

__all__ = [
    "ChatMessage",
    "ChatReply",
    "ChatRequest",
    "ErrorResponse",
    "ExpertType",
    "MessageRole",
    "ReasoningEffort",
    "Verbosity",
]
