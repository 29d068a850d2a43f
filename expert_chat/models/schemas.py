from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Speaker of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ReasoningEffort(str, Enum):
    """How much reasoning the model spends before answering."""

    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Verbosity(str, Enum):
    """Length and detail level of the model's answer."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExpertType(str, Enum):
    """Available expert personas."""

    MARKETER = "marketer"


class ChatMessage(BaseModel):
    """A role/content pair sent to the chat endpoint."""

    role: MessageRole
    content: str


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        messages: Conversation messages to forward (normally just the newest user turn).
        previous_response_id: Chaining identifier of the prior assistant turn.
        expert_type: Key selecting the system prompt.
        reasoning_effort: Reasoning effort passed to the model.
        verbosity: Verbosity passed to the model.
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1)
    previous_response_id: str | None = None
    expert_type: str = Field(default=ExpertType.MARKETER.value, alias="expertType")
    reasoning_effort: ReasoningEffort = Field(
        default=ReasoningEffort.LOW, alias="reasoningEffort"
    )
    verbosity: Verbosity = Field(default=Verbosity.MEDIUM)

    def to_payload(self) -> dict:
        """Serialize with wire field names, omitting an absent chaining id."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ChatReply(BaseModel):
    """Successful response from the chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    role: MessageRole = MessageRole.ASSISTANT
    response_id: str | None = Field(default=None, alias="responseId")


class ErrorResponse(BaseModel):
    """Failure body returned by the chat endpoint.

    Attributes:
        error: Short error category.
        details: Human-readable explanation.
    """

    error: str
    details: str = ""
