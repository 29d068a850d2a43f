"""Chat proxy endpoint.

Validates the request, selects the expert prompt, forwards the turn to the
agent service and maps every failure to an ``{error, details}`` body.
"""

import logging

import openai
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from expert_chat.agent.chat_agent import get_agent_service
from expert_chat.agent.prompts import resolve_expert
from expert_chat.models.schemas import (
    ChatReply,
    ChatRequest,
    ErrorResponse,
    ReasoningEffort,
    Verbosity,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

API_KEY_ERROR = ErrorResponse(
    error="API key error",
    details="Please ensure OPENAI_API_KEY is set in your environment variables",
)
MODEL_ACCESS_ERROR = ErrorResponse(
    error="Model access error",
    details="Unable to access the AI model. Please check your API key.",
)

_FIELD_ERRORS = {
    "messages": "Messages are required",
    "reasoningEffort": (
        "Invalid reasoning_effort. Must be one of: "
        + ", ".join(e.value for e in ReasoningEffort)
    ),
    "verbosity": (
        "Invalid verbosity. Must be one of: " + ", ".join(v.value for v in Verbosity)
    ),
}


def _error_response(body: ErrorResponse, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _describe_validation_error(exc: ValidationError) -> ErrorResponse:
    """Turn the first validation failure into a request error body.

    Args:
        exc: The pydantic validation error.

    Returns:
        ErrorResponse naming the offending field.
    """
    first = exc.errors()[0]
    field = str(first["loc"][0]) if first["loc"] else ""
    message = _FIELD_ERRORS.get(field, f"Invalid request field: {field or 'body'}")
    return ErrorResponse(error=message, details=first["msg"])


def classify_upstream_error(exc: Exception) -> ErrorResponse:
    """Map an upstream failure to the error contract.

    Known access failures get fixed messages; anything else becomes an
    internal error carrying the exception text.

    Args:
        exc: The exception raised while producing the answer.

    Returns:
        ErrorResponse for the client.
    """
    message = str(exc)

    if isinstance(exc, openai.AuthenticationError) or "API key" in message:
        return API_KEY_ERROR
    if isinstance(
        exc,
        openai.PermissionDeniedError | openai.NotFoundError | openai.APIConnectionError,
    ) or "model" in message:
        return MODEL_ACCESS_ERROR
    return ErrorResponse(error="Internal server error", details=message or "Unknown error")


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: Request) -> JSONResponse:
    """Answer one chat turn.

    Accepts the newest user message plus an optional chaining id and
    generation settings, and returns the full response text with the id
    of this turn.

    Args:
        request: The incoming request with a JSON body.

    Returns:
        JSON body ``{text, role, responseId}``.

    Raises:
        400: Body is not JSON or fails validation.
        500: Upstream model call failed.
    """
    try:
        body = await request.json()
    except ValueError as e:
        logger.warning(f"Rejected chat request with invalid JSON: {e}")
        return _error_response(
            ErrorResponse(error="Invalid JSON body", details=str(e)),
            status.HTTP_400_BAD_REQUEST,
        )

    try:
        chat_request = ChatRequest.model_validate(body)
    except ValidationError as e:
        error = _describe_validation_error(e)
        logger.warning(f"Rejected chat request: {error.error}")
        return _error_response(error, status.HTTP_400_BAD_REQUEST)

    expert = resolve_expert(chat_request.expert_type)
    logger.info(
        f"Chat request: expert={expert.value}, "
        f"reasoning={chat_request.reasoning_effort.value}, "
        f"verbosity={chat_request.verbosity.value}, "
        f"messages={len(chat_request.messages)}"
    )

    try:
        agent_service = get_agent_service()
        reply = await agent_service.respond(
            messages=chat_request.messages,
            expert_type=expert.value,
            reasoning_effort=chat_request.reasoning_effort,
            verbosity=chat_request.verbosity,
            previous_response_id=chat_request.previous_response_id,
        )
    except Exception as e:
        logger.exception("Chat request failed upstream")
        return _error_response(
            classify_upstream_error(e), status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    chat_reply = ChatReply(text=reply.text, response_id=reply.response_id)
    return JSONResponse(content=chat_reply.model_dump(mode="json", by_alias=True))
