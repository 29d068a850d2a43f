"""Agent service backed by the OpenAI Responses API.

Core module for the chatbot's intelligence and conversation handling.

Architecture Decisions:

1. **Responses API chaining** - The client sends only the newest user message.
   Earlier turns are reconstructed by the remote service from
   ``previous_response_id``, so no history is stored here.

2. **Singleton Pattern** - The OpenAI client keeps a connection pool. The
   singleton reuses one client across all requests rather than creating one
   per request.

3. **Service Wrapper** - Decouples the HTTP route from the SDK surface. Errors
   are not swallowed here; the route maps them to the ``{error, details}``
   contract.

4. **Instructions per request** - Instructions are not carried over by
   ``previous_response_id``, so the expert prompt is sent on every turn.
"""

import logging
from typing import Any

from openai import AsyncOpenAI
from pydantic import BaseModel

from expert_chat.agent.config import AgentConfig, get_agent_config
from expert_chat.agent.prompts import MARKDOWN_INSTRUCTION, get_expert_prompt
from expert_chat.models.schemas import ChatMessage, ReasoningEffort, Verbosity

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_TEXT = "No response generated"


class AgentReply(BaseModel):
    """Complete model output for one turn.

    Attributes:
        text: Full response text.
        response_id: Identifier of this turn for later chaining.
    """

    text: str
    response_id: str | None = None


class AgentService:
    """Service for generating expert answers.

    Wraps AsyncOpenAI with:
    - Expert system prompt selection
    - Response chaining via previous_response_id
    - Reasoning effort and verbosity pass-through
    - Singleton lifecycle management
    """

    def __init__(
        self,
        config: AgentConfig | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
            client: Optional pre-built OpenAI client.
        """
        self._config = config or get_agent_config()
        self._client = client or self._create_client()

    def _create_client(self) -> AsyncOpenAI:
        """Create the async OpenAI client.

        Returns:
            Configured AsyncOpenAI instance.
        """
        return AsyncOpenAI(
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            timeout=self._config.request_timeout,
        )

    def _build_request(
        self,
        messages: list[ChatMessage],
        expert_type: str,
        reasoning_effort: ReasoningEffort,
        verbosity: Verbosity,
        previous_response_id: str | None,
    ) -> dict[str, Any]:
        instructions = f"{get_expert_prompt(expert_type)}\n\n{MARKDOWN_INSTRUCTION}"
        request: dict[str, Any] = {
            "model": self._config.model_name,
            "instructions": instructions,
            "input": [
                {"role": msg.role.value, "content": msg.content} for msg in messages
            ],
            "reasoning": {"effort": ReasoningEffort(reasoning_effort).value},
            "text": {"verbosity": Verbosity(verbosity).value},
            "max_output_tokens": self._config.max_output_tokens,
        }
        # Only chain when there is a previous turn
        if previous_response_id:
            request["previous_response_id"] = previous_response_id
        return request

    async def respond(
        self,
        messages: list[ChatMessage],
        expert_type: str,
        reasoning_effort: ReasoningEffort = ReasoningEffort.LOW,
        verbosity: Verbosity = Verbosity.MEDIUM,
        previous_response_id: str | None = None,
    ) -> AgentReply:
        """Get the complete response for a turn.

        Args:
            messages: Messages for this turn.
            expert_type: Key selecting the system prompt.
            reasoning_effort: Reasoning effort for the model.
            verbosity: Verbosity for the model.
            previous_response_id: Chaining identifier of the prior turn.

        Returns:
            AgentReply with the full text and this turn's response id.
        """
        request = self._build_request(
            messages, expert_type, reasoning_effort, verbosity, previous_response_id
        )
        logger.info(
            f"Calling {request['model']} (expert={expert_type}, "
            f"reasoning={request['reasoning']['effort']}, "
            f"verbosity={request['text']['verbosity']}, "
            f"chained={previous_response_id is not None})"
        )

        response = await self._client.responses.create(**request)

        text = response.output_text or EMPTY_RESPONSE_TEXT
        return AgentReply(text=text, response_id=response.id)

    async def close(self) -> None:
        await self._client.close()


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Uses singleton pattern for resource efficiency.

    Returns:
        The AgentService instance.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service


async def close_agent_service() -> None:
    """Close the global agent service if it was ever created."""
    global _agent_service
    if _agent_service is not None:
        await _agent_service.close()
        _agent_service = None
