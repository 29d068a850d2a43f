"""Agent logic for LLM orchestration.

Turns a validated chat request into a call against the OpenAI Responses API.

Responsibilities:
    - Client initialization from environment configuration
    - Expert system prompt selection
    - Conversation chaining through response identifiers
    - Pass-through of reasoning effort and verbosity

Maintains clean separation from the HTTP layer.
"""

from expert_chat.agent.chat_agent import AgentReply, AgentService, get_agent_service
from expert_chat.agent.config import AgentConfig, get_agent_config

__all__ = [
    "AgentConfig",
    "AgentReply",
    "AgentService",
    "get_agent_config",
    "get_agent_service",
]
