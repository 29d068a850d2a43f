"""Expert Chat - single-page chat with a hosted language model expert.

Combines FastAPI for the proxy endpoint, the OpenAI Responses API for
answers with conversation chaining, NiceGUI for the chat page, and
Pydantic for data validation.

Components:
    - api: HTTP proxy endpoint and health check
    - agent: Expert prompts and model calls
    - chat: Client-side conversation state machine with simulated streaming
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
