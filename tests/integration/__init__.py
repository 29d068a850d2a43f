"""Integration tests for components working together.

Coverage:
    - POST /api/chat validation and error mapping with real HTTP requests
    - ConversationManager -> ProxyClient -> FastAPI app -> agent service

Only the agent service is mocked; requests travel through httpx and the
ASGI app.
"""
