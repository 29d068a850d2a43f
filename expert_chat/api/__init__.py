"""FastAPI endpoints for the expert chat proxy.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: One chat turn with optional response chaining
"""

from expert_chat.api.app import app, create_app

__all__ = ["app", "create_app"]
