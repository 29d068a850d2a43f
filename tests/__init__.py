"""Test package for Expert Chat.

Structure:
    - unit/: Conversation state machine, reveal, preferences, agent, formatting
    - integration/: Chat endpoint over ASGI and full client-to-endpoint turns

No live model calls. The OpenAI client and the agent service are replaced
with mocks; everything between the conversation manager and the agent
service runs for real. Leverages pytest with pytest-check for soft assertions.
"""
