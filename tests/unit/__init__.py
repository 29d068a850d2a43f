"""Unit tests for individual components in isolation.

Coverage:
    - chat/: Conversation manager, reveal, preferences, proxy client
    - agent/: Configuration, prompt selection and request construction
    - ui/: Markdown rendering

Uses fake transports and mocked SDK clients.
"""
