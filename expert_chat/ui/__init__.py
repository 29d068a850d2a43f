"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat message display with simulated streaming
    - Settings dialog for reasoning effort and verbosity
    - Expert selection and example questions
    - New chat and preference restore across reloads

Contains no chat logic. Renders the state of the conversation manager.
"""
