"""Client-side chat state machine.

Keeps the conversation for one chat page and drives each turn against the
proxy endpoint.

Responsibilities:
    - Ordered message log with a single active streaming message
    - Conversation chaining through response identifiers
    - Simulated word-by-word reveal of complete answers
    - Error recovery into visible assistant messages
    - Lifecycle events for observers
    - Preference persistence in a key-value store

Contains no UI code. The NiceGUI page subscribes to events and re-renders.
"""

from expert_chat.chat.client import ProxyClient, ProxyError
from expert_chat.chat.config import ClientConfig, get_client_config
from expert_chat.chat.conversation import ConversationManager
from expert_chat.chat.events import ChatEvent, ChatEventKind
from expert_chat.chat.messages import Message, format_error
from expert_chat.chat.preferences import ChatPreferences, PreferenceRepository, StorageKey

__all__ = [
    "ChatEvent",
    "ChatEventKind",
    "ChatPreferences",
    "ClientConfig",
    "ConversationManager",
    "Message",
    "PreferenceRepository",
    "ProxyClient",
    "ProxyError",
    "StorageKey",
    "format_error",
    "get_client_config",
]
