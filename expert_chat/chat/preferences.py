"""Last-used chat settings kept in a key-value store.

The store is any mutable mapping; the chat page passes NiceGUI's per-user
storage so the settings survive a reload.
"""

import logging
from collections.abc import MutableMapping
from enum import Enum
from typing import Any

from pydantic import BaseModel

from expert_chat.models.schemas import ExpertType, ReasoningEffort, Verbosity

logger = logging.getLogger(__name__)


class StorageKey(str, Enum):
    REASONING_EFFORT = "gpt5_reasoning_effort"
    VERBOSITY = "gpt5_verbosity"
    EXPERT_TYPE = "expert_type"


class ChatPreferences(BaseModel):
    """Settings applied to every message the user sends."""

    reasoning_effort: ReasoningEffort = ReasoningEffort.MEDIUM
    verbosity: Verbosity = Verbosity.MEDIUM
    expert_type: ExpertType = ExpertType.MARKETER


_FIELDS: dict[StorageKey, tuple[str, type[Enum]]] = {
    StorageKey.REASONING_EFFORT: ("reasoning_effort", ReasoningEffort),
    StorageKey.VERBOSITY: ("verbosity", Verbosity),
    StorageKey.EXPERT_TYPE: ("expert_type", ExpertType),
}


class PreferenceRepository:
    """Reads and writes chat preferences under fixed storage keys."""

    def __init__(self, storage: MutableMapping[str, Any]) -> None:
        self._storage = storage

    def load(self) -> ChatPreferences:
        """Read stored settings; missing or unknown values keep their defaults."""
        values: dict[str, Enum] = {}
        for key, (field, enum_type) in _FIELDS.items():
            raw = self._storage.get(key.value)
            if raw is None:
                continue
            try:
                values[field] = enum_type(raw)
            except ValueError:
                logger.warning(f"Ignoring stored {key.value}={raw!r}")
        return ChatPreferences(**values)

    def save(self, key: StorageKey | str, value: str | Enum) -> None:
        """Store one setting. Last write wins."""
        storage_key = StorageKey(key)
        _, enum_type = _FIELDS[storage_key]
        self._storage[storage_key.value] = enum_type(value).value
