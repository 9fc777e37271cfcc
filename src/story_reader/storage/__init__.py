"""Storage module - persisted key-value state for the reader."""

from .kv_store import (
    PERSONA_KEY,
    USER_KEY,
    JsonFileStore,
    KeyValueStore,
    SqliteStore,
    create_store,
)
from .session import PersonaRepository, UserSession

__all__ = [
    "PERSONA_KEY",
    "USER_KEY",
    "JsonFileStore",
    "KeyValueStore",
    "SqliteStore",
    "create_store",
    "PersonaRepository",
    "UserSession",
]
