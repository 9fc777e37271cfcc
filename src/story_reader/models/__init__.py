"""Data models for story_reader."""

from .content import (
    Chapter,
    ContentItem,
    ContentModel,
    load_catalog,
    total_units,
)
from .history import (
    HistoryEntry,
    ReadingState,
    User,
)
from .persona import (
    PERSONA_DESCRIPTIONS,
    PersonaAnswers,
    PersonaLabel,
)

__all__ = [
    "Chapter",
    "ContentItem",
    "ContentModel",
    "load_catalog",
    "total_units",
    "HistoryEntry",
    "ReadingState",
    "User",
    "PERSONA_DESCRIPTIONS",
    "PersonaAnswers",
    "PersonaLabel",
]
