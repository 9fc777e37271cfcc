"""Exceptions raised by the reading core."""


class ReaderError(Exception):
    """Base class for story_reader errors."""


class InvalidPositionError(ReaderError):
    """A page or chapter/paragraph index is out of range for a content item."""

    def __init__(self, content_item_id: str, position_input, message: str = ""):
        self.content_item_id = content_item_id
        self.position_input = position_input
        super().__init__(
            message or f"Invalid position {position_input!r} for content item {content_item_id!r}"
        )


class InvalidContentError(ReaderError):
    """A content item violates its structural invariants."""


class PersonaValidationError(ReaderError):
    """Onboarding answers are incomplete or use an unknown option."""
