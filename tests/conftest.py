"""Test configuration and shared fixtures."""

import pytest

from story_reader.models import Chapter, ContentItem, ContentModel, HistoryEntry, User
from story_reader.storage import JsonFileStore, UserSession


class RecordingProvider:
    """In-memory session provider that counts ledger writes."""

    def __init__(self, user=None):
        self.current_user = user
        self.writes = []

    def persist_history(self, entries):
        self.writes.append(list(entries))
        self.current_user.history = list(entries)


@pytest.fixture
def paged_item():
    """A five page image story."""
    return ContentItem(
        id="comic_paged",
        title="Neon Alley",
        categories=("Action-Packed & Thrilling", "Hidden betrayal"),
        content_model=ContentModel.PAGED,
        page_count=5,
    )


@pytest.fixture
def chaptered_item():
    """A text story with chapters of 3, 1 and 2 paragraphs."""
    return ContentItem(
        id="story_text",
        title="The Quiet Orchard",
        categories=("Cozy & Heartwarming", "Love wins"),
        content_model=ContentModel.CHAPTERED,
        chapters=(
            Chapter("Arrival", ("p1", "p2", "p3")),
            Chapter("Harvest", ("p4",)),
            Chapter("Frost", ("p5", "p6")),
        ),
    )


@pytest.fixture
def single_page_item():
    return ContentItem(id="one_shot", title="One Shot", page_count=1)


@pytest.fixture
def user():
    return User(id="U_READER", email="reader@example.com", name="Reader")


@pytest.fixture
def provider(user):
    return RecordingProvider(user)


@pytest.fixture
def store(tmp_path):
    """A JSON file store in a temporary directory."""
    return JsonFileStore(str(tmp_path / "store.json"))


@pytest.fixture
def session(store, user):
    """A session with a signed-in user."""
    session = UserSession(store)
    session.login(user)
    return session


@pytest.fixture
def fixed_clock():
    """Timestamp provider returning a constant ISO time."""
    return lambda: "2026-01-01T10:00:00"


@pytest.fixture
def make_entry():
    """Factory for history entries."""
    def _make(item_id: str, position: int = 0, timestamp: str = "2026-01-01T10:00:00", pct: int = 0):
        return HistoryEntry(
            content_item_id=item_id,
            absolute_position=position,
            timestamp=timestamp,
            progress_percentage=pct,
        )
    return _make
