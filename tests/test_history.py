"""Tests for the reading history view."""

from datetime import datetime

from story_reader.models import User
from story_reader.progress.history import format_last_read, recent_history


class TestRecentHistory:
    """Tests for ordering and joining history entries."""

    def test_most_recent_first(self, paged_item, chaptered_item, make_entry):
        user = User(id="U1", history=[
            make_entry(paged_item.id, timestamp="2026-01-01T09:00:00"),
            make_entry(chaptered_item.id, timestamp="2026-01-03T09:00:00"),
        ])

        views = recent_history(user, [paged_item, chaptered_item])
        assert [v.item.id for v in views] == [chaptered_item.id, paged_item.id]

    def test_unknown_items_dropped(self, paged_item, make_entry):
        user = User(id="U1", history=[make_entry("deleted"), make_entry(paged_item.id, pct=50)])

        views = recent_history(user, [paged_item])
        assert len(views) == 1
        assert views[0].progress == 50

    def test_bad_timestamp_sorts_last(self, paged_item, chaptered_item, make_entry):
        user = User(id="U1", history=[
            make_entry(paged_item.id, timestamp="not a date"),
            make_entry(chaptered_item.id, timestamp="2020-01-01T00:00:00"),
        ])

        views = recent_history(user, [paged_item, chaptered_item])
        assert views[-1].item.id == paged_item.id

    def test_no_user(self, paged_item):
        assert recent_history(None, [paged_item]) == []


class TestFormatLastRead:
    """Tests for relative date labels."""

    NOW = datetime(2026, 3, 15, 12, 0, 0)

    def test_today(self):
        assert format_last_read("2026-03-15T08:00:00", self.NOW) == "Today"

    def test_yesterday(self):
        assert format_last_read("2026-03-14T08:00:00", self.NOW) == "Yesterday"

    def test_days(self):
        assert format_last_read("2026-03-11T12:00:00", self.NOW) == "4 days ago"

    def test_weeks(self):
        assert format_last_read("2026-03-01T12:00:00", self.NOW) == "2 weeks ago"

    def test_older_shows_date(self):
        assert format_last_read("2025-12-25T12:00:00", self.NOW) == "2025-12-25"

    def test_unparseable(self):
        assert format_last_read("", self.NOW) == ""
