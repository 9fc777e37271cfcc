"""Reading history views - recently read items and relative dates."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..models.content import ContentItem
from ..models.history import HistoryEntry, User


@dataclass
class HistoryView:
    """A history entry joined with its catalog item."""
    entry: HistoryEntry
    item: ContentItem

    @property
    def progress(self) -> int:
        return self.entry.progress_percentage


def _parse(timestamp: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(timestamp)
    except (ValueError, TypeError):
        return None


def recent_history(user: Optional[User], catalog: list[ContentItem]) -> list[HistoryView]:
    """
    The user's history, most recently read first.

    Entries whose item is not in the catalog are left out. Entries with an
    unreadable timestamp sort last.
    """
    if user is None:
        return []

    by_id = {item.id: item for item in catalog}
    views = [
        HistoryView(entry=entry, item=by_id[entry.content_item_id])
        for entry in user.history
        if entry.content_item_id in by_id
    ]

    def sort_key(view: HistoryView) -> float:
        parsed = _parse(view.entry.timestamp)
        return parsed.timestamp() if parsed else float("-inf")

    return sorted(views, key=sort_key, reverse=True)


def format_last_read(timestamp: str, now: Optional[datetime] = None) -> str:
    """Relative label for when an item was last read."""
    read_at = _parse(timestamp)
    if read_at is None:
        return ""

    now = now or datetime.now()
    if read_at.tzinfo is not None and now.tzinfo is None:
        now = now.astimezone(read_at.tzinfo)
    elif read_at.tzinfo is None and now.tzinfo is not None:
        read_at = read_at.replace(tzinfo=now.tzinfo)

    # Whole days elapsed; anything under 24h is today
    diff_days = int(abs((now - read_at).total_seconds()) // 86400)
    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if diff_days < 7:
        return f"{diff_days} days ago"
    if diff_days < 30:
        return f"{math.ceil(diff_days / 7)} weeks ago"
    return read_at.date().isoformat()
