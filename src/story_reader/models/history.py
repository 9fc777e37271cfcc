"""History ledger entries, users and per-item reading state."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class HistoryEntry:
    """The last recorded reading position for one content item."""

    content_item_id: str
    absolute_position: int
    timestamp: str
    progress_percentage: int

    def to_dict(self) -> dict:
        return {
            "contentItemId": self.content_item_id,
            "absolutePosition": self.absolute_position,
            "timestamp": self.timestamp,
            "progressPercentage": self.progress_percentage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryEntry":
        """Read an entry, including ledgers written with the older comicId/lastReadPage keys."""
        return cls(
            content_item_id=str(data.get("contentItemId", data.get("comicId", ""))),
            absolute_position=int(data.get("absolutePosition", data.get("lastReadPage", 0))),
            timestamp=data.get("timestamp", data.get("lastReadAt", "")),
            progress_percentage=int(data.get("progressPercentage", data.get("progress", 0))),
        )


@dataclass
class User:
    """The signed-in user record stored under the "user" key."""

    id: str
    email: str = ""
    name: Optional[str] = None
    favorites: list[str] = field(default_factory=list)
    history: list[HistoryEntry] = field(default_factory=list)
    created_at: str = ""

    def get_entry(self, content_item_id: str) -> Optional[HistoryEntry]:
        for entry in self.history:
            if entry.content_item_id == content_item_id:
                return entry
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "favorites": list(self.favorites),
            "history": [entry.to_dict() for entry in self.history],
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        # Older records kept the ledger under readingHistory
        raw_history = data.get("history") or data.get("readingHistory") or []
        return cls(
            id=str(data["id"]),
            email=data.get("email", ""),
            name=data.get("name"),
            favorites=list(data.get("favorites", [])),
            history=[HistoryEntry.from_dict(h) for h in raw_history],
            created_at=data.get("createdAt", ""),
        )


@dataclass(frozen=True)
class ReadingState:
    """
    Reading state of one (user, content item) pair.

    Unvisited until the first position is known; Visited afterwards. There is no
    terminal state - a visited item can always be moved again.
    """

    visited: bool = False
    position: Optional[int] = None
    percentage: Optional[int] = None

    @classmethod
    def unvisited(cls) -> "ReadingState":
        return cls()

    @classmethod
    def at(cls, position: int, percentage: int) -> "ReadingState":
        return cls(visited=True, position=position, percentage=percentage)
