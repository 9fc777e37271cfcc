"""Progress tracking - reader position state and debounced history writes."""

from datetime import datetime
from typing import Callable, Optional, Protocol

from ..errors import InvalidPositionError
from ..models.content import ContentItem
from ..models.history import HistoryEntry, ReadingState, User
from ..observability import ProgressMetrics, logger
from .debounce import Debouncer
from .positions import (
    PositionInput,
    clamp_position,
    compute_absolute_position,
    compute_progress_percentage,
    resolve_position,
)

TimestampProvider = Callable[[], str]

DEFAULT_DEBOUNCE_SECONDS = 0.5


def _now_iso() -> str:
    return datetime.now().isoformat()


class HistoryProvider(Protocol):
    """Supplies the signed-in user and persists their history ledger."""

    @property
    def current_user(self) -> Optional[User]:
        ...

    def persist_history(self, entries: list[HistoryEntry]) -> None:
        ...


def upsert_history(entries: list[HistoryEntry], entry: HistoryEntry) -> list[HistoryEntry]:
    """
    Return a new ledger with `entry` in it.

    An existing entry for the same item is replaced where it stands; otherwise the
    entry is appended. At most one entry per item.
    """
    updated = list(entries)
    for index, existing in enumerate(updated):
        if existing.content_item_id == entry.content_item_id:
            updated[index] = entry
            return updated
    updated.append(entry)
    return updated


def record_progress(
    provider: HistoryProvider,
    content_item_id: str,
    absolute_position: int,
    total_units: int,
    timestamp_provider: Optional[TimestampProvider] = None,
) -> Optional[HistoryEntry]:
    """
    Write a reading position into the signed-in user's history ledger.

    This is the undebounced write; readers go through ProgressWriter.

    Returns:
        The stored entry, or None when nobody is signed in (nothing is recorded).
    """
    user = provider.current_user
    if user is None:
        return None

    timestamp_provider = timestamp_provider or _now_iso
    entry = HistoryEntry(
        content_item_id=content_item_id,
        absolute_position=absolute_position,
        timestamp=timestamp_provider(),
        progress_percentage=compute_progress_percentage(absolute_position, total_units),
    )
    provider.persist_history(upsert_history(user.history, entry))
    return entry


class ProgressWriter:
    """
    The single debounced write path for reading progress.

    Each submit for a (user, item) pair cancels that pair's pending write and
    schedules a new one, so a burst of navigation persists only its final
    position. Pending writes are flushed, not dropped, on teardown.
    """

    def __init__(
        self,
        provider: HistoryProvider,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        timestamp_provider: Optional[TimestampProvider] = None,
        metrics: Optional[ProgressMetrics] = None,
    ):
        self.provider = provider
        self.timestamp_provider = timestamp_provider or _now_iso
        self.metrics = metrics or ProgressMetrics()
        self.debouncer = Debouncer(debounce_seconds)

    def submit(self, item: ContentItem, absolute_position: int) -> bool:
        """
        Queue a position write for the signed-in user.

        Returns False (and schedules nothing) when nobody is signed in.
        """
        user = self.provider.current_user
        if user is None:
            self.metrics.writes_skipped += 1
            logger.debug(f"No active user; progress for {item.id} not recorded")
            return False

        key = (user.id, item.id)
        total = item.total_units

        def write():
            self._write(key, absolute_position, total)

        if self.debouncer.schedule(key, write):
            self.metrics.writes_superseded += 1
        self.metrics.writes_scheduled += 1
        return True

    def _write(self, key: tuple[str, str], absolute_position: int, total_units: int):
        user_id, item_id = key
        user = self.provider.current_user
        if user is None or user.id != user_id:
            # Signed out (or switched user) while the write was pending
            self.metrics.writes_skipped += 1
            logger.info(f"Dropping progress for {item_id}: user {user_id} is no longer active")
            return

        entry = record_progress(
            self.provider, item_id, absolute_position, total_units, self.timestamp_provider
        )
        if entry is not None:
            self.metrics.writes_persisted += 1
            logger.debug(
                f"Progress saved: {item_id} at {entry.absolute_position} ({entry.progress_percentage}%)"
            )

    def has_pending(self, content_item_id: Optional[str] = None) -> bool:
        return any(
            content_item_id is None or item_id == content_item_id
            for _, item_id in self.debouncer.pending_keys()
        )

    def flush(self, content_item_id: str) -> int:
        """Write any pending position for one item now."""
        count = 0
        for key in self.debouncer.pending_keys():
            if key[1] == content_item_id and self.debouncer.flush(key):
                count += 1
        self.metrics.flushes += count
        return count

    def flush_all(self) -> int:
        """Write every pending position now."""
        count = self.debouncer.flush_all()
        self.metrics.flushes += count
        return count

    def close(self):
        """Session teardown: persist everything still pending."""
        flushed = self.flush_all()
        if flushed:
            logger.info(f"Flushed {flushed} pending progress write(s) on close")


class ProgressTracker:
    """
    Reading position for one open content item.

    Reader event handlers call jump_to/advance instead of keeping their own
    position state; every move updates the in-memory state immediately and
    queues a debounced history write through the shared ProgressWriter.

    Usage:
        with ProgressTracker(item, writer) as tracker:
            tracker.resume()
            tracker.advance()
            tracker.jump_to((2, 0))
    """

    def __init__(self, item: ContentItem, writer: ProgressWriter, strict: bool = False):
        self.item = item
        self.writer = writer
        self.strict = strict
        self._state = ReadingState.unvisited()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions

    @property
    def state(self) -> ReadingState:
        return self._state

    @property
    def position(self) -> Optional[int]:
        return self._state.position

    @property
    def percentage(self) -> int:
        return self._state.percentage or 0

    @property
    def location(self) -> Optional[PositionInput]:
        """Current page index or (chapter, paragraph) pair."""
        if not self._state.visited:
            return None
        return resolve_position(self.item, self._state.position)

    def resume(self) -> Optional[PositionInput]:
        """
        Restore the position stored in the user's history, without writing.

        Returns the page or (chapter, paragraph) to open at, or None if there is
        no usable entry.
        """
        user = self.writer.provider.current_user
        entry = user.get_entry(self.item.id) if user else None
        if entry is None:
            return None

        if not 0 <= entry.absolute_position < self.item.total_units:
            logger.warning(
                f"Stored position {entry.absolute_position} is outside {self.item.id} "
                f"({self.item.total_units} units); starting from the beginning"
            )
            return None

        self._state = ReadingState.at(
            entry.absolute_position,
            compute_progress_percentage(entry.absolute_position, self.item.total_units),
        )
        return resolve_position(self.item, entry.absolute_position)

    def jump_to(self, position_input: PositionInput) -> ReadingState:
        """Move to a page index or (chapter, paragraph) pair."""
        try:
            absolute = compute_absolute_position(self.item, position_input)
        except InvalidPositionError:
            if self.strict:
                raise
            self.writer.metrics.positions_clamped += 1
            try:
                clamped = clamp_position(self.item, position_input)
            except InvalidPositionError:
                absolute = self._state.position if self._state.visited else 0
                logger.warning(
                    f"Unreadable position {position_input!r} for {self.item.id}; "
                    f"staying at unit {absolute}"
                )
                return self._move_to(absolute)
            logger.warning(f"Clamped invalid position {position_input!r} to {clamped!r} for {self.item.id}")
            absolute = compute_absolute_position(self.item, clamped)
        return self._move_to(absolute)

    def advance(self, step: int = 1) -> ReadingState:
        """
        Move `step` units (pages or paragraphs) forward, or backward if negative.

        Stops at the first and last unit.
        """
        current = self._state.position if self._state.visited else 0
        target = max(0, min(self.item.total_units - 1, current + step))
        return self._move_to(target)

    def advance_chapter(self, step: int = 1) -> ReadingState:
        """Move to the first paragraph of a neighbouring chapter (chaptered items)."""
        if self.item.is_paged:
            return self.advance(step)
        chapter = self.location[0] if self._state.visited else 0
        target = max(0, min(len(self.item.chapters) - 1, chapter + step))
        return self.jump_to((target, 0))

    def flush(self) -> int:
        """Persist this item's pending write now."""
        return self.writer.flush(self.item.id)

    def close(self):
        """Teardown: the last position must not be lost."""
        self.flush()

    def _move_to(self, absolute: int) -> ReadingState:
        self._state = ReadingState.at(
            absolute, compute_progress_percentage(absolute, self.item.total_units)
        )
        self.writer.submit(self.item, absolute)
        return self._state
