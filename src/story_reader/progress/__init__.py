"""Progress module - reading positions, percentages and debounced history writes."""

from .debounce import Debouncer
from .history import HistoryView, format_last_read, recent_history
from .positions import (
    clamp_position,
    compute_absolute_position,
    compute_progress_percentage,
    resolve_position,
)
from .tracker import ProgressTracker, ProgressWriter, record_progress, upsert_history

__all__ = [
    "Debouncer",
    "HistoryView",
    "format_last_read",
    "recent_history",
    "clamp_position",
    "compute_absolute_position",
    "compute_progress_percentage",
    "resolve_position",
    "ProgressTracker",
    "ProgressWriter",
    "record_progress",
    "upsert_history",
]
