"""Logging and progress-write metrics for the reading core."""

import logging
from dataclasses import dataclass, field, asdict
from datetime import datetime
from uuid import uuid4

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("story_reader")


@dataclass
class ProgressMetrics:
    """Counters collected by the debounced progress writer."""

    session_id: str = field(default_factory=lambda: str(uuid4())[:8])
    started_at: str = field(default_factory=lambda: datetime.now().isoformat())

    # Debounce behaviour
    writes_scheduled: int = 0
    writes_superseded: int = 0

    # Outcomes
    writes_persisted: int = 0
    writes_skipped: int = 0  # no signed-in user
    flushes: int = 0

    # Reader contract violations that were clamped instead of raised
    positions_clamped: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for logging/storage."""
        return asdict(self)

    def log_summary(self):
        """Log a summary of the reading session's writes."""
        logger.info("=" * 50)
        logger.info(f"Reading Session Summary: {self.session_id}")
        logger.info("=" * 50)
        logger.info(f"Started: {self.started_at}")
        logger.info(f"Writes scheduled: {self.writes_scheduled}")
        logger.info(f"Writes superseded: {self.writes_superseded}")
        logger.info(f"Writes persisted: {self.writes_persisted}")

        if self.writes_skipped:
            logger.info(f"Writes skipped (no user): {self.writes_skipped}")
        if self.flushes:
            logger.info(f"Flushed on teardown: {self.flushes}")
        if self.positions_clamped:
            logger.warning(f"Positions clamped: {self.positions_clamped}")

        logger.info("=" * 50)
