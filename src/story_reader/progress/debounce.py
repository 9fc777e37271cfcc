"""Keyed debouncing on the asyncio event loop."""

import asyncio
from typing import Callable, Hashable, Optional

from ..observability import logger


class Debouncer:
    """
    Cancellable delayed callbacks, one pending callback per key.

    Scheduling a key that already has a pending callback cancels it, so only the
    last callback inside any quiet window of `delay` seconds runs. Keys have
    independent timers.

    Must be used from code running on an asyncio event loop.
    """

    def __init__(self, delay: float = 0.5):
        self.delay = delay
        self._handles: dict[Hashable, asyncio.TimerHandle] = {}
        self._callbacks: dict[Hashable, Callable[[], None]] = {}

    def schedule(self, key: Hashable, callback: Callable[[], None]) -> bool:
        """
        Schedule `callback` for `key`, replacing any pending one.

        Returns True if a pending callback was superseded.
        """
        superseded = self.cancel(key)
        loop = asyncio.get_running_loop()
        self._callbacks[key] = callback
        self._handles[key] = loop.call_later(self.delay, self._fire, key)
        return superseded

    def cancel(self, key: Hashable) -> bool:
        """Drop the pending callback for `key`. Returns True if one was pending."""
        handle = self._handles.pop(key, None)
        self._callbacks.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def flush(self, key: Hashable) -> bool:
        """Run the pending callback for `key` now. Returns True if one ran."""
        handle = self._handles.pop(key, None)
        callback = self._callbacks.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        callback()
        return True

    def flush_all(self) -> int:
        """Run every pending callback now, in scheduling order. Returns how many ran."""
        count = 0
        for key in list(self._handles):
            if self.flush(key):
                count += 1
        return count

    def has_pending(self, key: Hashable) -> bool:
        return key in self._handles

    def pending_keys(self) -> list[Hashable]:
        return list(self._handles)

    def _fire(self, key: Hashable):
        self._handles.pop(key, None)
        callback: Optional[Callable[[], None]] = self._callbacks.pop(key, None)
        if callback is None:
            return
        logger.debug(f"Debounced callback firing for {key}")
        callback()
