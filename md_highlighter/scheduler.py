"""Deferred reclassification of dirty blocks on a fixed cadence."""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable

from .constants import DEFAULT_TICK_INTERVAL
from .logger import get_logger

logger = get_logger(__name__)


class DirtyBlockScheduler:
    """Queue of blocks awaiting reclassification, drained on each tick.

    The queue has set semantics: a block marked dirty several times before a
    drain is reclassified once. A drain processes blocks in the order they
    were marked and re-checks the queue after every block, so blocks marked
    dirty while draining (a setext underline re-queueing the line above, a
    changed state spilling into the next line) settle within the same drain.
    `max_lines_per_drain` bounds a drain; anything left over stays queued for
    the next tick.

    The scheduler is single-threaded. The host calls `tick` from its timer, or
    `poll` from an event loop with the current time.

    Args:
        reclassify: Callback reclassifying one block.
        interval: Seconds between two ticks when driven through `poll`.
        clock: Monotonic clock used by `poll`.
        max_lines_per_drain: Optional bound on blocks reclassified per drain.

    Examples:
        scheduler = DirtyBlockScheduler(highlighter.rehighlight_block)
        scheduler.mark_dirty(handle)
        scheduler.tick()
    """

    def __init__(
        self,
        reclassify: Callable[[Hashable], object],
        interval: float = DEFAULT_TICK_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        max_lines_per_drain: int | None = None,
    ):
        self._reclassify = reclassify
        self.interval = interval
        self._clock = clock
        self.max_lines_per_drain = max_lines_per_drain
        self._queue: dict[Hashable, None] = {}
        self._listeners: list[Callable[[], None]] = []
        self._last_tick = clock()

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, handle: object) -> bool:
        return handle in self._queue

    @property
    def pending(self) -> tuple[Hashable, ...]:
        """Queued handles in the order they will be reclassified."""
        return tuple(self._queue)

    def mark_dirty(self, handle: Hashable) -> None:
        """Queue `handle` unless it is already waiting."""
        self._queue.setdefault(handle, None)

    def discard(self, handle: Hashable) -> None:
        """Forget `handle`, e.g. because its line was deleted."""
        self._queue.pop(handle, None)

    def clear(self) -> None:
        self._queue.clear()

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback fired once per tick that reclassified something."""
        self._listeners.append(callback)

    def drain(self) -> int:
        """Reclassify queued blocks until the queue is empty or the bound is hit.

        Returns:
            int: Number of blocks reclassified.
        """
        started = time.perf_counter()
        processed = 0

        while self._queue:
            if self.max_lines_per_drain is not None and processed >= self.max_lines_per_drain:
                logger.debug("Drain bound reached, %d block(s) left queued", len(self._queue))
                break
            handle = next(iter(self._queue))
            del self._queue[handle]
            self._reclassify(handle)
            processed += 1

        if processed:
            logger.debug(
                "Reclassified %d block(s) in %.2f ms",
                processed,
                (time.perf_counter() - started) * 1000,
            )
        return processed

    def tick(self) -> bool:
        """Drain the queue and notify listeners if anything was reclassified.

        Returns:
            bool: True when at least one block was reclassified.
        """
        self._last_tick = self._clock()
        return self._run()

    def poll(self, now: float | None = None) -> bool:
        """Tick when at least `interval` seconds passed since the last tick.

        Args:
            now: Current time; read from the clock when omitted.

        Returns:
            bool: True when a tick ran and reclassified at least one block.
        """
        now = self._clock() if now is None else now
        if now - self._last_tick < self.interval:
            return False
        self._last_tick = now
        return self._run()

    def _run(self) -> bool:
        if not self.drain():
            return False
        for callback in list(self._listeners):
            callback()
        return True
