"""
Transport Clock

asyncio implementation of the precise scheduler used by the transport.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import time
from typing import Any

from padseq_core.constants.tempo import DEFAULT_BPM

from ..protocols import TimedCallback

logger = logging.getLogger(__name__)


class TransportClock:
    """
    Drift-free transport clock.

    Position is ``offset + (perf_counter() - anchor)`` while running, so it
    never accumulates sleep error. Every scheduled event has an absolute
    target position; its task sleeps towards that target and fires
    ``lookahead`` seconds early, passing the exact due timestamp so the
    audio backend can place the sound precisely.
    """

    DEFAULT_LOOKAHEAD: float = 0.05

    # Callbacks that fire later than their lookahead window are late
    DRIFT_WARNING_THRESHOLD_MS: float = 10.0

    def __init__(self, lookahead: float = DEFAULT_LOOKAHEAD, bpm: float = DEFAULT_BPM):
        """
        Initialize transport clock.

        Args:
            lookahead: Seconds by which callbacks run ahead of their timestamp
            bpm: Informational tempo
        """
        self.lookahead = lookahead
        self.bpm = bpm

        self._anchor: float | None = None
        self._offset: float = 0.0
        self._running = asyncio.Event()
        self._tasks: dict[int, asyncio.Task[None]] = {}
        self._handles = itertools.count(1)

        self._drift_stats: dict[str, float | int] = {
            "late_count": 0,
            "max_late_ms": 0.0,
        }

    # =========================================================================
    # Clock
    # =========================================================================

    def now(self) -> float:
        return time.perf_counter()

    @property
    def running(self) -> bool:
        return self._anchor is not None

    @property
    def position(self) -> float:
        if self._anchor is None:
            return self._offset
        return self._offset + (time.perf_counter() - self._anchor)

    @position.setter
    def position(self, value: float) -> None:
        self._offset = max(0.0, value)
        if self._anchor is not None:
            self._anchor = time.perf_counter()

    def start(self) -> None:
        if self._anchor is not None:
            return
        self._anchor = time.perf_counter()
        self._running.set()
        logger.debug(f"Clock started at {self._offset:.3f}s")

    def stop(self) -> None:
        if self._anchor is None:
            return
        self._offset = self.position
        self._anchor = None
        self._running.clear()
        logger.debug(f"Clock stopped at {self._offset:.3f}s")

    def timestamp_at(self, position: float) -> float | None:
        """Timestamp at which the clock reaches a position, if running."""
        if self._anchor is None:
            return None
        return self._anchor + (position - self._offset)

    # =========================================================================
    # Scheduling
    # =========================================================================

    def schedule_repeat(
        self,
        callback: TimedCallback,
        interval: float,
        start_offset: float = 0.0,
    ) -> int:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        first = self.position + max(0.0, start_offset)
        handle = next(self._handles)
        self._spawn(handle, self._run_repeat(handle, callback, interval, first))
        return handle

    def schedule_once(self, callback: TimedCallback, delay: float) -> int:
        target = self.position + max(0.0, delay)
        handle = next(self._handles)
        self._spawn(handle, self._run_once(handle, callback, target))
        return handle

    def clear(self, handle: Any) -> None:
        task = self._tasks.pop(handle, None)
        if task is not None:
            task.cancel()

    def clear_all(self) -> None:
        for handle in list(self._tasks):
            self.clear(handle)

    @property
    def pending(self) -> int:
        """Number of live scheduled callbacks."""
        return len(self._tasks)

    def _spawn(self, handle: int, coro: Any) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks[handle] = task
        task.add_done_callback(lambda _t, h=handle: self._tasks.pop(h, None))

    async def _wait_for(self, target: float) -> float:
        """Sleep until ``target`` is within the lookahead window; return its timestamp."""
        while True:
            await self._running.wait()
            due = self.timestamp_at(target)
            if due is None:
                continue
            delay = due - self.lookahead - time.perf_counter()
            if delay <= 0:
                self._record_lateness(-delay - self.lookahead)
                return due
            await asyncio.sleep(delay)

    async def _run_repeat(
        self, handle: int, callback: TimedCallback, interval: float, first: float
    ) -> None:
        for count in itertools.count():
            due = await self._wait_for(first + count * interval)
            # Cleared handles stop here; _wait_for can return without suspending
            if handle not in self._tasks:
                return
            self._fire(callback, due)

    async def _run_once(self, handle: int, callback: TimedCallback, target: float) -> None:
        due = await self._wait_for(target)
        if handle not in self._tasks:
            return
        self._fire(callback, due)

    def _fire(self, callback: TimedCallback, due: float) -> None:
        try:
            callback(due)
        except Exception as e:
            logger.error(f"Clock callback error: {e}", exc_info=True)

    # =========================================================================
    # Drift monitoring
    # =========================================================================

    def _record_lateness(self, late_seconds: float) -> None:
        late_ms = late_seconds * 1000
        if late_ms <= self.DRIFT_WARNING_THRESHOLD_MS:
            return
        self._drift_stats["late_count"] = int(self._drift_stats["late_count"]) + 1
        if late_ms > self._drift_stats["max_late_ms"]:
            self._drift_stats["max_late_ms"] = late_ms
        logger.warning(
            f"Clock callback late by {late_ms:.1f}ms "
            f"(threshold: {self.DRIFT_WARNING_THRESHOLD_MS}ms)"
        )

    def get_drift_stats(self) -> dict[str, float | int]:
        """Get drift statistics for monitoring."""
        return {**self._drift_stats, "pending": self.pending}
