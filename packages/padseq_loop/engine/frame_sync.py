"""
Frame Sync

Render-loop primitive. Visible state changes are queued with the
timestamp they belong to and applied on the first frame at or after it,
so the playhead moves when the sound is heard rather than when the tick
was computed ahead of time.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

FrameListener = Callable[[float], None]


class FrameSync:
    """asyncio render loop running queued commits and frame listeners."""

    DEFAULT_FPS: float = 60.0

    def __init__(
        self,
        now: Callable[[], float] = time.perf_counter,
        fps: float = DEFAULT_FPS,
    ):
        """
        Initialize frame sync.

        Args:
            now: Timestamp source; must match the clock's callback timeline
            fps: Frames per second of the render loop
        """
        self._now = now
        self.fps = fps
        self._queue: list[tuple[float, int, Callable[[], None]]] = []
        self._seq = itertools.count()
        self._listeners: list[FrameListener] = []
        self._running = False

    def schedule(self, callback: Callable[[], None], time: float) -> None:
        """Queue a commit for the frame at ``time``."""
        heapq.heappush(self._queue, (time, next(self._seq), callback))

    def add_frame_listener(self, listener: FrameListener) -> Callable[[], None]:
        """
        Call ``listener(now)`` on every frame.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    @property
    def pending(self) -> int:
        return len(self._queue)

    def flush(self, now: float | None = None) -> int:
        """
        Run every queued commit due at ``now``, in timestamp order.

        Returns:
            Number of commits run
        """
        if now is None:
            now = self._now()
        count = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, callback = heapq.heappop(self._queue)
            try:
                callback()
            except Exception as e:
                logger.error(f"Frame commit error: {e}", exc_info=True)
            count += 1
        return count

    def render_frame(self, now: float | None = None) -> None:
        """Flush due commits, then notify frame listeners."""
        if now is None:
            now = self._now()
        self.flush(now)
        for listener in list(self._listeners):
            try:
                listener(now)
            except Exception as e:
                logger.error(f"Frame listener error: {e}", exc_info=True)

    async def run(self) -> None:
        """Render loop; runs until ``stop()`` or cancellation."""
        self._running = True
        interval = 1.0 / self.fps
        logger.debug(f"Frame loop started at {self.fps:.0f} fps")
        try:
            while self._running:
                self.render_frame()
                await asyncio.sleep(interval)
        finally:
            self._running = False
            logger.debug("Frame loop stopped")

    def stop(self) -> None:
        self._running = False

    def clear(self) -> None:
        """Drop every queued commit."""
        self._queue.clear()
