"""
In-Process State Sink

The transport publishes state events to an asyncio.Queue consumed by the
SSE endpoint.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

logger = logging.getLogger(__name__)

# Default queue size; drop-oldest keeps memory bounded
_DEFAULT_QUEUE_SIZE = 64


class InProcessStateSink:
    """StateSink backed by an asyncio.Queue.

    When the queue is full the oldest entry is dropped so a slow SSE
    consumer never back-pressures the transport.
    """

    def __init__(self, maxsize: int = _DEFAULT_QUEUE_SIZE) -> None:
        self._queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=maxsize)
        self._dropped = 0

    @property
    def queue(self) -> asyncio.Queue[dict[str, Any]]:
        return self._queue

    @property
    def dropped(self) -> int:
        """Events discarded because the queue was full."""
        return self._dropped

    # ----------------------------------------------------------
    # StateSink protocol methods
    # ----------------------------------------------------------

    def send_status(self, status: dict[str, Any]) -> None:
        self._push({"type": "status", "data": dict(status)})

    def send_position(self, position: dict[str, Any]) -> None:
        self._push({"type": "position", "data": dict(position)})

    def send(self, event_type: str, data: dict[str, Any]) -> None:
        """Generic send (pattern changes and other events)."""
        self._push({"type": event_type, "data": data})

    # ----------------------------------------------------------
    # Helpers
    # ----------------------------------------------------------

    def _push(self, event: dict[str, Any]) -> None:
        """Push event, dropping oldest if queue is full."""
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            try:
                self._queue.get_nowait()
                self._dropped += 1
            except asyncio.QueueEmpty:
                pass
            try:
                self._queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.debug(f"State event dropped: {event['type']}")
