"""
Test Doubles for padseq

Deterministic implementations of the transport's Protocol interfaces.
These allow testing Transport and related components without real
timers, audio or network I/O.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass
class _ScheduledEvent:
    callback: Callable[[float], None]
    target: float  # Clock position the event is due at
    interval: float | None = None  # None for one-shot events


class ManualClock:
    """
    Test double for PreciseScheduler protocol.

    Time only moves when ``advance()`` is called. Events fire in due
    order, ``lookahead`` seconds early, and only while the clock runs.
    """

    def __init__(self, lookahead: float = 0.0, start_time: float = 0.0):
        self.bpm: float = 120
        self.lookahead = lookahead
        self._now = start_time
        self._anchor: float | None = None
        self._offset = 0.0
        self._events: dict[int, _ScheduledEvent] = {}
        self._next_handle = 1
        self.start_count = 0
        self.stop_count = 0

    def now(self) -> float:
        return self._now

    @property
    def running(self) -> bool:
        return self._anchor is not None

    @property
    def position(self) -> float:
        if self._anchor is None:
            return self._offset
        return self._offset + (self._now - self._anchor)

    @position.setter
    def position(self, value: float) -> None:
        self._offset = max(0.0, value)
        if self._anchor is not None:
            self._anchor = self._now

    def start(self) -> None:
        if self._anchor is None:
            self._anchor = self._now
            self.start_count += 1

    def stop(self) -> None:
        if self._anchor is not None:
            self._offset = self.position
            self._anchor = None
            self.stop_count += 1

    def schedule_repeat(
        self,
        callback: Callable[[float], None],
        interval: float,
        start_offset: float = 0.0,
    ) -> int:
        return self._add(_ScheduledEvent(callback, self.position + start_offset, interval))

    def schedule_once(self, callback: Callable[[float], None], delay: float) -> int:
        return self._add(_ScheduledEvent(callback, self.position + delay))

    def clear(self, handle: Any) -> None:
        self._events.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._events)

    @property
    def repeat_count(self) -> int:
        return sum(1 for e in self._events.values() if e.interval is not None)

    def get_drift_stats(self) -> dict[str, float | int]:
        return {"late_count": 0, "max_late_ms": 0.0, "pending": self.pending}

    def _add(self, event: _ScheduledEvent) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._events[handle] = event
        return handle

    def _due(self, event: _ScheduledEvent) -> float:
        assert self._anchor is not None
        return self._anchor + (event.target - self._offset)

    def advance(self, seconds: float) -> None:
        """Move time forward, firing every event that comes due."""
        end = self._now + seconds
        while self._anchor is not None and self._events:
            handle, event = min(
                self._events.items(), key=lambda item: (self._due(item[1]), item[0])
            )
            due = self._due(event)
            fire_at = due - self.lookahead
            if fire_at > end + 1e-12:
                break
            self._now = max(self._now, fire_at)
            if event.interval is None:
                del self._events[handle]
            else:
                event.target += event.interval
            event.callback(due)
        self._now = end


@dataclass
class RecordingAudioTrigger:
    """
    Test double for AudioTrigger protocol.

    Records every hit as (pad_id, time).
    """

    hits: list[tuple[str, float | None]] = field(default_factory=list)
    ready: bool = True

    @property
    def is_ready(self) -> bool:
        return self.ready

    def connect(self) -> None:
        self.ready = True

    def disconnect(self) -> None:
        self.ready = False

    def trigger(self, pad_id: str, time: float | None = None) -> None:
        self.hits.append((pad_id, time))

    def pads(self) -> list[str]:
        return [pad for pad, _ in self.hits]

    def reset(self) -> None:
        self.hits.clear()


@dataclass
class RecordingStateSink:
    """
    Test double for StateSink protocol.

    Records all published events.
    """

    statuses: list[dict[str, Any]] = field(default_factory=list)
    positions: list[dict[str, Any]] = field(default_factory=list)

    def send_status(self, status: dict[str, Any]) -> None:
        self.statuses.append(status)

    def send_position(self, position: dict[str, Any]) -> None:
        self.positions.append(position)

    def reset(self) -> None:
        self.statuses.clear()
        self.positions.clear()
