"""
Protocols for the transport's external collaborators.

The transport never talks to a sound engine, a timer or a renderer
directly; it goes through these interfaces so each can be swapped for a
deterministic test double.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

TimedCallback = Callable[[float], None]

__all__ = [
    "AudioTrigger",
    "FrameScheduler",
    "PreciseScheduler",
    "StateSink",
    "TimedCallback",
]


@runtime_checkable
class AudioTrigger(Protocol):
    """
    Sound-producing engine.

    Implementations:
        - OscPadTrigger: Real output to a SuperDirt-style sampler over OSC
        - RecordingAudioTrigger: Test double for unit tests
    """

    @property
    def is_ready(self) -> bool:
        """True once the engine can make sound."""
        ...

    def trigger(self, pad_id: str, time: float | None = None) -> None:
        """Play one pad, optionally at an exact clock timestamp."""
        ...


@runtime_checkable
class PreciseScheduler(Protocol):
    """
    Sample-accurate clock with repeating and one-shot callbacks.

    Callbacks receive the exact timestamp (on the ``now()`` timeline) at
    which their event is due, which may be slightly in the future.

    Implementations:
        - TransportClock: asyncio clock with lookahead
        - ManualClock: Test double advanced by hand
    """

    bpm: float

    @property
    def position(self) -> float:
        """Cumulative elapsed transport time in seconds."""
        ...

    @position.setter
    def position(self, value: float) -> None:
        ...

    def now(self) -> float:
        """Current timestamp on the callback timeline."""
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        """Halt the clock, keeping its position."""
        ...

    def schedule_repeat(
        self,
        callback: TimedCallback,
        interval: float,
        start_offset: float = 0.0,
    ) -> Any:
        """Call ``callback`` every ``interval`` seconds, first after ``start_offset``."""
        ...

    def schedule_once(self, callback: TimedCallback, delay: float) -> Any:
        ...

    def clear(self, handle: Any) -> None:
        """Cancel a scheduled callback. Unknown handles are ignored."""
        ...


@runtime_checkable
class FrameScheduler(Protocol):
    """
    Render-sync primitive: runs a callback on the frame nearest a timestamp.

    Implementations:
        - FrameSync: asyncio render loop
        - ImmediateFrames: Test double that records and flushes on demand
    """

    def schedule(self, callback: Callable[[], None], time: float) -> None:
        ...


@runtime_checkable
class StateSink(Protocol):
    """
    Destination for reactive transport state.

    Implementations:
        - InProcessStateSink: asyncio.Queue consumed by the SSE endpoint
    """

    def send_status(self, status: dict[str, Any]) -> None:
        ...

    def send_position(self, position: dict[str, Any]) -> None:
        ...
