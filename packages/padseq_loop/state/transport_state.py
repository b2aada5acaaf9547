"""
padseq Transport State

Reactive playback state exposed to the UI and the API.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from padseq_core.constants.tempo import DEFAULT_BPM


class PlaybackState(Enum):
    """Playback state enumeration"""
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass
class PlayheadPosition:
    """Playhead sampled from the clock for one animation frame"""
    step: int = 0
    bar: int = 0
    beat: int = 0
    progress: float = 0.0  # Fraction of the current step elapsed (0-1)
    elapsed: float = 0.0  # Clock position in seconds
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        return {
            "step": self.step,
            "bar": self.bar,
            "beat": self.beat,
            "progress": self.progress,
            "elapsed": self.elapsed,
            "timestamp": self.timestamp,
        }


@dataclass
class TransportState:
    """
    Observable transport state.

    ``current_step`` is the step the user sees; it is committed on the
    render frame matching each tick, not when the tick is scheduled.
    """

    playback_state: PlaybackState = PlaybackState.STOPPED
    current_step: int = 0
    bpm: int = DEFAULT_BPM
    looping: bool = True
    paused_position: float | None = None  # Exact clock position while paused

    @property
    def is_playing(self) -> bool:
        return self.playback_state == PlaybackState.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.playback_state == PlaybackState.PAUSED

    @property
    def is_stopped(self) -> bool:
        return self.playback_state == PlaybackState.STOPPED

    def to_status_dict(self) -> dict[str, Any]:
        """Convert state to status dict for the API and SSE stream"""
        return {
            "playback_state": self.playback_state.value,
            "is_playing": self.is_playing,
            "is_paused": self.is_paused,
            "current_step": self.current_step,
            "bpm": self.bpm,
            "looping": self.looping,
        }
