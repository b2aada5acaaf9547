"""
Playhead Sampler

Reads the transport clock once per animation frame. The render loop
never keeps its own counter; it only samples the clock.
"""

from __future__ import annotations

import math

from padseq_core.constants.tempo import BEATS_PER_BAR
from padseq_core.ir import steps_per_bar

from ..state import PlayheadPosition
from .transport import Transport, split_position


class PlayheadSampler:
    """Derives a PlayheadPosition from the transport clock."""

    def __init__(self, transport: Transport):
        self._transport = transport
        self.latest = PlayheadPosition()

    def sample(self) -> PlayheadPosition:
        transport = self._transport
        elapsed = (
            transport.state.paused_position
            if transport.state.paused_position is not None
            else transport.clock.position
        )
        pattern = transport.pattern
        if pattern is None:
            return PlayheadPosition(elapsed=elapsed)

        duration = transport.step_duration
        index, remainder = split_position(elapsed, duration)
        step = index % pattern.total_steps
        per_bar = steps_per_bar(pattern.subdivision)
        beat = math.floor(step % per_bar / pattern.subdivision.steps_per_beat)
        return PlayheadPosition(
            step=step,
            bar=step // per_bar,
            beat=beat % BEATS_PER_BAR,
            progress=remainder / duration,
            elapsed=elapsed,
        )

    def on_frame(self, now: float) -> None:
        """Frame listener: refresh ``latest``."""
        self.latest = self.sample()
