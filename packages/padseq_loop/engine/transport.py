"""
padseq Transport

Play/pause/stop/seek state machine that keeps the discrete step grid in
sync with a continuous clock.

The clock's cumulative position is the only source of truth for where
playback is. The step the user sees is derived from it, and one recurring
clock callback advances an incrementally tracked step index that drives
the audio triggers.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from padseq_core.constants.tempo import DEFAULT_BPM
from padseq_core.editing import PatternStore, clamp_bpm
from padseq_core.ir import DEFAULT_SUBDIVISION, DrumPattern, step_duration
from padseq_core.result import CommandResult

from ..protocols import AudioTrigger, FrameScheduler, PreciseScheduler, StateSink
from ..state import PlaybackState, TransportState

logger = logging.getLogger(__name__)

# Positions closer than this to a step boundary count as on it
BOUNDARY_EPSILON = 1e-9


def split_position(position: float, duration: float) -> tuple[int, float]:
    """
    Split a clock position into (whole steps, remainder seconds).

    Positions within BOUNDARY_EPSILON of a boundary snap onto it, so a
    step-aligned position survives float rounding.
    """
    index = math.floor(position / duration)
    remainder = position - index * duration
    if duration - remainder < BOUNDARY_EPSILON:
        return index + 1, 0.0
    if remainder < BOUNDARY_EPSILON:
        return index, 0.0
    return index, remainder


class Transport:
    """
    Playback transport.

    Expected edge cases (no pattern, wrong state) are guarded no-ops that
    return ``CommandResult.ignored``; ``stop`` is always honoured.
    """

    def __init__(
        self,
        store: PatternStore,
        clock: PreciseScheduler,
        frames: FrameScheduler,
        audio: AudioTrigger,
        state_sink: StateSink | None = None,
    ):
        """
        Initialize transport.

        Args:
            store: Pattern holder (read once per tick)
            clock: Precise scheduler (TransportClock or mock)
            frames: Render-sync primitive (FrameSync or mock)
            audio: Audio trigger (OscPadTrigger or mock)
            state_sink: Optional destination for state updates
        """
        self._store = store
        self._clock = clock
        self._frames = frames
        self._audio = audio
        self._sink = state_sink

        pattern = store.current
        self.state = TransportState(bpm=pattern.bpm if pattern else DEFAULT_BPM)
        self._clock.bpm = self.state.bpm
        self._step_duration = self._current_step_duration()

        # Schedule handles; at most one of each exists at any time
        self._repeat_handle: Any = None
        self._stop_handle: Any = None

        # Step index the next tick will play and the clock position it is due at
        self._next_step = 0
        self._next_target = 0.0

        # Bumped on every pause/stop; frame commits from older runs are dropped
        self._generation = 0

        self._unsubscribe = store.subscribe(self._on_pattern_changed)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def clock(self) -> PreciseScheduler:
        return self._clock

    @property
    def pattern(self) -> DrumPattern | None:
        return self._store.current

    @property
    def step_duration(self) -> float:
        """Seconds per step at the current tempo and subdivision."""
        return self._step_duration

    @property
    def total_steps(self) -> int:
        pattern = self._store.current
        return pattern.total_steps if pattern else 0

    @property
    def is_playing(self) -> bool:
        return self.state.is_playing

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    @property
    def has_pending_stop(self) -> bool:
        return self._stop_handle is not None

    def derived_step(self, position: float | None = None) -> int:
        """Step index at a clock position (default: the current one)."""
        total = self.total_steps
        if total == 0:
            return 0
        if position is None:
            position = self._clock.position
        index, _ = split_position(position, self._step_duration)
        return index % total

    # =========================================================================
    # Transport commands
    # =========================================================================

    def play(self) -> CommandResult:
        """Start from the clock position, or resume from the paused position."""
        if self._store.current is None:
            return self._ignored("No pattern loaded")
        if self.state.is_playing:
            return self._ignored("Already playing")

        self._clear_schedules()
        resuming = self.state.is_paused
        if resuming and self.state.paused_position is not None:
            self._clock.position = self.state.paused_position

        self._register_from(self._clock.position)
        self.state.playback_state = PlaybackState.PLAYING
        self.state.paused_position = None
        self._clock.start()

        if resuming:
            logger.info(f"Playback resumed from step {self.state.current_step}")
        else:
            logger.info(f"Playback started from step {self._next_step}")
        self._publish_status()
        return CommandResult.ok(data=self.state.to_status_dict())

    def pause(self) -> CommandResult:
        """Freeze playback at the exact elapsed position."""
        if not self.state.is_playing:
            return self._ignored("Not playing")

        position = self._clock.position
        self._clock.stop()
        self._clear_schedules()
        self._generation += 1

        self.state.paused_position = position
        self.state.current_step = self.derived_step(position)
        self.state.playback_state = PlaybackState.PAUSED

        logger.info(f"Playback paused at step {self.state.current_step} ({position:.3f}s)")
        self._publish_status()
        return CommandResult.ok(data=self.state.to_status_dict())

    def stop(self) -> CommandResult:
        """Stop and reset to the beginning. Idempotent."""
        was_stopped = self.state.is_stopped

        self._clock.stop()
        self._clear_schedules()
        self._generation += 1
        self._clock.position = 0.0
        self._next_step = 0
        self._next_target = 0.0

        self.state.current_step = 0
        self.state.paused_position = None
        self.state.playback_state = PlaybackState.STOPPED

        if not was_stopped:
            logger.info("Playback stopped, position reset")
        self._publish_status()
        if was_stopped:
            return CommandResult.ok("Already stopped", self.state.to_status_dict())
        return CommandResult.ok(data=self.state.to_status_dict())

    def toggle(self) -> CommandResult:
        """Pause when playing, otherwise play."""
        if self.state.is_playing:
            return self.pause()
        return self.play()

    def reset(self) -> CommandResult:
        """Stop and restore the default tempo."""
        self.stop()
        self.set_bpm(DEFAULT_BPM)
        return CommandResult.ok("Transport reset", self.state.to_status_dict())

    # =========================================================================
    # Tempo and looping
    # =========================================================================

    def set_bpm(self, bpm: float) -> CommandResult:
        """
        Set the tempo (rounded, clamped to 40-200).

        Future ticks use the new step duration; the visible step is kept.
        The tempo is mirrored into the loaded pattern.
        """
        bpm = clamp_bpm(bpm)
        changed = bpm != self.state.bpm
        self.state.bpm = bpm
        self._clock.bpm = bpm
        self._store.set_bpm(bpm)
        if not changed:
            return CommandResult.ignored("BPM unchanged", {"bpm": bpm})

        self._retime()
        logger.info(f"BPM changed to {bpm}")
        self._publish_status()
        return CommandResult.ok(data={"bpm": bpm})

    def adjust_bpm(self, delta: float) -> CommandResult:
        return self.set_bpm(self.state.bpm + delta)

    def set_looping(self, looping: bool) -> CommandResult:
        if looping == self.state.looping:
            return self._ignored(f"Looping already {'on' if looping else 'off'}")
        self.state.looping = looping

        # Re-enabling the loop before the scheduled end-stop resumes the loop
        if looping and self._stop_handle is not None and self.state.is_playing:
            self._clock.clear(self._stop_handle)
            self._stop_handle = None
            self._register_repeat(max(0.0, self._next_target - self._clock.position))

        logger.info(f"Looping {'enabled' if looping else 'disabled'}")
        self._publish_status()
        return CommandResult.ok(data={"looping": looping})

    def toggle_loop(self) -> CommandResult:
        return self.set_looping(not self.state.looping)

    # =========================================================================
    # Seeking
    # =========================================================================

    def set_playhead(self, step: int) -> CommandResult:
        """Move the playhead to a step (clamped). Ignored while playing."""
        total = self.total_steps
        if total == 0:
            return self._ignored("No pattern loaded")
        if self.state.is_playing:
            return self._ignored("Cannot seek while playing")

        step = max(0, min(total - 1, step))
        position = step * self._step_duration
        self._clock.position = position
        if self.state.is_paused:
            self.state.paused_position = position
        self.state.current_step = step

        logger.debug(f"Playhead moved to step {step}")
        self._publish_status()
        return CommandResult.ok(data={"current_step": step})

    def seek_forward(self, steps: int = 1) -> CommandResult:
        return self.set_playhead(self.state.current_step + steps)

    def seek_backward(self, steps: int = 1) -> CommandResult:
        return self.set_playhead(self.state.current_step - steps)

    # =========================================================================
    # Scheduling
    # =========================================================================

    def _register_from(self, position: float) -> None:
        """Register the recurring tick so it lands on the next step boundary."""
        duration = self._step_duration
        index, remainder = split_position(position, duration)
        offset = 0.0 if remainder == 0.0 else duration - remainder
        if remainder:
            index += 1
        total = self.total_steps
        self._next_step = index % total if total else 0
        self._next_target = position + offset
        self._register_repeat(offset)

    def _register_repeat(self, offset: float) -> None:
        if self._repeat_handle is not None:
            self._clock.clear(self._repeat_handle)
        self._repeat_handle = self._clock.schedule_repeat(
            self._tick, self._step_duration, offset
        )

    def _clear_schedules(self) -> None:
        if self._repeat_handle is not None:
            self._clock.clear(self._repeat_handle)
            self._repeat_handle = None
        if self._stop_handle is not None:
            self._clock.clear(self._stop_handle)
            self._stop_handle = None

    def _tick(self, time: float) -> None:
        """Recurring step callback, run with the step's exact timestamp."""
        if self._repeat_handle is None:
            return
        pattern = self._store.current
        if pattern is None:
            return

        total = pattern.total_steps
        step = self._next_step
        if step >= total:
            # Pattern shrank under the playhead
            step = 0

        if self._audio.is_ready:
            for pad_id in pattern.active_pads_at(step):
                self._audio.trigger(pad_id, time)

        generation = self._generation
        self._frames.schedule(lambda: self._commit_step(step, generation), time)

        self._next_step = (step + 1) % total
        self._next_target += self._step_duration

        if not self.state.looping and step == total - 1:
            # Play the last step out, then stop instead of wrapping
            self._clock.clear(self._repeat_handle)
            self._repeat_handle = None
            lead = max(0.0, time - self._clock.now())
            self._stop_handle = self._clock.schedule_once(
                self._on_end_reached, lead + self._step_duration
            )

    def _commit_step(self, step: int, generation: int) -> None:
        if generation != self._generation:
            return
        self.state.current_step = step
        if self._sink is not None:
            self._sink.send_position({"step": step, "bpm": self.state.bpm})

    def _on_end_reached(self, time: float) -> None:
        self._stop_handle = None
        logger.info("End of pattern reached (looping off)")
        self.stop()

    def _current_step_duration(self) -> float:
        pattern = self._store.current
        subdivision = pattern.subdivision if pattern else DEFAULT_SUBDIVISION
        return step_duration(self.state.bpm, subdivision)

    def _retime(self) -> None:
        """
        Apply a new step duration.

        Positions are rescaled so the step under the playhead is kept; while
        playing, the recurring tick is re-registered for the pending step.
        """
        old = self._step_duration
        new = self._current_step_duration()
        self._step_duration = new
        if math.isclose(old, new):
            return

        ratio = new / old
        self._clock.position = self._clock.position * ratio
        if self.state.paused_position is not None:
            self.state.paused_position *= ratio
        self._next_target *= ratio

        if self.state.is_playing and self._repeat_handle is not None:
            self._register_repeat(max(0.0, self._next_target - self._clock.position))

    # =========================================================================
    # Pattern changes
    # =========================================================================

    def _on_pattern_changed(self, pattern: DrumPattern | None) -> None:
        if pattern is None:
            if not self.state.is_stopped:
                logger.info("Pattern removed, stopping playback")
                self.stop()
            return

        if pattern.bpm != self.state.bpm:
            # Adopt the tempo of a newly loaded pattern
            self.state.bpm = pattern.bpm
            self._clock.bpm = pattern.bpm
        self._retime()

        if not self.state.is_playing:
            self.state.current_step = self.derived_step(
                self.state.paused_position
                if self.state.paused_position is not None
                else self._clock.position
            )
        self._publish_status()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _ignored(self, reason: str) -> CommandResult:
        logger.debug(f"Transport command ignored: {reason}")
        return CommandResult.ignored(reason, self.state.to_status_dict())

    def _publish_status(self) -> None:
        if self._sink is not None:
            self._sink.send_status(self.state.to_status_dict())

    def get_status(self) -> dict[str, Any]:
        status = self.state.to_status_dict()
        status["total_steps"] = self.total_steps
        status["step_duration"] = self._step_duration
        return status

    def close(self) -> None:
        """Stop playback and detach from the store."""
        self.stop()
        self._unsubscribe()
