"""
Pattern Store

Holds the pattern being edited and applies editing operations to it.
Every mutation is a guarded no-op when no pattern is loaded or an index
is out of range; callers get a CommandResult instead of an exception.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..ir.pattern import DrumPattern, FingerDesignation
from ..ir.subdivision import DEFAULT_SUBDIVISION, Subdivision
from ..result import CommandResult
from . import operations
from .conversion import convert_subdivision

logger = logging.getLogger(__name__)

PatternListener = Callable[[DrumPattern | None], None]

NO_PATTERN = "No pattern loaded"


class PatternStore:
    """
    Observable holder of the current pattern.

    Listeners are called with the new pattern (or None) after every change
    that was actually applied.
    """

    def __init__(self, pattern: DrumPattern | None = None) -> None:
        self._pattern = pattern
        self._listeners: list[PatternListener] = []

    @property
    def current(self) -> DrumPattern | None:
        return self._pattern

    @property
    def has_pattern(self) -> bool:
        return self._pattern is not None

    def subscribe(self, listener: PatternListener) -> Callable[[], None]:
        """
        Register a change listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, pattern: DrumPattern | None) -> None:
        self._pattern = pattern
        for listener in list(self._listeners):
            try:
                listener(pattern)
            except Exception as e:
                logger.error(f"Pattern listener failed: {e}", exc_info=True)

    def _ignored(self, reason: str) -> CommandResult:
        logger.debug(f"Pattern edit ignored: {reason}")
        return CommandResult.ignored(reason)

    def _cell_error(self, pattern: DrumPattern, track: int, step: int) -> str | None:
        if not 0 <= track < len(pattern.tracks):
            return f"Track index {track} out of range"
        if not 0 <= step < pattern.total_steps:
            return f"Step index {step} out of range"
        return None

    # =========================================================================
    # Whole-pattern operations
    # =========================================================================

    def set_pattern(self, pattern: DrumPattern) -> CommandResult:
        """Replace the current pattern wholesale."""
        self._commit(pattern)
        logger.info(f"Pattern loaded: {pattern.name!r} ({pattern.id})")
        return CommandResult.ok("Pattern loaded", {"id": pattern.id})

    def reset_pattern(self) -> CommandResult:
        """Discard the current pattern."""
        if self._pattern is None:
            return self._ignored(NO_PATTERN)
        self._commit(None)
        logger.info("Pattern reset")
        return CommandResult.ok("Pattern reset")

    def create_empty_pattern(
        self,
        name: str | None = None,
        bars: int = 1,
        subdivision: Subdivision = DEFAULT_SUBDIVISION,
    ) -> CommandResult:
        """Replace the current pattern with a new empty one."""
        try:
            pattern = operations.create_empty_pattern(name=name, bars=bars, subdivision=subdivision)
        except ValueError as e:
            return CommandResult.error(str(e))
        return self.set_pattern(pattern)

    # =========================================================================
    # Attribute operations
    # =========================================================================

    def set_pattern_name(self, name: str) -> CommandResult:
        if self._pattern is None:
            return self._ignored(NO_PATTERN)
        pattern = operations.rename_pattern(self._pattern, name)
        self._commit(pattern)
        return CommandResult.ok(data={"name": pattern.name})

    def set_bpm(self, bpm: float) -> CommandResult:
        if self._pattern is None:
            return self._ignored(NO_PATTERN)
        pattern = operations.set_pattern_bpm(self._pattern, bpm)
        if pattern is self._pattern:
            return CommandResult.ignored("BPM unchanged", {"bpm": pattern.bpm})
        self._commit(pattern)
        return CommandResult.ok(data={"bpm": pattern.bpm})

    def set_bars(self, bars: int) -> CommandResult:
        if self._pattern is None:
            return self._ignored(NO_PATTERN)
        try:
            pattern = operations.resize_bars(self._pattern, bars)
        except ValueError as e:
            return CommandResult.error(str(e))
        if pattern is self._pattern:
            return CommandResult.ignored("Bars unchanged", {"bars": bars})
        self._commit(pattern)
        logger.info(f"Pattern resized to {bars} bar(s)")
        return CommandResult.ok(data={"bars": bars, "total_steps": pattern.total_steps})

    def set_subdivision(self, subdivision: Subdivision) -> CommandResult:
        if self._pattern is None:
            return self._ignored(NO_PATTERN)
        if subdivision == self._pattern.subdivision:
            return CommandResult.ignored(
                "Subdivision unchanged", {"subdivision": subdivision.value}
            )
        conversion = convert_subdivision(self._pattern, subdivision)
        self._commit(conversion.pattern)
        logger.info(
            f"Subdivision changed to {subdivision.value} (dropped {conversion.dropped} step(s))"
        )
        return CommandResult.ok(
            data={
                "subdivision": subdivision.value,
                "total_steps": conversion.pattern.total_steps,
                "dropped": conversion.dropped,
            }
        )

    # =========================================================================
    # Step operations
    # =========================================================================

    def toggle_step(self, track_index: int, step_index: int) -> CommandResult:
        if self._pattern is None:
            return self._ignored(NO_PATTERN)
        error = self._cell_error(self._pattern, track_index, step_index)
        if error:
            return self._ignored(error)
        pattern = operations.toggle_step(self._pattern, track_index, step_index)
        self._commit(pattern)
        step = pattern.tracks[track_index].steps[step_index]
        return CommandResult.ok(
            data={"track": track_index, "step": step_index, **step.to_dict()}
        )

    def update_step_finger(
        self,
        track_index: int,
        step_index: int,
        finger: FingerDesignation,
    ) -> CommandResult:
        if self._pattern is None:
            return self._ignored(NO_PATTERN)
        error = self._cell_error(self._pattern, track_index, step_index)
        if error:
            return self._ignored(error)
        pattern = operations.update_step_finger(self._pattern, track_index, step_index, finger)
        if pattern is self._pattern:
            return self._ignored("Step is not active")
        self._commit(pattern)
        return CommandResult.ok(
            data={"track": track_index, "step": step_index, "finger": finger.to_dict()}
        )
