"""Pure editing operations on DrumPattern.

Every operation returns a new pattern and leaves its input untouched.
Out-of-range track or step indices leave the pattern unchanged.
"""

from __future__ import annotations

import math
import time
import uuid
from dataclasses import replace
from numbers import Real

from ..constants.pads import PADS
from ..constants.tempo import (
    DEFAULT_BPM,
    DEFAULT_PATTERN_NAME,
    MAX_BARS,
    MAX_BPM,
    MAX_NAME_BYTES,
    MIN_BARS,
    MIN_BPM,
    UNTITLED_PATTERN_NAME,
)
from ..ir.pattern import (
    EMPTY_STEP,
    DrumPattern,
    FingerDesignation,
    PatternStep,
    PatternTrack,
)
from ..ir.subdivision import DEFAULT_SUBDIVISION, Subdivision, total_steps


def round_half_up(value: Real) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def clamp_bpm(bpm: float) -> int:
    """Round a tempo and clamp it to the supported range."""
    return max(MIN_BPM, min(MAX_BPM, round_half_up(bpm)))


def new_pattern_id() -> str:
    """Mint an id for a locally created pattern."""
    return f"pattern-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def truncate_name(name: str, max_bytes: int = MAX_NAME_BYTES) -> str:
    """Cut a name to at most ``max_bytes`` UTF-8 bytes without splitting a code point."""
    encoded = name.encode("utf-8")
    if len(encoded) <= max_bytes:
        return name
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def _check_bars(bars: int) -> None:
    if not MIN_BARS <= bars <= MAX_BARS:
        raise ValueError(f"bars must be {MIN_BARS}-{MAX_BARS}, got {bars}")


def create_empty_pattern(
    name: str | None = None,
    bars: int = 1,
    subdivision: Subdivision = DEFAULT_SUBDIVISION,
    bpm: int = DEFAULT_BPM,
    pattern_id: str | None = None,
) -> DrumPattern:
    """
    Create a pattern with every step inactive.

    Args:
        name: Pattern name (defaults to "New Pattern")
        bars: Length in bars (1-4)
        subdivision: Grid resolution
        bpm: Tempo, clamped to 40-200
        pattern_id: Explicit id (a fresh one is minted by default)

    Raises:
        ValueError: If bars is out of range
    """
    _check_bars(bars)
    length = total_steps(bars, subdivision)
    tracks = tuple(
        PatternTrack(
            pad_id=pad.pad_id,
            label=pad.label,
            default_finger=FingerDesignation(pad.default_hand, pad.default_finger),
            steps=(EMPTY_STEP,) * length,
        )
        for pad in PADS
    )
    return DrumPattern(
        id=pattern_id or new_pattern_id(),
        name=truncate_name(name if name is not None else DEFAULT_PATTERN_NAME),
        bpm=clamp_bpm(bpm),
        subdivision=subdivision,
        bars=bars,
        tracks=tracks,
    )


def resize_bars(pattern: DrumPattern, bars: int) -> DrumPattern:
    """
    Change the pattern length, keeping steps by index.

    Growing appends inactive steps; shrinking drops the tail.

    Raises:
        ValueError: If bars is out of range
    """
    _check_bars(bars)
    if bars == pattern.bars:
        return pattern

    length = total_steps(bars, pattern.subdivision)
    tracks = []
    for track in pattern.tracks:
        steps = track.steps[:length]
        steps += (EMPTY_STEP,) * (length - len(steps))
        tracks.append(replace(track, steps=steps))
    return replace(pattern, bars=bars, tracks=tuple(tracks))


def _valid_cell(pattern: DrumPattern, track_index: int, step_index: int) -> bool:
    return 0 <= track_index < len(pattern.tracks) and 0 <= step_index < pattern.total_steps


def toggle_step(pattern: DrumPattern, track_index: int, step_index: int) -> DrumPattern:
    """
    Flip one step.

    Activation copies the track's default finger into the step;
    deactivation clears it.
    """
    if not _valid_cell(pattern, track_index, step_index):
        return pattern

    track = pattern.tracks[track_index]
    current = track.steps[step_index]
    if current.active:
        new_step = EMPTY_STEP
    else:
        new_step = PatternStep.hit(track.default_finger)
    return pattern.with_track(track_index, track.with_step(step_index, new_step))


def update_step_finger(
    pattern: DrumPattern,
    track_index: int,
    step_index: int,
    finger: FingerDesignation,
) -> DrumPattern:
    """Reassign the finger of an active step. Inactive steps are left alone."""
    if not _valid_cell(pattern, track_index, step_index):
        return pattern

    track = pattern.tracks[track_index]
    current = track.steps[step_index]
    if not current.active:
        return pattern
    return pattern.with_track(
        track_index, track.with_step(step_index, replace(current, finger=finger))
    )


def rename_pattern(pattern: DrumPattern, name: str) -> DrumPattern:
    """Set the pattern name (trimmed, never empty, at most 255 UTF-8 bytes)."""
    name = name.strip() or UNTITLED_PATTERN_NAME
    return replace(pattern, name=truncate_name(name))


def set_pattern_bpm(pattern: DrumPattern, bpm: float) -> DrumPattern:
    """Set the pattern tempo, clamped to the supported range."""
    bpm = clamp_bpm(bpm)
    if bpm == pattern.bpm:
        return pattern
    return replace(pattern, bpm=bpm)
