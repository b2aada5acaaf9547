"""Subdivision conversion.

Remaps active steps onto a new grid resolution while keeping the bar count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from fractions import Fraction

from ..ir.pattern import EMPTY_STEP, DrumPattern, PatternStep, PatternTrack
from ..ir.subdivision import Subdivision, total_steps
from .operations import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubdivisionConversion:
    """Outcome of a subdivision change.

    Attributes:
        pattern: The converted pattern
        dropped: Active steps that did not survive the conversion
        collisions: Part of ``dropped`` lost because an earlier step
            already claimed the same target index
    """

    pattern: DrumPattern
    dropped: int = 0
    collisions: int = 0

    @property
    def lossless(self) -> bool:
        return self.dropped == 0


def _remap_track(
    track: PatternTrack,
    old_spb: Fraction,
    new_spb: Fraction,
    new_length: int,
) -> tuple[PatternTrack, int, int]:
    """Remap one track. Returns (track, dropped, collisions)."""
    ratio = new_spb / old_spb
    new_steps: list[PatternStep] = [EMPTY_STEP] * new_length
    dropped = 0
    collisions = 0

    for old_index, step in enumerate(track.steps):
        if not step.active:
            continue

        if ratio.denominator == 1:
            # Subdividing by an integer factor: every step has an exact target
            new_index = old_index * ratio.numerator
        elif ratio.numerator == 1:
            # Combining by an integer factor: only steps on the coarser grid survive
            if old_index % ratio.denominator:
                dropped += 1
                continue
            new_index = old_index // ratio.denominator
        else:
            # Triplet <-> straight: re-quantize the beat position
            beat = Fraction(old_index) / old_spb
            new_index = round_half_up(beat * new_spb)

        if new_index >= new_length:
            dropped += 1
            continue
        if new_steps[new_index].active:
            # First writer (lowest old index) wins
            dropped += 1
            collisions += 1
            continue
        new_steps[new_index] = step

    return replace(track, steps=tuple(new_steps)), dropped, collisions


def convert_subdivision(pattern: DrumPattern, subdivision: Subdivision) -> SubdivisionConversion:
    """
    Change the grid resolution of a pattern.

    Integer ratios are converted exactly (subdividing) or by keeping the
    steps that land on the coarser grid (combining). Other ratios re-quantize
    each step's beat position, rounding half up; collisions keep the earliest
    source step.

    Args:
        pattern: Source pattern
        subdivision: Target subdivision

    Returns:
        SubdivisionConversion with the new pattern and loss counts
    """
    if subdivision == pattern.subdivision:
        return SubdivisionConversion(pattern=pattern)

    old_spb = pattern.subdivision.steps_per_beat
    new_spb = subdivision.steps_per_beat
    new_length = total_steps(pattern.bars, subdivision)

    tracks = []
    dropped = 0
    collisions = 0
    for track in pattern.tracks:
        new_track, track_dropped, track_collisions = _remap_track(
            track, old_spb, new_spb, new_length
        )
        tracks.append(new_track)
        dropped += track_dropped
        collisions += track_collisions

    if dropped:
        logger.debug(
            f"Subdivision {pattern.subdivision.value} -> {subdivision.value} "
            f"dropped {dropped} step(s) ({collisions} collisions)"
        )

    converted = replace(pattern, subdivision=subdivision, tracks=tuple(tracks))
    return SubdivisionConversion(pattern=converted, dropped=dropped, collisions=collisions)
