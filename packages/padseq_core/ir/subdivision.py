"""Subdivision: the note length one grid step represents."""

from __future__ import annotations

from enum import Enum
from fractions import Fraction

from ..constants.tempo import BEATS_PER_BAR


class Subdivision(str, Enum):
    """Note length of one step.

    Values use the familiar transport notation: ``16n`` is a sixteenth
    note, ``16t`` a sixteenth-note triplet.
    """

    QUARTER = "4n"
    QUARTER_TRIPLET = "4t"
    EIGHTH = "8n"
    EIGHTH_TRIPLET = "8t"
    SIXTEENTH = "16n"
    SIXTEENTH_TRIPLET = "16t"
    THIRTY_SECOND = "32n"
    THIRTY_SECOND_TRIPLET = "32t"

    @property
    def steps_per_beat(self) -> Fraction:
        """Grid steps in one quarter-note beat (exact)."""
        return _STEPS_PER_BEAT[self]

    @property
    def is_triplet(self) -> bool:
        return self.value.endswith("t")

    @property
    def base(self) -> Subdivision:
        """The straight subdivision sharing this one's note value."""
        return Subdivision(self.value[:-1] + "n")

    @property
    def label(self) -> str:
        """Display label, e.g. ``1/16`` or ``1/8T``."""
        label = f"1/{self.value[:-1]}"
        return f"{label}T" if self.is_triplet else label

    def __str__(self) -> str:
        return self.value


_STEPS_PER_BEAT: dict[Subdivision, Fraction] = {
    Subdivision.QUARTER: Fraction(1),
    Subdivision.QUARTER_TRIPLET: Fraction(3, 2),
    Subdivision.EIGHTH: Fraction(2),
    Subdivision.EIGHTH_TRIPLET: Fraction(3),
    Subdivision.SIXTEENTH: Fraction(4),
    Subdivision.SIXTEENTH_TRIPLET: Fraction(6),
    Subdivision.THIRTY_SECOND: Fraction(8),
    Subdivision.THIRTY_SECOND_TRIPLET: Fraction(12),
}

DEFAULT_SUBDIVISION = Subdivision.SIXTEENTH


def steps_per_bar(subdivision: Subdivision) -> int:
    """Grid steps in one 4/4 bar."""
    return int(subdivision.steps_per_beat * BEATS_PER_BAR)


def total_steps(bars: int, subdivision: Subdivision) -> int:
    """Step count of a pattern with the given length and grid."""
    return bars * steps_per_bar(subdivision)


def step_duration(bpm: float, subdivision: Subdivision) -> float:
    """Duration of one step in seconds.

    >>> step_duration(120, Subdivision.SIXTEENTH)
    0.125
    """
    return 60.0 / bpm / float(subdivision.steps_per_beat)
