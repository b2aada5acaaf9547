"""Pattern IR models for padseq."""

from .pattern import (
    EMPTY_STEP,
    DrumPattern,
    FingerDesignation,
    PatternStep,
    PatternTrack,
)
from .subdivision import (
    DEFAULT_SUBDIVISION,
    Subdivision,
    step_duration,
    steps_per_bar,
    total_steps,
)

__all__ = [
    "EMPTY_STEP",
    "DrumPattern",
    "FingerDesignation",
    "PatternStep",
    "PatternTrack",
    "DEFAULT_SUBDIVISION",
    "Subdivision",
    "step_duration",
    "steps_per_bar",
    "total_steps",
]
