"""Pattern editing: pure operations and the observable store."""

from .conversion import SubdivisionConversion, convert_subdivision
from .operations import (
    clamp_bpm,
    create_empty_pattern,
    rename_pattern,
    resize_bars,
    round_half_up,
    set_pattern_bpm,
    toggle_step,
    truncate_name,
    update_step_finger,
)
from .store import PatternStore

__all__ = [
    "SubdivisionConversion",
    "convert_subdivision",
    "clamp_bpm",
    "create_empty_pattern",
    "rename_pattern",
    "resize_bars",
    "round_half_up",
    "set_pattern_bpm",
    "toggle_step",
    "truncate_name",
    "update_step_finger",
    "PatternStore",
]
