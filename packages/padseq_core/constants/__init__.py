"""Constants for padseq."""

from .pads import PAD_COUNT, PAD_IDS, PADS, PadInfo, get_pad, pad_index
from .tempo import (
    BEATS_PER_BAR,
    DEFAULT_BPM,
    DEFAULT_PATTERN_NAME,
    MAX_BARS,
    MAX_BPM,
    MAX_NAME_BYTES,
    MIN_BARS,
    MIN_BPM,
    UNTITLED_PATTERN_NAME,
)

__all__ = [
    "PAD_COUNT",
    "PAD_IDS",
    "PADS",
    "PadInfo",
    "get_pad",
    "pad_index",
    "BEATS_PER_BAR",
    "DEFAULT_BPM",
    "DEFAULT_PATTERN_NAME",
    "MAX_BARS",
    "MAX_BPM",
    "MAX_NAME_BYTES",
    "MIN_BARS",
    "MIN_BPM",
    "UNTITLED_PATTERN_NAME",
]
