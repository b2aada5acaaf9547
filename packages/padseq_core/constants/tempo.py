"""Tempo and grid constants.

Patterns are always in 4/4; the tempo range is fixed by the player.
"""

from typing import Final

MIN_BPM: Final[int] = 40
MAX_BPM: Final[int] = 200
DEFAULT_BPM: Final[int] = 120

BEATS_PER_BAR: Final[int] = 4
MIN_BARS: Final[int] = 1
MAX_BARS: Final[int] = 4

# Pattern names are limited to what fits in the codec's length byte
MAX_NAME_BYTES: Final[int] = 255

DEFAULT_PATTERN_NAME: Final[str] = "New Pattern"
UNTITLED_PATTERN_NAME: Final[str] = "Untitled Pattern"
