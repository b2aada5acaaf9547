"""padseq transport engine."""

from .clock import TransportClock
from .frame_sync import FrameSync
from .playhead import PlayheadSampler
from .transport import Transport, split_position

__all__ = [
    "TransportClock",
    "FrameSync",
    "PlayheadSampler",
    "Transport",
    "split_position",
]
