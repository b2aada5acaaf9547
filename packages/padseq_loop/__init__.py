"""
padseq Loop - transport scheduler and audio output

Keeps the pattern's step grid in sync with a drift-free clock and drives
an OSC sampler.
"""

from .engine import FrameSync, PlayheadSampler, Transport, TransportClock
from .factory import TransportRuntime, create_transport
from .ipc import InProcessStateSink
from .output import OscPadTrigger
from .state import PlaybackState, PlayheadPosition, TransportState

__version__ = "0.1.0"

__all__ = [
    "FrameSync",
    "PlayheadSampler",
    "Transport",
    "TransportClock",
    "TransportRuntime",
    "create_transport",
    "InProcessStateSink",
    "OscPadTrigger",
    "PlaybackState",
    "PlayheadPosition",
    "TransportState",
]
