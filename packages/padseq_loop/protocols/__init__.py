"""
padseq Loop Protocols

Abstract interfaces for testability via dependency injection.
Uses typing.Protocol for structural subtyping (duck typing).
"""

from .output import (
    AudioTrigger,
    FrameScheduler,
    PreciseScheduler,
    StateSink,
    TimedCallback,
)

__all__ = [
    "AudioTrigger",
    "FrameScheduler",
    "PreciseScheduler",
    "StateSink",
    "TimedCallback",
]
