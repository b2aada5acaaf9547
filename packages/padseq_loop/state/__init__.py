"""padseq transport state."""

from .transport_state import PlaybackState, PlayheadPosition, TransportState

__all__ = ["PlaybackState", "PlayheadPosition", "TransportState"]
