"""padseq audio output."""

from .osc_trigger import OscPadTrigger
from .voices import PAD_VOICES, PadVoice

__all__ = ["OscPadTrigger", "PAD_VOICES", "PadVoice"]
