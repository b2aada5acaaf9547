"""Pad -> sampler voice table.

Sample names follow a SuperDirt-style sample library. Paired pads (left
and right toms, crashes, hi-hats) share one sample; the right-hand copy
is pitched up slightly so the two sides stay distinguishable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final


@dataclass(frozen=True, slots=True)
class PadVoice:
    """How one pad sounds."""

    sample: str
    volume_db: float = 0.0
    rate: float = 1.0

    @property
    def gain(self) -> float:
        """Linear amplitude for ``volume_db``."""
        return 10 ** (self.volume_db / 20)

    def to_params(self) -> dict[str, Any]:
        """OSC parameters for one hit."""
        return {"s": self.sample, "gain": round(self.gain, 4), "speed": self.rate}


PAD_VOICES: Final[dict[str, PadVoice]] = {
    "crash_l": PadVoice("crash", -3),
    "hihat_close_l": PadVoice("hihat_closed", -6),
    "hihat_open": PadVoice("hihat_open", -6),
    "hihat_close_r": PadVoice("hihat_closed", -6),
    "crash_r": PadVoice("crash", -3, rate=1.03),
    "ride_cup": PadVoice("ride_bell", -6),
    "snare": PadVoice("snare", -3),
    "ride_bow": PadVoice("ride", -6),
    "tom_low_l": PadVoice("tom_low", -3),
    "tom_mid_l": PadVoice("tom_mid", -3),
    "tom_high_l": PadVoice("tom_high", -3),
    "snare_rim_open": PadVoice("snare_rim_open", -6),
    "tom_high_r": PadVoice("tom_high", -3, rate=1.05),
    "tom_mid_r": PadVoice("tom_mid", -3, rate=1.05),
    "tom_low_r": PadVoice("tom_low", -3, rate=1.05),
    "snare_rim_closed": PadVoice("snare_rim_closed", -8),
    "kick": PadVoice("kick", 0),
    "splash": PadVoice("splash", -6),
}
