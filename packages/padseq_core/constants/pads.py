"""Pad layout of the 18-pad finger drum controller.

The order of PAD_IDS is the canonical track order. It is shared by the
pattern model and the share codec, so it must never be reordered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True)
class PadInfo:
    """Static description of one controller pad."""

    pad_id: str
    label: str
    short_label: str
    row: int  # Physical row on the controller (1 = top)
    default_hand: str  # "L" or "R"
    default_finger: int  # 1 (thumb) - 5 (pinky)
    long_bar: bool = False  # Snare and kick pads span the whole row


PADS: Final[tuple[PadInfo, ...]] = (
    PadInfo("crash_l", "Crash L", "CrL", 1, "L", 4),
    PadInfo("hihat_close_l", "Hi-hat L", "HHL", 1, "L", 3),
    PadInfo("hihat_open", "Hi-hat Open", "HHO", 1, "R", 3),
    PadInfo("hihat_close_r", "Hi-hat R", "HHR", 1, "R", 3),
    PadInfo("crash_r", "Crash R", "CrR", 1, "R", 4),
    PadInfo("ride_cup", "Ride Cup", "RdC", 2, "L", 4),
    PadInfo("snare", "Snare", "Snr", 2, "R", 2, long_bar=True),
    PadInfo("ride_bow", "Ride Bow", "RdB", 2, "R", 4),
    PadInfo("tom_low_l", "Low Tom L", "LTL", 3, "L", 4),
    PadInfo("tom_mid_l", "Mid Tom L", "MTL", 3, "L", 3),
    PadInfo("tom_high_l", "Hi Tom L", "HTL", 3, "L", 2),
    PadInfo("snare_rim_open", "Rim Open", "RmO", 3, "R", 2),
    PadInfo("tom_high_r", "Hi Tom R", "HTR", 3, "R", 2),
    PadInfo("tom_mid_r", "Mid Tom R", "MTR", 3, "R", 3),
    PadInfo("tom_low_r", "Low Tom R", "LTR", 3, "R", 4),
    PadInfo("snare_rim_closed", "Rim Closed", "RmC", 4, "L", 1),
    PadInfo("kick", "Kick", "Kck", 4, "R", 1, long_bar=True),
    PadInfo("splash", "Splash", "Spl", 4, "R", 1),
)

PAD_IDS: Final[tuple[str, ...]] = tuple(pad.pad_id for pad in PADS)
PAD_COUNT: Final[int] = len(PADS)

_PADS_BY_ID: Final[dict[str, PadInfo]] = {pad.pad_id: pad for pad in PADS}


def get_pad(pad_id: str) -> PadInfo:
    """Look up a pad by id.

    Raises:
        KeyError: If the pad id is unknown
    """
    return _PADS_BY_ID[pad_id]


def pad_index(pad_id: str) -> int:
    """Canonical track index of a pad."""
    return PAD_IDS.index(pad_id)
