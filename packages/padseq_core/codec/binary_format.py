"""Binary share format.

Layout (big-endian, fixed order):

    version   1 byte   1 = legacy, 2 = triplet-capable
    flags     1 byte   bits 7-6: bars - 1
                       bits 5-4: subdivision code
                       bit 3:    triplet (version 2 only)
    bpm       2 bytes
    name      1 length byte + up to 255 bytes of UTF-8
    bitmaps   18 tracks x ceil(total_steps / 8) bytes, MSB first
    fingers   one nibble per active step in bitmap order, high nibble
              first: bit 3 = hand (1 = right), bits 2-0 = finger - 1
"""

from __future__ import annotations

import struct
import uuid
from typing import Final

from ..constants.pads import PADS
from ..constants.tempo import MAX_NAME_BYTES
from ..exceptions import PatternDecodeError, PatternEncodeError
from ..editing.operations import clamp_bpm, truncate_name
from ..ir.pattern import (
    EMPTY_STEP,
    DrumPattern,
    FingerDesignation,
    PatternStep,
    PatternTrack,
)
from ..ir.subdivision import Subdivision, total_steps

FORMAT_V1: Final[int] = 1
FORMAT_V2: Final[int] = 2

DECODED_VELOCITY: Final[int] = 100

# Version 1 only knows straight eighths, sixteenths and thirty-seconds
_V1_CODES: Final[dict[Subdivision, int]] = {
    Subdivision.EIGHTH: 0,
    Subdivision.SIXTEENTH: 1,
    Subdivision.THIRTY_SECOND: 2,
}
_V1_SUBDIVISIONS: Final[dict[int, Subdivision]] = {v: k for k, v in _V1_CODES.items()}

# Version 2 keeps the version 1 codes and adds quarters plus a triplet bit
_V2_BASE_CODES: Final[dict[Subdivision, int]] = {**_V1_CODES, Subdivision.QUARTER: 3}
_V2_BASES: Final[dict[int, Subdivision]] = {v: k for k, v in _V2_BASE_CODES.items()}

_TRIPLET_BIT: Final[int] = 0x08
_HAND_BIT: Final[int] = 0x08
_BPM: Final[struct.Struct] = struct.Struct(">H")


def format_version_for(subdivision: Subdivision) -> int:
    """Lowest format version able to carry a subdivision."""
    return FORMAT_V1 if subdivision in _V1_CODES else FORMAT_V2


def _encode_flags(pattern: DrumPattern, version: int) -> int:
    flags = (pattern.bars - 1) << 6
    if version == FORMAT_V1:
        return flags | _V1_CODES[pattern.subdivision] << 4
    flags |= _V2_BASE_CODES[pattern.subdivision.base] << 4
    if pattern.subdivision.is_triplet:
        flags |= _TRIPLET_BIT
    return flags


def _decode_flags(flags: int, version: int) -> tuple[int, Subdivision]:
    bars = (flags >> 6) + 1
    code = (flags >> 4) & 0x03
    if version == FORMAT_V1:
        # Unknown legacy codes fall back to sixteenths
        return bars, _V1_SUBDIVISIONS.get(code, Subdivision.SIXTEENTH)
    base = _V2_BASES[code]
    if flags & _TRIPLET_BIT:
        return bars, Subdivision(base.value[:-1] + "t")
    return bars, base


def _finger_nibble(finger: FingerDesignation) -> int:
    hand = _HAND_BIT if finger.hand == "R" else 0
    return hand | (finger.finger - 1)


def to_binary(pattern: DrumPattern) -> bytes:
    """
    Serialize a pattern to the binary share format.

    The id and step velocities are not stored.

    Raises:
        PatternEncodeError: If an active step has no finger designation
    """
    version = format_version_for(pattern.subdivision)
    total = pattern.total_steps
    bitmap_len = (total + 7) // 8

    out = bytearray()
    out.append(version)
    out.append(_encode_flags(pattern, version))
    out += _BPM.pack(pattern.bpm)

    name = pattern.name.encode("utf-8")[:MAX_NAME_BYTES]
    out.append(len(name))
    out += name

    by_pad = {track.pad_id: track for track in pattern.tracks}
    nibbles: list[int] = []
    for pad in PADS:
        bitmap = bytearray(bitmap_len)
        track = by_pad.get(pad.pad_id)
        if track is not None:
            for index, step in enumerate(track.steps[:total]):
                if not step.active:
                    continue
                if step.finger is None:
                    raise PatternEncodeError(f"active step {pad.pad_id}[{index}] has no finger")
                bitmap[index >> 3] |= 0x80 >> (index & 7)
                nibbles.append(_finger_nibble(step.finger))
        out += bitmap

    for i in range(0, len(nibbles), 2):
        high = nibbles[i]
        low = nibbles[i + 1] if i + 1 < len(nibbles) else 0
        out.append(high << 4 | low)

    return bytes(out)


class _Reader:
    """Bounds-checked cursor over the binary payload."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    def take(self, size: int) -> bytes:
        end = self._offset + size
        if end > len(self._data):
            raise PatternDecodeError(
                f"truncated data: need {end} bytes, have {len(self._data)}"
            )
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def byte(self) -> int:
        return self.take(1)[0]


def from_binary(data: bytes) -> DrumPattern:
    """
    Reconstruct a pattern from the binary share format.

    The decoded pattern gets a fresh ``shared-`` id and velocity 100 on
    every active step. Out-of-range tempos are clamped.

    Raises:
        PatternDecodeError: On unknown versions, truncated data or
            invalid finger values
    """
    reader = _Reader(data)

    version = reader.byte()
    if version not in (FORMAT_V1, FORMAT_V2):
        raise PatternDecodeError(f"unsupported format version {version}")

    bars, subdivision = _decode_flags(reader.byte(), version)
    (bpm,) = _BPM.unpack(reader.take(_BPM.size))
    name = reader.take(reader.byte()).decode("utf-8", errors="replace")

    total = total_steps(bars, subdivision)
    bitmap_len = (total + 7) // 8

    active: list[list[int]] = []
    for _pad in PADS:
        bitmap = reader.take(bitmap_len)
        active.append([i for i in range(total) if bitmap[i >> 3] & (0x80 >> (i & 7))])

    hit_count = sum(len(indices) for indices in active)
    packed = reader.take((hit_count + 1) // 2)
    fingers = []
    for i in range(hit_count):
        value = packed[i >> 1]
        nibble = value >> 4 if i % 2 == 0 else value & 0x0F
        finger = (nibble & 0x07) + 1
        if finger > 5:
            raise PatternDecodeError(f"invalid finger value {finger}")
        fingers.append(FingerDesignation("R" if nibble & _HAND_BIT else "L", finger))

    tracks = []
    finger_iter = iter(fingers)
    for pad, indices in zip(PADS, active):
        steps: list[PatternStep] = [EMPTY_STEP] * total
        for index in indices:
            steps[index] = PatternStep.hit(next(finger_iter), velocity=DECODED_VELOCITY)
        tracks.append(
            PatternTrack(
                pad_id=pad.pad_id,
                label=pad.label,
                default_finger=FingerDesignation(pad.default_hand, pad.default_finger),
                steps=tuple(steps),
            )
        )

    return DrumPattern(
        id=f"shared-{uuid.uuid4().hex[:12]}",
        name=truncate_name(name),
        bpm=clamp_bpm(bpm),
        subdivision=subdivision,
        bars=bars,
        tracks=tuple(tracks),
    )
