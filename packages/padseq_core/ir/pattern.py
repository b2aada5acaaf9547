"""Pattern model: the step grid shared by the editor, transport and codec.

Layers:
    DrumPattern -> PatternTrack (one per pad, canonical order) -> PatternStep

All types are immutable; editing operations return new instances.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterator

from ..constants.pads import PAD_COUNT
from ..constants.tempo import MAX_BARS, MAX_BPM, MAX_NAME_BYTES, MIN_BARS, MIN_BPM
from .subdivision import Subdivision, total_steps

HANDS = ("L", "R")
MIN_FINGER = 1
MAX_FINGER = 5


@dataclass(frozen=True, slots=True)
class FingerDesignation:
    """Which hand and finger should play a hit.

    Fingers are numbered 1 (thumb) to 5 (pinky).
    """

    hand: str  # "L" or "R"
    finger: int  # 1-5

    def __post_init__(self) -> None:
        if self.hand not in HANDS:
            raise ValueError(f"hand must be 'L' or 'R', got {self.hand!r}")
        if not MIN_FINGER <= self.finger <= MAX_FINGER:
            raise ValueError(f"finger must be 1-5, got {self.finger!r}")

    def __str__(self) -> str:
        # Left hand is shown in parentheses on the grid
        return f"({self.finger})" if self.hand == "L" else str(self.finger)

    def to_dict(self) -> dict[str, Any]:
        return {"hand": self.hand, "finger": self.finger}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FingerDesignation:
        return cls(hand=data["hand"], finger=int(data["finger"]))


@dataclass(frozen=True, slots=True)
class PatternStep:
    """One cell of the grid.

    ``finger`` is set exactly when the step is active. ``velocity`` is
    carried along but has no effect on playback.
    """

    active: bool = False
    velocity: int | None = None
    finger: FingerDesignation | None = None

    def __post_init__(self) -> None:
        if self.active and self.finger is None:
            raise ValueError("active step requires a finger designation")
        if not self.active and self.finger is not None:
            raise ValueError("inactive step cannot carry a finger designation")

    @classmethod
    def hit(cls, finger: FingerDesignation, velocity: int | None = None) -> PatternStep:
        """Create an active step."""
        return cls(active=True, velocity=velocity, finger=finger)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"active": self.active}
        if self.velocity is not None:
            result["velocity"] = self.velocity
        if self.finger is not None:
            result["finger"] = self.finger.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PatternStep:
        finger = data.get("finger")
        return cls(
            active=bool(data.get("active", False)),
            velocity=data.get("velocity"),
            finger=FingerDesignation.from_dict(finger) if finger else None,
        )


EMPTY_STEP = PatternStep()


@dataclass(frozen=True, slots=True)
class PatternTrack:
    """All steps of one pad."""

    pad_id: str
    label: str
    default_finger: FingerDesignation
    steps: tuple[PatternStep, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[PatternStep]:
        return iter(self.steps)

    def is_active(self, step: int) -> bool:
        return 0 <= step < len(self.steps) and self.steps[step].active

    @property
    def active_steps(self) -> list[int]:
        """Indices of active steps (sorted)."""
        return [i for i, s in enumerate(self.steps) if s.active]

    def with_step(self, index: int, step: PatternStep) -> PatternTrack:
        """Return a copy with one step replaced."""
        steps = list(self.steps)
        steps[index] = step
        return replace(self, steps=tuple(steps))

    def to_dict(self) -> dict[str, Any]:
        return {
            "pad_id": self.pad_id,
            "label": self.label,
            "default_finger": self.default_finger.to_dict(),
            "steps": [s.to_dict() for s in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PatternTrack:
        return cls(
            pad_id=data["pad_id"],
            label=data.get("label", data["pad_id"]),
            default_finger=FingerDesignation.from_dict(data["default_finger"]),
            steps=tuple(PatternStep.from_dict(s) for s in data.get("steps", [])),
        )


@dataclass(frozen=True, slots=True)
class DrumPattern:
    """A complete multi-track pattern.

    Invariant: exactly one track per pad, every track holding
    ``bars * 4 * steps_per_beat`` steps.
    """

    id: str
    name: str
    bpm: int
    subdivision: Subdivision
    bars: int
    tracks: tuple[PatternTrack, ...]

    def __post_init__(self) -> None:
        if not MIN_BARS <= self.bars <= MAX_BARS:
            raise ValueError(f"bars must be {MIN_BARS}-{MAX_BARS}, got {self.bars}")
        if not MIN_BPM <= self.bpm <= MAX_BPM:
            raise ValueError(f"bpm must be {MIN_BPM}-{MAX_BPM}, got {self.bpm}")
        if len(self.name.encode("utf-8")) > MAX_NAME_BYTES:
            raise ValueError(f"name exceeds {MAX_NAME_BYTES} UTF-8 bytes")
        if len(self.tracks) != PAD_COUNT:
            raise ValueError(f"pattern needs {PAD_COUNT} tracks, got {len(self.tracks)}")
        expected = self.total_steps
        for track in self.tracks:
            if len(track.steps) != expected:
                raise ValueError(
                    f"track {track.pad_id} has {len(track.steps)} steps, expected {expected}"
                )

    @property
    def total_steps(self) -> int:
        return total_steps(self.bars, self.subdivision)

    def active_pads_at(self, step: int) -> list[str]:
        """Pad ids of every track active at a step."""
        return [t.pad_id for t in self.tracks if t.is_active(step)]

    @property
    def active_count(self) -> int:
        return sum(len(t.active_steps) for t in self.tracks)

    def with_track(self, index: int, track: PatternTrack) -> DrumPattern:
        """Return a copy with one track replaced."""
        tracks = list(self.tracks)
        tracks[index] = track
        return replace(self, tracks=tuple(tracks))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "bpm": self.bpm,
            "subdivision": self.subdivision.value,
            "bars": self.bars,
            "total_steps": self.total_steps,
            "tracks": [t.to_dict() for t in self.tracks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DrumPattern:
        """Create from dictionary (deserialization).

        Raises:
            ValueError: If the data violates a pattern invariant
            KeyError: If a required field is missing
        """
        return cls(
            id=data["id"],
            name=data["name"],
            bpm=int(data["bpm"]),
            subdivision=Subdivision(data["subdivision"]),
            bars=int(data["bars"]),
            tracks=tuple(PatternTrack.from_dict(t) for t in data["tracks"]),
        )
