"""GET/POST/PUT/DELETE /pattern/* - Pattern editing endpoints"""

import logging
from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from padseq_core.constants.tempo import MAX_BARS, MIN_BARS
from padseq_core.editing import PatternStore
from padseq_core.ir import DrumPattern, FingerDesignation, Subdivision
from padseq_api.dependencies import get_store
from padseq_api.responses import command_response

logger = logging.getLogger(__name__)

router = APIRouter()


class CreatePatternRequest(BaseModel):
    """Request to create an empty pattern"""

    name: str | None = Field(default=None, description="Pattern name (default: 'New Pattern')")
    bars: int = Field(default=1, ge=MIN_BARS, le=MAX_BARS)
    subdivision: Subdivision = Subdivision.SIXTEENTH


class NameRequest(BaseModel):
    name: str


class BpmRequest(BaseModel):
    bpm: float = Field(gt=0, description="Beats per minute (rounded, clamped to 40-200)")


class BarsRequest(BaseModel):
    bars: int = Field(ge=MIN_BARS, le=MAX_BARS, description="Pattern length in bars")


class SubdivisionRequest(BaseModel):
    subdivision: Subdivision


class FingerRequest(BaseModel):
    """Finger designation for one step"""

    hand: Literal["L", "R"]
    finger: int = Field(ge=1, le=5, description="1 = thumb, 5 = pinky")


def _require_pattern(store: PatternStore) -> DrumPattern:
    if store.current is None:
        raise HTTPException(status_code=404, detail="No pattern loaded")
    return store.current


@router.get("")
async def get_pattern(store: PatternStore = Depends(get_store)) -> dict[str, Any]:
    """Get the current pattern"""
    return _require_pattern(store).to_dict()


@router.post("")
async def create_pattern(
    req: CreatePatternRequest | None = None,
    store: PatternStore = Depends(get_store),
) -> dict[str, Any]:
    """Replace the current pattern with an empty one"""
    req = req or CreatePatternRequest()
    command_response(
        store.create_empty_pattern(name=req.name, bars=req.bars, subdivision=req.subdivision)
    )
    return _require_pattern(store).to_dict()


@router.put("")
async def replace_pattern(
    body: dict[str, Any],
    store: PatternStore = Depends(get_store),
) -> dict[str, Any]:
    """Load a full pattern (as returned by GET /pattern)"""
    try:
        pattern = DrumPattern.from_dict(body)
    except (KeyError, TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid pattern: {e}")
    store.set_pattern(pattern)
    return pattern.to_dict()


@router.delete("")
async def reset_pattern(store: PatternStore = Depends(get_store)) -> dict[str, Any]:
    """Discard the current pattern"""
    return command_response(store.reset_pattern())


@router.put("/name")
async def set_name(req: NameRequest, store: PatternStore = Depends(get_store)) -> dict[str, Any]:
    return command_response(store.set_pattern_name(req.name))


@router.put("/bpm")
async def set_bpm(req: BpmRequest, store: PatternStore = Depends(get_store)) -> dict[str, Any]:
    """Set the pattern tempo; the transport follows it"""
    return command_response(store.set_bpm(req.bpm))


@router.put("/bars")
async def set_bars(req: BarsRequest, store: PatternStore = Depends(get_store)) -> dict[str, Any]:
    return command_response(store.set_bars(req.bars))


@router.put("/subdivision")
async def set_subdivision(
    req: SubdivisionRequest,
    store: PatternStore = Depends(get_store),
) -> dict[str, Any]:
    """Change the grid resolution; reports how many steps were dropped"""
    return command_response(store.set_subdivision(req.subdivision))


@router.post("/tracks/{track}/steps/{step}/toggle")
async def toggle_step(
    track: int,
    step: int,
    store: PatternStore = Depends(get_store),
) -> dict[str, Any]:
    return command_response(store.toggle_step(track, step))


@router.put("/tracks/{track}/steps/{step}/finger")
async def set_step_finger(
    track: int,
    step: int,
    req: FingerRequest,
    store: PatternStore = Depends(get_store),
) -> dict[str, Any]:
    finger = FingerDesignation(req.hand, req.finger)
    return command_response(store.update_step_finger(track, step, finger))
