"""POST/GET/PUT /playback/* - Transport control endpoints"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from padseq_api.dependencies import get_transport
from padseq_api.responses import command_response
from padseq_api.services.session_service import SessionService, get_session_service
from padseq_loop.engine import Transport

logger = logging.getLogger(__name__)

router = APIRouter()


class BpmRequest(BaseModel):
    """Request to change BPM (clamped to 40-200)"""

    bpm: float = Field(gt=0, description="Beats per minute")


class BpmAdjustRequest(BaseModel):
    delta: float = Field(description="BPM change, may be negative")


class LoopRequest(BaseModel):
    looping: bool


class PlayheadRequest(BaseModel):
    step: int = Field(description="Target step (clamped to the pattern)")


@router.get("/status")
async def get_status(transport: Transport = Depends(get_transport)) -> dict[str, Any]:
    """Get current transport status"""
    return transport.get_status()


@router.post("/play")
async def play(transport: Transport = Depends(get_transport)) -> dict[str, Any]:
    """Start or resume playback"""
    return command_response(transport.play())


@router.post("/pause")
async def pause(transport: Transport = Depends(get_transport)) -> dict[str, Any]:
    """Pause playback, keeping the exact position"""
    return command_response(transport.pause())


@router.post("/stop")
async def stop(transport: Transport = Depends(get_transport)) -> dict[str, Any]:
    """Stop playback and reset to the beginning"""
    return command_response(transport.stop())


@router.post("/toggle")
async def toggle(transport: Transport = Depends(get_transport)) -> dict[str, Any]:
    return command_response(transport.toggle())


@router.post("/reset")
async def reset(transport: Transport = Depends(get_transport)) -> dict[str, Any]:
    """Stop and restore the default tempo"""
    return command_response(transport.reset())


@router.put("/bpm")
async def set_bpm(req: BpmRequest, transport: Transport = Depends(get_transport)) -> dict[str, Any]:
    return command_response(transport.set_bpm(req.bpm))


@router.post("/bpm/adjust")
async def adjust_bpm(
    req: BpmAdjustRequest,
    transport: Transport = Depends(get_transport),
) -> dict[str, Any]:
    return command_response(transport.adjust_bpm(req.delta))


@router.put("/loop")
async def set_loop(req: LoopRequest, transport: Transport = Depends(get_transport)) -> dict[str, Any]:
    return command_response(transport.set_looping(req.looping))


@router.put("/playhead")
async def set_playhead(
    req: PlayheadRequest,
    transport: Transport = Depends(get_transport),
) -> dict[str, Any]:
    """Move the playhead (ignored while playing)"""
    return command_response(transport.set_playhead(req.step))


@router.post("/seek/forward")
async def seek_forward(
    steps: int = Query(default=1, ge=1),
    transport: Transport = Depends(get_transport),
) -> dict[str, Any]:
    return command_response(transport.seek_forward(steps))


@router.post("/seek/backward")
async def seek_backward(
    steps: int = Query(default=1, ge=1),
    transport: Transport = Depends(get_transport),
) -> dict[str, Any]:
    return command_response(transport.seek_backward(steps))


@router.get("/playhead")
async def get_playhead(
    service: SessionService = Depends(get_session_service),
) -> dict[str, Any]:
    """Playhead sampled from the clock (step, bar, beat, progress)"""
    return service.playhead.sample().to_dict()
