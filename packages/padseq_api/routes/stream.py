"""GET /stream - transport and pattern events as Server-Sent Events"""

import asyncio
import json
import time
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends
from starlette.responses import StreamingResponse

from padseq_api.config import settings
from padseq_api.services.session_service import SessionService, get_session_service
from padseq_loop.ipc import InProcessStateSink

router = APIRouter()


def _sse_event(event_type: str, data: object, event_id: int | None = None) -> str:
    """One SSE frame; ``event_id`` lets clients spot gaps after a reconnect."""
    lines = [f"event: {event_type}", f"data: {json.dumps(data)}"]
    if event_id is not None:
        lines.insert(0, f"id: {event_id}")
    return "\n".join(lines) + "\n\n"


async def _event_stream(sink: InProcessStateSink, heartbeat: float) -> AsyncIterator[str]:
    """
    Relay sink events to one client.

    Starts with a ``connected`` frame reporting how many events the sink
    has already dropped. Sink events are numbered from 1; a ``heartbeat``
    frame (unnumbered) fills every idle gap of ``heartbeat`` seconds.
    """
    yield _sse_event("connected", {"timestamp": time.time(), "dropped": sink.dropped})

    event_id = 0
    while True:
        try:
            event = await asyncio.wait_for(sink.queue.get(), timeout=heartbeat)
        except asyncio.TimeoutError:
            yield _sse_event("heartbeat", {"timestamp": time.time()})
            continue
        event_id += 1
        yield _sse_event(event["type"], event["data"], event_id)


@router.get("/stream")
async def stream_events(
    service: SessionService = Depends(get_session_service),
) -> StreamingResponse:
    """SSE stream of transport and pattern events.

    Event types: ``connected`` (once), ``status`` (playback state and tempo),
    ``position`` (committed steps), ``pattern`` (loaded, edited or cleared)
    and ``heartbeat``.
    """
    return StreamingResponse(
        _event_stream(service.get_state_sink(), settings.sse_heartbeat_interval),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
