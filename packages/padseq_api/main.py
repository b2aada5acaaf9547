"""padseq HTTP API Server

Pattern editing, transport control and share links for the 18-pad
finger drum sequencer.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from padseq_api import __version__
from padseq_api.config import settings
from padseq_api.routes import pattern, playback, share, stream
from padseq_api.services.session_service import SessionService, get_session_service, lifespan
from padseq_core.codec import PATTERN_PARAM

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan_wrapper(app: FastAPI):
    """Start the session (transport, render loop, OSC output) for the app's lifetime."""
    async with lifespan(
        osc_host=settings.osc_host,
        osc_port=settings.osc_port,
        osc_address=settings.osc_address,
        public_url=settings.public_url,
        url_sync_debounce=settings.url_sync_debounce,
        frame_rate=settings.frame_rate,
        clock_lookahead=settings.clock_lookahead,
    ):
        yield


# Create FastAPI app
app = FastAPI(
    title="padseq API",
    version=__version__,
    description="Rhythm pattern editor and player for an 18-pad finger drum controller",
    lifespan=lifespan_wrapper,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(pattern.router, prefix="/pattern", tags=["pattern"])
app.include_router(playback.router, prefix="/playback", tags=["playback"])
app.include_router(share.router, prefix="/share", tags=["share"])
app.include_router(stream.router, tags=["stream"])


@app.get("/", response_model=None)
async def root(
    request: Request,
    service: SessionService = Depends(get_session_service),
) -> dict[str, Any] | RedirectResponse:
    """
    API information, or open a share link.

    A request carrying ``?pattern=`` loads that pattern and redirects to
    the same address without the parameter.
    """
    if request.query_params.get(PATTERN_PARAM):
        result = service.url_sync.load_from_url(str(request.url))
        if not result.success:
            raise HTTPException(status_code=422, detail=result.message)
        return RedirectResponse(url=result.data["address"], status_code=307)

    return {
        "name": "padseq API",
        "version": app.version,
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
async def health(service: SessionService = Depends(get_session_service)):
    """Health check with output and clock status"""
    runtime = service.runtime
    audio_ready = runtime.audio.is_ready

    return {
        "status": "healthy" if audio_ready else "degraded",
        "version": app.version,
        "components": {
            "audio": {"ready": audio_ready},
            "transport": service.transport.get_status(),
            "clock": runtime.clock.get_drift_stats(),
            "pattern": {"loaded": service.store.has_pattern},
        },
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "padseq_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
