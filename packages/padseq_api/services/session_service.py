"""Session service - bridge between the HTTP API and the pattern/transport core"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from padseq_core.editing import PatternStore
from padseq_core.ir import DrumPattern
from padseq_loop.engine import PlayheadSampler, Transport
from padseq_loop.factory import TransportRuntime, create_transport
from padseq_loop.ipc import InProcessStateSink

from .url_sync import UrlSync

logger = logging.getLogger(__name__)


# Global instance (managed by lifespan)
_session_service: "SessionService | None" = None


class SessionService:
    """Owns the pattern store, the transport runtime and the URL sync"""

    def __init__(
        self,
        store: PatternStore,
        runtime: TransportRuntime,
        url_sync: UrlSync,
    ) -> None:
        self.store = store
        self.runtime = runtime
        self.url_sync = url_sync
        self._frame_task: asyncio.Task[None] | None = None
        self._unsubscribe = store.subscribe(self._publish_pattern)

    @property
    def transport(self) -> Transport:
        return self.runtime.transport

    @property
    def playhead(self) -> PlayheadSampler:
        return self.runtime.playhead

    def get_state_sink(self) -> InProcessStateSink:
        """Get the state sink (for SSE endpoint)"""
        return self.runtime.state_sink

    def _publish_pattern(self, pattern: DrumPattern | None) -> None:
        summary: dict[str, Any] | None = None
        if pattern is not None:
            summary = {
                "id": pattern.id,
                "name": pattern.name,
                "bpm": pattern.bpm,
                "bars": pattern.bars,
                "subdivision": pattern.subdivision.value,
                "active_count": pattern.active_count,
            }
        self.runtime.state_sink.send("pattern", {"pattern": summary})

    async def start(self) -> None:
        """Connect audio output and start the render loop"""
        self.runtime.audio.connect()
        result = self.url_sync.load_from_url()
        if not result.success:
            logger.warning(f"Startup address rejected: {result.message}")
        self._frame_task = asyncio.create_task(self.runtime.frames.run())
        logger.info("Session started")

    async def stop(self) -> None:
        """Stop playback and background tasks"""
        self.transport.close()
        self.url_sync.close()
        self._unsubscribe()
        self.runtime.frames.stop()
        if self._frame_task is not None:
            self._frame_task.cancel()
            try:
                await self._frame_task
            except asyncio.CancelledError:
                pass
            self._frame_task = None
        self.runtime.audio.disconnect()
        logger.info("Session stopped")


def create_session_service(
    osc_host: str = "127.0.0.1",
    osc_port: int = 57120,
    osc_address: str = "/dirt/play",
    public_url: str = "http://localhost:8000/",
    url_sync_debounce: float = UrlSync.DEFAULT_DEBOUNCE,
    frame_rate: float = 60.0,
    clock_lookahead: float = 0.05,
) -> SessionService:
    """Create a SessionService with real I/O dependencies"""
    store = PatternStore()
    runtime = create_transport(
        store=store,
        osc_host=osc_host,
        osc_port=osc_port,
        osc_address=osc_address,
        lookahead=clock_lookahead,
        frame_rate=frame_rate,
    )
    url_sync = UrlSync(store, public_url, debounce=url_sync_debounce)
    return SessionService(store=store, runtime=runtime, url_sync=url_sync)


def get_session_service() -> SessionService:
    """
    FastAPI dependency to get the SessionService instance.

    Returns:
        SessionService instance

    Raises:
        RuntimeError: If service is not initialized
    """
    if _session_service is None:
        raise RuntimeError("SessionService not initialized. Ensure app lifespan is running.")
    return _session_service


@asynccontextmanager
async def lifespan(**kwargs: Any) -> AsyncGenerator[SessionService, None]:
    """
    Lifespan context manager for FastAPI.

    Args:
        **kwargs: Passed through to create_session_service()
    """
    global _session_service
    _session_service = create_session_service(**kwargs)
    await _session_service.start()
    logger.info("Transport ready")

    try:
        yield _session_service
    finally:
        await _session_service.stop()
        _session_service = None
        logger.info("Transport shut down")
