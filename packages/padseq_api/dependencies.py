"""FastAPI dependencies for padseq API."""

from fastapi import Depends

from padseq_core.editing import PatternStore
from padseq_loop.engine import Transport

from padseq_api.services.session_service import SessionService, get_session_service
from padseq_api.services.url_sync import UrlSync


def get_store(service: SessionService = Depends(get_session_service)) -> PatternStore:
    """Dependency to get the pattern store."""
    return service.store


def get_transport(service: SessionService = Depends(get_session_service)) -> Transport:
    """
    Dependency to get the transport.

    Usage:
        @router.post("/play")
        async def play(transport: Transport = Depends(get_transport)):
            return transport.play().to_dict()
    """
    return service.transport


def get_url_sync(service: SessionService = Depends(get_session_service)) -> UrlSync:
    """Dependency to get the URL sync service."""
    return service.url_sync
