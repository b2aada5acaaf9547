"""padseq API services."""

from .session_service import SessionService, create_session_service, get_session_service
from .url_sync import UrlSync

__all__ = ["SessionService", "create_session_service", "get_session_service", "UrlSync"]
