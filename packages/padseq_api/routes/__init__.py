"""API route modules"""

from padseq_api.routes import pattern, playback, share, stream

__all__ = ["pattern", "playback", "share", "stream"]
