"""Test fixtures for padseq_api tests"""

import pytest
from fastapi.testclient import TestClient
from mocks import ManualClock, RecordingAudioTrigger
from padseq_api.main import app
from padseq_api.services.session_service import SessionService
from padseq_api.services.url_sync import UrlSync
from padseq_core.editing import PatternStore, create_empty_pattern
from padseq_loop.engine import FrameSync, PlayheadSampler, Transport
from padseq_loop.factory import TransportRuntime
from padseq_loop.ipc import InProcessStateSink

BASE_URL = "http://testserver/"


@pytest.fixture
def store():
    return PatternStore(create_empty_pattern(name="Groove"))


@pytest.fixture
def session(store):
    """SessionService wired to a manual clock and a recording audio trigger"""
    clock = ManualClock()
    frames = FrameSync(now=clock.now)
    audio = RecordingAudioTrigger()
    sink = InProcessStateSink()
    transport = Transport(store=store, clock=clock, frames=frames, audio=audio, state_sink=sink)
    playhead = PlayheadSampler(transport)
    runtime = TransportRuntime(
        transport=transport,
        clock=clock,
        frames=frames,
        audio=audio,
        playhead=playhead,
        state_sink=sink,
    )
    url_sync = UrlSync(store, BASE_URL, debounce=0.5)
    url_sync.load_from_url()
    service = SessionService(store=store, runtime=runtime, url_sync=url_sync)
    yield service
    transport.close()
    url_sync.close()


@pytest.fixture
def client(session, monkeypatch):
    """Create a test client backed by the fixture session (lifespan does not run)"""
    from padseq_api.services import session_service

    monkeypatch.setattr(session_service, "_session_service", session)
    return TestClient(app)
