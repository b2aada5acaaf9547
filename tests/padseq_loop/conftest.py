"""Fixtures for transport tests"""

import pytest
from mocks import ManualClock, RecordingAudioTrigger, RecordingStateSink
from padseq_core.editing import PatternStore, create_empty_pattern
from padseq_loop.engine import FrameSync, Transport


@pytest.fixture
def store():
    """Store holding an empty 1-bar 16n pattern at 120 BPM"""
    return PatternStore(create_empty_pattern(name="Test"))


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def frames(clock):
    return FrameSync(now=clock.now)


@pytest.fixture
def audio():
    return RecordingAudioTrigger()


@pytest.fixture
def sink():
    return RecordingStateSink()


@pytest.fixture
def transport(store, clock, frames, audio, sink):
    t = Transport(store=store, clock=clock, frames=frames, audio=audio, state_sink=sink)
    yield t
    t.close()


@pytest.fixture
def kick_every_step(store):
    """Activate the kick on every step of the loaded pattern"""
    for step in range(store.current.total_steps):
        store.toggle_step(16, step)
    return store
