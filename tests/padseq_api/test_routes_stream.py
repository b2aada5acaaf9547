"""Tests for /stream endpoint (Server-Sent Events)

SSE streams never end, so the generator is driven directly instead of
through the test client.
"""

import json

import pytest
from padseq_api.routes.stream import _event_stream, _sse_event
from padseq_loop.ipc import InProcessStateSink


def _data(frame: str) -> dict:
    return json.loads(frame.split("data: ", 1)[1])


def test_sse_event_formatting():
    assert _sse_event("position", {"step": 3}) == 'event: position\ndata: {"step": 3}\n\n'


def test_sse_event_with_id():
    assert _sse_event("status", {}, event_id=7) == "id: 7\nevent: status\ndata: {}\n\n"


@pytest.mark.asyncio
async def test_event_stream_starts_with_connected():
    sink = InProcessStateSink()

    gen = _event_stream(sink, heartbeat=0.01)
    first = await gen.__anext__()
    await gen.aclose()

    assert first.startswith("event: connected\n")
    assert "timestamp" in _data(first)
    assert _data(first)["dropped"] == 0


@pytest.mark.asyncio
async def test_connected_reports_events_already_dropped():
    sink = InProcessStateSink(maxsize=1)
    sink.send_status({"playback_state": "playing"})
    sink.send_status({"playback_state": "stopped"})

    gen = _event_stream(sink, heartbeat=0.01)
    first = await gen.__anext__()
    await gen.aclose()

    assert _data(first)["dropped"] == 1


@pytest.mark.asyncio
async def test_event_stream_numbers_sink_events_and_fills_gaps_with_heartbeats():
    sink = InProcessStateSink()
    sink.send_status({"playback_state": "playing"})
    sink.send_position({"step": 0})

    gen = _event_stream(sink, heartbeat=0.01)
    frames = [await gen.__anext__() for _ in range(4)]
    await gen.aclose()

    assert frames[1].startswith("id: 1\nevent: status\n")
    assert _data(frames[1]) == {"playback_state": "playing"}
    assert frames[2].startswith("id: 2\nevent: position\n")
    assert frames[3].startswith("event: heartbeat\n")


@pytest.mark.asyncio
async def test_event_stream_reads_transport_events(session):
    sink: InProcessStateSink = session.get_state_sink()
    session.transport.play()

    gen = _event_stream(sink, heartbeat=0.01)
    await gen.__anext__()  # connected
    event = await gen.__anext__()
    await gen.aclose()

    assert "event: status\n" in event
    assert '"playback_state": "playing"' in event


def test_store_changes_publish_pattern_events(session, store):
    sink = session.get_state_sink()
    store.set_pattern_name("Renamed")

    events = []
    while not sink.queue.empty():
        events.append(sink.queue.get_nowait())

    pattern_events = [e for e in events if e["type"] == "pattern"]
    assert pattern_events[-1]["data"]["pattern"]["name"] == "Renamed"
