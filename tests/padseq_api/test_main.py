"""Tests for root and health endpoints"""

import pytest
from padseq_core.codec import encode_pattern
from padseq_core.editing import create_empty_pattern, toggle_step


def test_root_returns_api_info(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "padseq API"
    assert data["docs"] == "/docs"


def test_health_reports_components(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["components"]["audio"]["ready"] is True
    assert data["components"]["transport"]["playback_state"] == "stopped"
    assert data["components"]["pattern"]["loaded"] is True
    assert "late_count" in data["components"]["clock"]


def test_health_degraded_when_audio_not_ready(client, session):
    session.runtime.audio.ready = False
    assert client.get("/health").json()["status"] == "degraded"


def test_root_with_pattern_param_loads_and_redirects(client, store):
    shared = toggle_step(create_empty_pattern(name="Shared", bpm=96), 16, 0)
    encoded = encode_pattern(shared)

    response = client.get(
        "/", params={"pattern": encoded, "view": "grid"}, follow_redirects=False
    )

    assert response.status_code == 307
    location = response.headers["location"]
    assert "pattern=" not in location
    assert "view=grid" in location
    assert store.current.name == "Shared"
    assert store.current.bpm == 96
    assert store.current.tracks[16].steps[0].active


def test_root_with_invalid_pattern_param(client, store):
    before = store.current
    response = client.get("/", params={"pattern": "not-a-pattern"}, follow_redirects=False)
    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid pattern URL"
    assert store.current is before


def test_uninitialized_service_raises():
    from padseq_api.services.session_service import get_session_service

    with pytest.raises(RuntimeError, match="not initialized"):
        get_session_service()


def test_root_with_empty_pattern_param_returns_info(client, store):
    before = store.current
    response = client.get("/?pattern=", follow_redirects=False)
    assert response.status_code == 200
    assert response.json()["name"] == "padseq API"
    assert store.current is before
