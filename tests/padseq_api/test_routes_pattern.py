"""Tests for /pattern endpoints"""


def test_get_pattern(client):
    response = client.get("/pattern")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Groove"
    assert data["subdivision"] == "16n"
    assert len(data["tracks"]) == 18


def test_get_pattern_when_none_loaded(client, store):
    store.reset_pattern()
    response = client.get("/pattern")
    assert response.status_code == 404
    assert response.json()["detail"] == "No pattern loaded"


def test_create_pattern_defaults(client, store):
    response = client.post("/pattern")
    assert response.status_code == 200
    assert response.json()["name"] == "New Pattern"
    assert store.current.bars == 1


def test_create_pattern_with_options(client, store):
    response = client.post(
        "/pattern", json={"name": "Fill", "bars": 2, "subdivision": "8t"}
    )
    assert response.status_code == 200
    assert store.current.name == "Fill"
    assert store.current.total_steps == 2 * 4 * 3


def test_create_pattern_rejects_bars_out_of_range(client):
    response = client.post("/pattern", json={"bars": 5})
    assert response.status_code == 422


def test_replace_pattern_round_trips_json(client, store):
    body = client.get("/pattern").json()
    body["name"] = "Replaced"
    response = client.put("/pattern", json=body)
    assert response.status_code == 200
    assert store.current.name == "Replaced"


def test_replace_pattern_rejects_invalid_body(client, store):
    body = client.get("/pattern").json()
    body["tracks"] = body["tracks"][:3]
    response = client.put("/pattern", json=body)
    assert response.status_code == 422
    assert store.current.name == "Groove"


def test_delete_pattern(client, store):
    response = client.delete("/pattern")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert store.current is None

    # Second reset is a guarded no-op
    assert client.delete("/pattern").json()["status"] == "ignored"


def test_set_name(client, store):
    response = client.put("/pattern/name", json={"name": "Breakbeat"})
    assert response.json() == {"status": "ok", "name": "Breakbeat"}
    assert store.current.name == "Breakbeat"


def test_set_bars(client, store):
    response = client.put("/pattern/bars", json={"bars": 4})
    assert response.status_code == 200
    assert response.json()["total_steps"] == 64
    assert store.current.bars == 4


def test_set_bars_unchanged_is_ignored(client):
    assert client.put("/pattern/bars", json={"bars": 1}).json()["status"] == "ignored"


def test_set_bars_out_of_range(client):
    assert client.put("/pattern/bars", json={"bars": 0}).status_code == 422


def test_set_subdivision_reports_dropped_steps(client, store):
    store.toggle_step(16, 1)  # off-beat sixteenth, lost on an eighth grid
    store.toggle_step(16, 2)

    response = client.put("/pattern/subdivision", json={"subdivision": "8n"})

    assert response.status_code == 200
    data = response.json()
    assert data["dropped"] == 1
    assert data["total_steps"] == 8
    assert store.current.tracks[16].steps[1].active


def test_set_subdivision_rejects_unknown_value(client):
    assert client.put("/pattern/subdivision", json={"subdivision": "64n"}).status_code == 422


def test_toggle_step(client, store):
    response = client.post("/pattern/tracks/16/steps/0/toggle")
    assert response.status_code == 200
    data = response.json()
    assert data["active"] is True
    assert store.current.tracks[16].steps[0].active


def test_toggle_step_out_of_range_is_ignored(client, store):
    before = store.current
    response = client.post("/pattern/tracks/18/steps/0/toggle")
    assert response.status_code == 200
    assert response.json()["status"] == "ignored"
    assert store.current is before


def test_set_step_finger(client, store):
    client.post("/pattern/tracks/0/steps/3/toggle")
    response = client.put("/pattern/tracks/0/steps/3/finger", json={"hand": "R", "finger": 2})
    assert response.status_code == 200
    finger = store.current.tracks[0].steps[3].finger
    assert (finger.hand, finger.finger) == ("R", 2)


def test_set_step_finger_on_inactive_step_is_ignored(client):
    response = client.put("/pattern/tracks/0/steps/3/finger", json={"hand": "L", "finger": 1})
    assert response.json()["status"] == "ignored"


def test_set_step_finger_validates_body(client):
    response = client.put("/pattern/tracks/0/steps/3/finger", json={"hand": "X", "finger": 6})
    assert response.status_code == 422


def test_set_bpm_is_followed_by_transport(client, store, session):
    response = client.put("/pattern/bpm", json={"bpm": 87.5})
    assert response.json() == {"status": "ok", "bpm": 88}
    assert store.current.bpm == 88
    assert session.transport.state.bpm == 88
