import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from commons import limiter
from imposter.routes.game_routes import router


@pytest.fixture
def client(session, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", False)
    app = FastAPI()
    app.state.limiter = limiter
    app.state.game_session = session
    app.include_router(router)
    return TestClient(app)


def _start(client, names=("Ann", "Bo", "Cy"), **settings):
    body = {"player_names": list(names)}
    if settings:
        body["settings"] = settings
    return client.post("/api/session/start", json=body)


def test_categories(client):
    response = client.get("/api/categories")

    assert response.status_code == 200
    assert "Historical Events" in response.json()["categories"]
    assert len(response.json()["categories"]) == 14


def test_full_round_over_http(client, clock):
    started = _start(client, imposter_count=1, enabled_categories=["Foods"])
    assert started.status_code == 200
    assert started.json()["phase"] == "distribution"

    player_ids = [p["player_id"] for p in started.json()["players"]]
    for player_id in player_ids:
        card = client.get(f"/api/session/players/{player_id}/card")
        assert card.status_code == 200
        viewed = client.post(f"/api/session/players/{player_id}/viewed")
        assert viewed.status_code == 200
    assert viewed.json()["phase"] == "discussion"

    clock.advance(65)
    assert client.get("/api/session/timer").json()["elapsed_seconds"] == 65

    revealed = client.post("/api/session/reveal")
    assert revealed.status_code == 200
    body = revealed.json()
    assert body["phase"] == "reveal"
    assert body["stats"]["discussion_duration_seconds"] == 65
    assert body["round"]["category"] == "Foods"
    assert len(body["imposters"]) == 1

    again = client.post("/api/session/play-again")
    assert again.status_code == 200
    assert again.json()["phase"] == "distribution"
    new_ids = {p["player_id"] for p in again.json()["players"]}
    assert new_ids.isdisjoint(player_ids)


def test_start_with_too_few_players_is_bad_request(client):
    response = _start(client, names=["Ann", "Bo"])

    assert response.status_code == 400
    state = client.get("/api/session").json()
    assert state["phase"] == "setup"
    assert state["error"]

    cleared = client.delete("/api/session/error")
    assert cleared.status_code == 200
    assert client.get("/api/session").json()["error"] is None


def test_invalid_transition_is_conflict(client):
    response = client.post("/api/session/reveal")

    assert response.status_code == 409
    assert client.get("/api/session").json()["phase"] == "setup"


def test_unknown_player_is_not_found(client):
    _start(client)

    response = client.post(
        "/api/session/players/00000000-0000-4000-8000-000000000000/viewed"
    )

    assert response.status_code == 404


def test_malformed_player_id_is_bad_request(client):
    _start(client)

    response = client.post("/api/session/players/not-a-uuid/viewed")

    assert response.status_code == 400


def test_unknown_category_is_rejected_by_validation(client):
    response = client.put(
        "/api/session/settings",
        json={"enabled_categories": ["Dinosaurs"]},
    )

    assert response.status_code == 422


def test_update_settings_in_setup(client):
    response = client.put(
        "/api/session/settings",
        json={"imposter_count": 2, "hint_difficulty": 8},
    )

    assert response.status_code == 200
    assert response.json()["settings"]["imposter_count"] == 2


def test_change_settings_after_reveal(client):
    started = _start(client)
    for player in started.json()["players"]:
        client.post(f"/api/session/players/{player['player_id']}/viewed")
    client.post("/api/session/reveal")

    response = client.post("/api/session/change-settings")

    assert response.status_code == 200
    assert response.json()["phase"] == "setup"
    assert response.json()["players"] == []
