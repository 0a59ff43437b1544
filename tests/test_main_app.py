import importlib

import pytest
from fastapi.testclient import TestClient

from commons import limiter


@pytest.fixture
def main_module(tmp_path, monkeypatch):
    # Importing main configures file logging in the working directory
    monkeypatch.chdir(tmp_path)
    return importlib.import_module("main")


@pytest.fixture
def app_client(main_module, session, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    app = main_module.create_app(game_session=session)
    yield TestClient(app, base_url="http://localhost")
    limiter.reset()


def test_create_app_wires_the_given_session(main_module, session):
    app = main_module.create_app(game_session=session)

    assert app.state.game_session is session
    assert app.state.limiter is limiter


def test_session_routes_are_not_cacheable(app_client, session):
    state = app_client.get("/api/session")
    assert state.status_code == 200
    assert state.headers["Cache-Control"] == "no-store"
    assert state.headers["X-Frame-Options"] == "DENY"
    assert state.headers["X-Content-Type-Options"] == "nosniff"

    started = app_client.post(
        "/api/session/start", json={"player_names": ["Ann", "Bo", "Cy"]}
    )
    player_id = started.json()["players"][0]["player_id"]
    card = app_client.get(f"/api/session/players/{player_id}/card")

    assert card.status_code == 200
    assert card.headers["Cache-Control"] == "no-store"

    categories = app_client.get("/api/categories")
    assert "Cache-Control" not in categories.headers


def test_request_id_is_generated_or_echoed(app_client):
    generated = app_client.get("/api/session")
    echoed = app_client.get(
        "/api/session", headers={"X-Request-ID": "table-42"}
    )

    assert generated.headers["X-Request-ID"]
    assert echoed.headers["X-Request-ID"] == "table-42"


def test_unknown_host_is_rejected(app_client):
    response = app_client.get(
        "/api/session", headers={"host": "evil.example.com"}
    )

    assert response.status_code == 400


def test_start_is_rate_limited(app_client, main_module):
    limit = int(main_module.cfg.RATE_LIMIT_GENERATE.split("/")[0])
    body = {"player_names": ["Ann", "Bo"]}

    for _ in range(limit):
        assert app_client.post("/api/session/start", json=body).status_code == 400

    response = app_client.post("/api/session/start", json=body)

    assert response.status_code == 429


def test_default_session_shares_one_random_source(main_module):
    session = main_module.build_game_session()

    assert session._content_client._rng is session._role_assigner._rng
