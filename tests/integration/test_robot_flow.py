from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from urllib.parse import urlparse

import pytest

from gammonbrain.domain.analyzers import MoveAnalyzerContext
from gammonbrain.infrastructure.gnubg import GnubgApiClient, GnubgIntegration
from gammonbrain.interface.http.app import create_app

PLUGINS_DIR = Path(__file__).resolve().parents[2] / "plugins"


class FlaskSession:
    """Routes ``requests``-style posts into a Flask test client."""

    def __init__(self, client) -> None:
        self._client = client

    def post(self, url, json=None, timeout=None):
        response = self._client.post(urlparse(url).path, json=json)
        return _Response(response)


class _Response:
    def __init__(self, response) -> None:
        self.status_code = response.status_code
        self.ok = 200 <= response.status_code < 400
        self._payload = response.get_json()

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


@pytest.fixture
def plugin_app(app_config, gnubg):
    config = replace(app_config, plugins_dir=PLUGINS_DIR)
    app = create_app(config, gnubg=gnubg)
    app.config.update(TESTING=True)
    return app


def test_robot_lifecycle(client):
    state = {
        "gameState": {
            "positionId": "4HPwATDgc/ABMA",
            "gamePhase": "bearoff",
            "availableMoves": [
                {"id": "a", "dieValue": 2, "to": 4, "origin": {"position": {"clockwise": 6, "counterclockwise": 19}}},
                {"id": "b", "dieValue": 5, "to": "off", "origin": {"position": {"clockwise": 5, "counterclockwise": 20}}},
            ],
        }
    }

    first = client.post("/api/v1/robots/bot/moves", json=state).get_json()
    assert first["move"]["id"] == "a"

    client.put("/api/v1/robots/bot/difficulty", json={"difficulty": "advanced"})
    for _ in range(5):
        advanced = client.post("/api/v1/robots/bot/moves", json=state).get_json()
        assert advanced["move"]["id"] == "b"

    assert client.delete("/api/v1/robots/bot").status_code == 204
    again = client.post("/api/v1/robots/bot/moves", json=state).get_json()
    assert again["move"]["id"] == "a"
    assert client.get("/api/v1/robots/bot").get_json()["difficulty"] == "intermediate"


def test_plugins_are_registered(plugin_app):
    payload = plugin_app.test_client().get("/api/v1/robots").get_json()
    assert "gnubg_move_analyzer" in payload["analyzers"]


def test_gnubg_plugin_consults_evaluation_service(plugin_app, hint_runner, positioned_moves):
    service = plugin_app.extensions["robot_ai_service"]
    plugin = service.registry.create("gnubg_move_analyzer")
    client = GnubgApiClient("http://gnubg.test", session=FlaskSession(plugin_app.test_client()))
    analyzer = type(plugin)(client=client)

    context = MoveAnalyzerContext(position_id="4HPwATDgc/ABMA")
    assert analyzer.select_move(positioned_moves, context) is positioned_moves[0]
    assert "set board 4HPwATDgc/ABMA" in hint_runner.calls[0]["input"]

    assert analyzer.select_move(positioned_moves) is positioned_moves[0]
    assert analyzer.select_move([], context) is None


def test_gnubg_plugin_falls_back_to_first_move_on_engine_error(app_config, fake_gnubg_binary, runner_factory, positioned_moves):
    crashing = runner_factory(stderr="boom", returncode=1)
    failing = GnubgIntegration(candidates=[fake_gnubg_binary], runner=crashing)
    app = create_app(replace(app_config, plugins_dir=PLUGINS_DIR), gnubg=failing)
    plugin_cls = type(app.extensions["robot_ai_service"].registry.create("gnubg_move_analyzer"))
    client = GnubgApiClient("http://gnubg.test", session=FlaskSession(app.test_client()))

    context = MoveAnalyzerContext(position_id="4HPwATDgc/ABMA")
    assert plugin_cls(client=client).select_move(positioned_moves, context) is positioned_moves[0]
    assert len(crashing.calls) == 1
