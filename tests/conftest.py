from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable

import pytest

from gammonbrain.domain.analyzers import Move, MoveOrigin, PointPosition
from gammonbrain.infrastructure.config import AppConfig
from gammonbrain.infrastructure.gnubg import GnubgIntegration
from gammonbrain.interface.http.app import create_app

HINT_OUTPUT = """\
GNU Backgammon  Position ID: 4HPwATDgc/ABMA
                Match ID   : cAkAAAAAAAAA

    1. Cubeful 0-ply    8/4 6/4                      Eq.:  +0.166
       0.551 0.162 0.006 - 0.449 0.124 0.005
    2. Cubeful 0-ply    24/20 13/11                  Eq.:  -0.018 ( -0.184)
       0.515 0.141 0.006 - 0.485 0.127 0.005
"""


def _move(move_id: str, die_value: int, clockwise: int | None = None, to: int | str | None = None) -> Move:
    origin = None
    if clockwise is not None:
        origin = MoveOrigin(position=PointPosition(clockwise=clockwise, counterclockwise=25 - clockwise))
    return Move(id=move_id, die_value=die_value, origin=origin, player="robot1", move_kind="point-to-point", to=to)


@pytest.fixture
def make_move() -> Callable[..., Move]:
    return _move


@pytest.fixture
def positioned_moves() -> list[Move]:
    """Three moves with origins at clockwise 10, 20 and 5."""
    return [_move("1", 6, clockwise=10), _move("2", 3, clockwise=20), _move("3", 1, clockwise=5)]


@pytest.fixture
def bare_moves() -> list[Move]:
    """Three moves without origins, die values 1, 2 and 3."""
    return [_move("move1", 1, to=23), _move("move2", 2, to=11), _move("move3", 3, to=5)]


class FakeRunner:
    """Stands in for ``subprocess.run`` and records every invocation."""

    def __init__(self, stdout: str = "", stderr: str = "", returncode: int = 0, raises: Exception | None = None):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.raises = raises
        self.calls: list[dict] = []

    def __call__(self, args, **kwargs):
        self.calls.append({"args": list(args), **kwargs})
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout, stderr=self.stderr)


@pytest.fixture
def fake_gnubg_binary(tmp_path: Path) -> Path:
    binary = tmp_path / "gnubg" / "gnubg"
    binary.parent.mkdir()
    binary.write_text("#!/bin/sh\n", encoding="utf-8")
    binary.chmod(0o755)
    return binary


@pytest.fixture
def hint_runner() -> FakeRunner:
    return FakeRunner(stdout=HINT_OUTPUT)


@pytest.fixture
def gnubg(fake_gnubg_binary: Path, hint_runner: FakeRunner) -> GnubgIntegration:
    return GnubgIntegration(
        candidates=[fake_gnubg_binary],
        runner=hint_runner,
        which=lambda name: None,
        timeout=5.0,
    )


@pytest.fixture
def app_config() -> AppConfig:
    """Provide a configuration tuned for isolated tests."""
    return AppConfig(
        gnubg_api_url="http://gnubg.test",
        gnubg_timeout_seconds=5.0,
        flask_env="test",
        additional={"STRUCTLOG_LEVEL": "WARNING"},
    )


@pytest.fixture
def app(app_config: AppConfig, gnubg: GnubgIntegration):
    flask_app = create_app(app_config, gnubg=gnubg)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner_factory() -> type[FakeRunner]:
    return FakeRunner


@pytest.fixture
def hint_output() -> str:
    return HINT_OUTPUT
