from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from gammonbrain.infrastructure.gnubg import EngineTimeoutError, GnubgIntegration
from gammonbrain.interface.cli import gnubg as cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_check_reports_missing_tools(runner, monkeypatch) -> None:
    monkeypatch.setattr(cli, "check_dependencies", lambda: ["automake"])
    result = runner.invoke(cli.main, ["check"])
    assert result.exit_code == 1
    assert "automake" in result.output


def test_check_passes(runner, monkeypatch) -> None:
    monkeypatch.setattr(cli, "check_dependencies", lambda: [])
    result = runner.invoke(cli.main, ["check"])
    assert result.exit_code == 0
    assert "All required dependencies found." in result.output


def test_setup_configure_only(runner, monkeypatch, tmp_path) -> None:
    calls = []
    monkeypatch.setattr(cli, "check_dependencies", lambda: [])
    monkeypatch.setattr(cli, "configure_gnubg", lambda path: calls.append(("configure", path)) or True)
    monkeypatch.setattr(cli, "build_gnubg", lambda path: calls.append(("build", path)) or True)

    result = runner.invoke(cli.main, ["setup", "--gnubg-dir", str(tmp_path), "--configure-only"])

    assert result.exit_code == 0
    assert calls == [("configure", tmp_path)]


def test_setup_build_failure_exits_nonzero(runner, monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(cli, "check_dependencies", lambda: [])
    monkeypatch.setattr(cli, "configure_gnubg", lambda path: True)
    monkeypatch.setattr(cli, "build_gnubg", lambda path: False)

    result = runner.invoke(cli.main, ["setup", "--gnubg-dir", str(tmp_path)])

    assert result.exit_code == 1
    assert "build failed" in result.output


def test_setup_rejects_conflicting_flags(runner, tmp_path) -> None:
    result = runner.invoke(cli.main, ["setup", "--gnubg-dir", str(tmp_path), "--configure-only", "--build-only"])
    assert result.exit_code == 2


def test_hint_prints_best_move(runner, monkeypatch, gnubg) -> None:
    monkeypatch.setattr(GnubgIntegration, "from_config", classmethod(lambda cls, config: gnubg))
    result = runner.invoke(cli.main, ["hint", "4HPwATDgc/ABMA"])
    assert result.exit_code == 0
    assert result.output.strip() == "8/4 6/4"


def test_hint_unavailable_exits_with_instructions(runner, monkeypatch, tmp_path) -> None:
    missing = GnubgIntegration(candidates=[tmp_path / "gnubg"], which=lambda name: None)
    monkeypatch.setattr(GnubgIntegration, "from_config", classmethod(lambda cls, config: missing))
    result = runner.invoke(cli.main, ["hint", "4HPwATDgc/ABMA"])
    assert result.exit_code == 2
    assert "not available" in result.output


def test_hint_engine_failure_exits_one(runner, monkeypatch) -> None:
    class SlowOracle:
        def get_best_move(self, position_id, timeout=None):
            raise EngineTimeoutError("too slow", timeout=timeout)

    monkeypatch.setattr(cli.GnubgApiClient, "from_config", classmethod(lambda cls, config: SlowOracle()))
    result = runner.invoke(cli.main, ["hint", "x", "--via", "api", "--timeout", "0.1"])
    assert result.exit_code == 1
    assert "too slow" in result.output


def test_info_prints_json(runner, monkeypatch, gnubg) -> None:
    monkeypatch.setattr(GnubgIntegration, "from_config", classmethod(lambda cls, config: gnubg))
    result = runner.invoke(cli.main, ["info"])
    assert result.exit_code == 0
    assert json.loads(result.output)["available"] is True


def test_hint_rejects_malformed_position(runner, monkeypatch, gnubg, hint_runner) -> None:
    monkeypatch.setattr(GnubgIntegration, "from_config", classmethod(lambda cls, config: gnubg))
    result = runner.invoke(cli.main, ["hint", "4HPwATDgc/ABMA\nhint"])
    assert result.exit_code == 2
    assert hint_runner.calls == []
