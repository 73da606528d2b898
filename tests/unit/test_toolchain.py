from __future__ import annotations

import subprocess
from pathlib import Path

from gammonbrain.infrastructure.gnubg.toolchain import (
    CONFIGURE_ARGS,
    REQUIRED_TOOLS,
    build_gnubg,
    check_dependencies,
    configure_gnubg,
    dependency_instructions,
)


def test_check_dependencies_reports_missing_required_tools() -> None:
    installed = {"autoconf", "make", "gcc"}
    missing = check_dependencies(which=lambda tool: f"/usr/bin/{tool}" if tool in installed else None)
    assert missing == ["automake", "libtool", "pkg-config"]


def test_check_dependencies_all_present() -> None:
    assert check_dependencies(which=lambda tool: f"/usr/bin/{tool}") == []
    assert set(REQUIRED_TOOLS) >= {"autoconf", "make"}


def test_instructions_for_macos() -> None:
    deps = dependency_instructions("Darwin")
    assert deps.package_manager == "Homebrew"
    assert deps.install_command.startswith("brew install")


def test_instructions_for_debian(tmp_path: Path) -> None:
    release = tmp_path / "os-release"
    release.write_text('NAME="Ubuntu"\n', encoding="utf-8")
    assert dependency_instructions("Linux", os_release=release).package_manager == "apt"


def test_instructions_for_fedora(tmp_path: Path) -> None:
    release = tmp_path / "os-release"
    release.write_text('NAME="Fedora Linux"\n', encoding="utf-8")
    assert dependency_instructions("Linux", os_release=release).package_manager == "yum/dnf"


def test_instructions_for_unknown_linux(tmp_path: Path) -> None:
    deps = dependency_instructions("Linux", os_release=tmp_path / "absent")
    assert deps.platform_name == "Linux"
    assert deps.setup_instructions


def test_instructions_for_other_platform() -> None:
    deps = dependency_instructions("Windows")
    assert deps.platform_name == "Windows"
    assert deps.package_manager == "system package manager"


class RecordingRunner:
    def __init__(self, fail: bool = False, on_call=None) -> None:
        self.fail = fail
        self.on_call = on_call
        self.calls: list[tuple[list[str], Path]] = []

    def __call__(self, args, cwd, check):
        self.calls.append((list(args), cwd))
        if self.fail:
            raise subprocess.CalledProcessError(2, args)
        if self.on_call:
            self.on_call(cwd)
        return subprocess.CompletedProcess(args, 0)


def test_configure_runs_in_source_tree(tmp_path: Path) -> None:
    (tmp_path / "autogen.sh").write_text("#!/bin/sh\n", encoding="utf-8")
    runner = RecordingRunner()
    assert configure_gnubg(tmp_path, runner=runner) is True
    assert runner.calls == [(["./configure", *CONFIGURE_ARGS], tmp_path)]
    assert (tmp_path / "autogen.sh").stat().st_mode & 0o111


def test_configure_without_source_tree(tmp_path: Path) -> None:
    runner = RecordingRunner()
    assert configure_gnubg(tmp_path / "gnubg", runner=runner) is False
    assert runner.calls == []


def test_configure_failure(tmp_path: Path) -> None:
    assert configure_gnubg(tmp_path, runner=RecordingRunner(fail=True)) is False


def test_build_requires_makefile(tmp_path: Path) -> None:
    runner = RecordingRunner()
    assert build_gnubg(tmp_path, runner=runner) is False
    assert runner.calls == []


def test_build_success_needs_binary(tmp_path: Path) -> None:
    (tmp_path / "Makefile").write_text("all:\n", encoding="utf-8")
    runner = RecordingRunner(on_call=lambda cwd: (cwd / "gnubg").write_text("", encoding="utf-8"))
    assert build_gnubg(tmp_path, runner=runner) is True
    assert runner.calls == [(["make"], tmp_path)]


def test_build_without_binary_fails(tmp_path: Path) -> None:
    (tmp_path / "Makefile").write_text("all:\n", encoding="utf-8")
    assert build_gnubg(tmp_path, runner=RecordingRunner()) is False


def test_build_failure(tmp_path: Path) -> None:
    (tmp_path / "Makefile").write_text("all:\n", encoding="utf-8")
    assert build_gnubg(tmp_path, runner=RecordingRunner(fail=True)) is False
