from __future__ import annotations

import os
import re
import shutil
import subprocess
from pathlib import Path
from typing import Any, Callable, Iterable, Sequence

import structlog

from gammonbrain.infrastructure.config import AppConfig
from gammonbrain.infrastructure.gnubg.errors import (
    EngineExecutionError,
    EngineTimeoutError,
    EngineUnavailableError,
)
from gammonbrain.infrastructure.gnubg.parsing import parse_best_move_from_hint

STARTING_POSITION_ID = "4HPwATDgc/ABMA"
# Base64 position id, optionally followed by ":" and a match id.
POSITION_ID_PATTERN = re.compile(r"[A-Za-z0-9+/=:]+")
GNUBG_EXECUTABLE = "gnubg"

BUILD_INSTRUCTIONS = """
GNU Backgammon (gnubg) is not available. To build it locally:

1. Install dependencies (macOS with Homebrew):
   brew install autoconf automake libtool pkg-config glib readline sqlite

2. Configure and build (minimal configuration for AI use):
   gammonbrain-gnubg setup --configure-only
   gammonbrain-gnubg setup --build-only

3. Optional - install system-wide with `make install` inside ./gnubg,
   or point GNUBG_PATH at an existing binary.

Run `gammonbrain-gnubg check` to see which build tools are missing.
""".strip()

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

logger = structlog.get_logger("gammonbrain.gnubg")


def validate_position_id(position_id: str) -> str:
    if not isinstance(position_id, str) or not POSITION_ID_PATTERN.fullmatch(position_id):
        raise ValueError(f"Invalid gnubg position id: {position_id!r}")
    return position_id


def hint_commands(position_id: str) -> list[str]:
    validate_position_id(position_id)
    return ["new game", f"set board {position_id}", "hint", "quit"]


def default_candidates() -> list[Path]:
    """Local build locations probed before falling back to ``PATH``."""
    return [
        Path.cwd() / "gnubg" / "gnubg",
        Path(__file__).resolve().parents[4] / "gnubg" / "gnubg",
    ]


def _is_executable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class GnubgIntegration:
    """Drive a GNU Backgammon binary in tty mode over stdin/stdout.

    The executable is resolved lazily, once per instance: an explicit path,
    then the local build candidates, then the system ``PATH``.
    """

    def __init__(
        self,
        *,
        executable: str | Path | None = None,
        candidates: Iterable[Path] | None = None,
        timeout: float | None = None,
        runner: Runner = subprocess.run,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._explicit = Path(executable) if executable else None
        self._candidates = list(candidates) if candidates is not None else default_candidates()
        self._timeout = timeout
        self._runner = runner
        self._which = which
        self._gnubg_path: str | None = None
        self._initialized = False

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs: Any) -> "GnubgIntegration":
        return cls(
            executable=config.gnubg_path,
            timeout=config.gnubg_timeout_seconds,
            **kwargs,
        )

    def _initialize(self) -> None:
        if self._initialized:
            return

        probes = ([self._explicit] if self._explicit else []) + self._candidates
        for candidate in probes:
            if _is_executable_file(candidate):
                self._gnubg_path = str(candidate)
                break
        else:
            self._gnubg_path = self._which(GNUBG_EXECUTABLE)

        self._initialized = True
        logger.debug("gnubg_resolved", path=self._gnubg_path)

    def get_gnubg_path(self) -> str | None:
        self._initialize()
        return self._gnubg_path

    def is_available(self) -> bool:
        return self.get_gnubg_path() is not None

    def has_local_build(self) -> bool:
        local = self._candidates[0] if self._candidates else Path.cwd() / "gnubg" / "gnubg"
        return local.is_file()

    def get_build_instructions(self) -> str:
        return BUILD_INSTRUCTIONS

    def get_version(self, timeout: float | None = None) -> str:
        path = self._require_path()
        completed = self._run([path, "--version"], stdin=None, timeout=timeout)
        return completed.stdout.strip()

    def execute_command(self, commands: Sequence[str], timeout: float | None = None) -> str:
        """Feed ``commands`` to ``gnubg -t`` and return everything it printed."""
        path = self._require_path()
        script = "\n".join(commands) + "\n"
        completed = self._run([path, "-t"], stdin=script, timeout=timeout)
        if completed.stderr:
            logger.warning("gnubg_stderr", stderr=completed.stderr.strip())
        return completed.stdout

    def request_hint(self, position_id: str, timeout: float | None = None) -> str:
        return self.execute_command(hint_commands(position_id), timeout=timeout)

    def get_best_move(self, position_id: str, timeout: float | None = None) -> str:
        output = self.request_hint(position_id, timeout=timeout)
        best_move = parse_best_move_from_hint(output)
        logger.info("gnubg_best_move", position_id=position_id, move=best_move)
        return best_move

    def _require_path(self) -> str:
        path = self.get_gnubg_path()
        if path is None:
            raise EngineUnavailableError(
                "GNU Backgammon is not available.",
                instructions=self.get_build_instructions(),
            )
        return path

    def _run(
        self,
        args: list[str],
        *,
        stdin: str | None,
        timeout: float | None,
    ) -> "subprocess.CompletedProcess[str]":
        budget = timeout if timeout is not None else self._timeout
        try:
            completed = self._runner(
                args,
                input=stdin,
                capture_output=True,
                text=True,
                timeout=budget,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning("gnubg_timeout", args=args, timeout=budget)
            raise EngineTimeoutError(
                f"gnubg did not answer within {budget} seconds.", timeout=budget
            ) from exc
        except OSError as exc:
            logger.error("gnubg_command_failed", args=args, error=str(exc))
            raise EngineExecutionError(
                f"Failed to execute gnubg command: {exc}", detail=str(exc)
            ) from exc

        if completed.returncode != 0:
            detail = (completed.stderr or "").strip() or f"exit status {completed.returncode}"
            logger.error("gnubg_command_failed", args=args, detail=detail)
            raise EngineExecutionError(f"Failed to execute gnubg command: {detail}", detail=detail)
        return completed


def get_gnubg_move_hint(position_id: str, integration: GnubgIntegration | None = None) -> str:
    """Best move for ``position_id``; a missing engine surfaces the build instructions."""
    gnubg = integration or GnubgIntegration()
    try:
        return gnubg.get_best_move(position_id)
    except EngineExecutionError as exc:
        if not gnubg.is_available():
            instructions = gnubg.get_build_instructions()
            raise EngineUnavailableError(
                f"GNU Backgammon is not available.\n\n{instructions}",
                instructions=instructions,
            ) from exc
        raise


def get_best_move_for_starting_position(integration: GnubgIntegration | None = None) -> str:
    return get_gnubg_move_hint(STARTING_POSITION_ID, integration)


def get_gnubg_info(integration: GnubgIntegration | None = None) -> dict[str, Any]:
    gnubg = integration or GnubgIntegration()
    available = gnubg.is_available()
    version: str | None = None
    if available:
        try:
            version = gnubg.get_version()
        except (EngineExecutionError, EngineTimeoutError):
            version = "Unknown"
    return {
        "available": available,
        "path": gnubg.get_gnubg_path(),
        "version": version,
        "hasLocalBuild": gnubg.has_local_build(),
    }


__all__ = [
    "BUILD_INSTRUCTIONS",
    "GnubgIntegration",
    "STARTING_POSITION_ID",
    "default_candidates",
    "get_best_move_for_starting_position",
    "get_gnubg_info",
    "get_gnubg_move_hint",
    "hint_commands",
    "validate_position_id",
]
