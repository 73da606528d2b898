from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import os

DEFAULT_GNUBG_API_URL = "http://localhost:8000"
DEFAULT_GNUBG_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Centralized runtime configuration for the AI service."""

    gnubg_path: Path | None = None
    gnubg_api_url: str = DEFAULT_GNUBG_API_URL
    gnubg_timeout_seconds: float = DEFAULT_GNUBG_TIMEOUT_SECONDS
    plugins_dir: Path | None = None
    default_difficulty: str = "intermediate"
    flask_env: str = "production"
    additional: dict[str, str] = field(default_factory=dict)


def load_config(prefix: str = "") -> AppConfig:
    """Load application configuration from environment variables."""

    def _get_env(key: str, default: str = "") -> str:
        env_key = f"{prefix}{key}"
        return os.getenv(env_key, default)

    gnubg_path_raw = _get_env("GNUBG_PATH", "")
    gnubg_path = Path(gnubg_path_raw).expanduser() if gnubg_path_raw else None
    plugins_raw = _get_env("GAMMONBRAIN_PLUGINS_DIR", "")
    plugins_dir = Path(plugins_raw).resolve() if plugins_raw else None

    def _parse_float(raw: str, fallback: float) -> float:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            return fallback
        return value if value > 0 else fallback

    timeout = _parse_float(
        _get_env("GNUBG_TIMEOUT_SECONDS", str(DEFAULT_GNUBG_TIMEOUT_SECONDS)),
        DEFAULT_GNUBG_TIMEOUT_SECONDS,
    )

    additional_keys = ("STRUCTLOG_LEVEL",)
    additional: dict[str, str] = {}
    for key in additional_keys:
        value = _get_env(key, "")
        if value:
            additional[key] = value

    return AppConfig(
        gnubg_path=gnubg_path,
        gnubg_api_url=_get_env("GNUBG_API_URL", DEFAULT_GNUBG_API_URL).rstrip("/"),
        gnubg_timeout_seconds=timeout,
        plugins_dir=plugins_dir,
        default_difficulty=_get_env("DEFAULT_DIFFICULTY", "intermediate"),
        flask_env=_get_env("FLASK_ENV", "production"),
        additional=additional,
    )


__all__ = [
    "AppConfig",
    "DEFAULT_GNUBG_API_URL",
    "DEFAULT_GNUBG_TIMEOUT_SECONDS",
    "load_config",
]
