from __future__ import annotations

from typing import Any

import requests
import structlog

from gammonbrain.infrastructure.config import DEFAULT_GNUBG_API_URL, AppConfig
from gammonbrain.infrastructure.gnubg.errors import EngineExecutionError, EngineTimeoutError
from gammonbrain.infrastructure.gnubg.parsing import parse_best_move_from_hint

BEST_MOVE_PATH = "/best-move"

logger = structlog.get_logger("gammonbrain.gnubg.api")


class GnubgApiClient:
    """HTTP client for a locally hosted gnubg evaluation service.

    The service answers ``POST /best-move`` with the engine's raw hint text
    as ``{"output": ...}``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_GNUBG_API_URL,
        *,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs: Any) -> "GnubgApiClient":
        return cls(config.gnubg_api_url, timeout=config.gnubg_timeout_seconds, **kwargs)

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}{BEST_MOVE_PATH}"

    def request_hint(self, position: str, timeout: float | None = None) -> str:
        budget = timeout if timeout is not None else self._timeout
        try:
            response = self._session.post(self.endpoint, json={"position": position}, timeout=budget)
        except requests.Timeout as exc:
            logger.warning("gnubg_api_timeout", endpoint=self.endpoint, timeout=budget)
            raise EngineTimeoutError(
                f"gnubg service did not answer within {budget} seconds.", timeout=budget
            ) from exc
        except requests.RequestException as exc:
            logger.error("gnubg_api_request_failed", endpoint=self.endpoint, error=str(exc))
            raise EngineExecutionError(f"Failed to reach gnubg service: {exc}", detail=str(exc)) from exc

        body = _json_body(response)
        if not response.ok:
            detail = body.get("detail") if isinstance(body, dict) else None
            message = detail or f"gnubg service returned HTTP {response.status_code}"
            logger.error("gnubg_api_error", status=response.status_code, detail=detail)
            raise EngineExecutionError(str(message), detail=detail)

        output = body.get("output") if isinstance(body, dict) else None
        if not isinstance(output, str):
            raise EngineExecutionError("Malformed response from gnubg service: missing 'output'.")
        return output

    def get_best_move(self, position: str, timeout: float | None = None) -> str:
        return parse_best_move_from_hint(self.request_hint(position, timeout=timeout))


def _json_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def get_best_move_from_gnubg(position: str, client: GnubgApiClient | None = None) -> str:
    """Raw gnubg output for ``position`` from the evaluation service."""
    return (client or GnubgApiClient()).request_hint(position)


__all__ = ["BEST_MOVE_PATH", "GnubgApiClient", "get_best_move_from_gnubg"]
