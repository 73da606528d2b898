from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from gammonbrain.infrastructure.gnubg import (
    EngineExecutionError,
    EngineTimeoutError,
    EngineUnavailableError,
    GnubgIntegration,
    get_gnubg_info,
)
from gammonbrain.infrastructure.gnubg.integration import validate_position_id
from gammonbrain.interface.telemetry.logging import bind_trace, get_logger, trace_id_from

engine_bp = Blueprint("engine", __name__)
logger = get_logger("gammonbrain.api.engine")


def _json_body() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _gnubg() -> GnubgIntegration:
    return current_app.extensions["gnubg"]


def _engine_error(code: str, detail: str, status: int, **extra: Any):
    payload: dict[str, Any] = {"code": code, "detail": detail}
    payload.update(extra)
    return jsonify(payload), status


@engine_bp.post("/best-move")
def best_move():
    """Local evaluation service: raw ``hint`` output for a position id."""
    payload = _json_body()
    trace_id = trace_id_from(request.headers)
    log = bind_trace(logger, trace_id)

    position = payload.get("position")
    if not isinstance(position, str) or not position.strip():
        return _engine_error("invalid_position", "position must be a non-empty string.", 400)
    position = position.strip()
    try:
        validate_position_id(position)
    except ValueError as exc:
        log.warning("gnubg_position_rejected", position=position)
        return _engine_error("invalid_position", str(exc), 400)

    try:
        output = _gnubg().request_hint(position)
    except EngineUnavailableError as exc:
        log.warning("gnubg_unavailable", position=position)
        return _engine_error(exc.code, str(exc), 503, instructions=exc.instructions)
    except EngineTimeoutError as exc:
        log.warning("gnubg_timeout", position=position, timeout=exc.timeout)
        return _engine_error(exc.code, str(exc), 504)
    except EngineExecutionError as exc:
        log.error("gnubg_failed", position=position, detail=exc.detail)
        return _engine_error(exc.code, exc.detail or str(exc), 502)

    log.info("gnubg_hint_served", position=position, output_length=len(output))
    return jsonify({"output": output}), 200


@engine_bp.get("/api/v1/engine")
def engine_info():
    return jsonify(get_gnubg_info(_gnubg())), 200


__all__ = ["engine_bp"]
