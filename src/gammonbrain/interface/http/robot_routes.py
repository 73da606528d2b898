from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, jsonify, request

from gammonbrain.domain.robots import (
    AIDifficulty,
    BackgammonAI,
    GameState,
    RobotAIService,
    difficulty_label,
)
from gammonbrain.interface.telemetry.logging import bind_trace, get_logger, trace_id_from

robots_bp = Blueprint("robots", __name__)
logger = get_logger("gammonbrain.api.robots")

_VALID_DIFFICULTIES = ", ".join(tier.value for tier in AIDifficulty)


def _json_body() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _robot_service() -> RobotAIService:
    return current_app.extensions["robot_ai_service"]


def _default_difficulty() -> str:
    return current_app.config.get("DEFAULT_DIFFICULTY", AIDifficulty.intermediate.value)


def _serialize_robot(robot_id: str, ai: BackgammonAI, trace_id: str | None = None) -> dict[str, Any]:
    return {
        "robotId": robot_id,
        "difficulty": difficulty_label(ai.get_difficulty()),
        "analyzer": ai.analyzer_name,
        "traceId": trace_id,
    }


def _domain_error(code: str, message: str, status: int = 400, detail: Any | None = None):
    payload: dict[str, Any] = {"code": code, "message": message}
    if detail is not None:
        payload["detail"] = detail
    return jsonify(payload), status


def _parse_difficulty(raw: Any) -> AIDifficulty | None:
    try:
        return AIDifficulty(raw)
    except ValueError:
        return None


@robots_bp.get("")
def list_robots():
    service = _robot_service()
    return jsonify({"robots": service.robot_ids(), "analyzers": service.registry.names()}), 200


@robots_bp.get("/<robot_id>")
def get_robot(robot_id: str):
    trace_id = trace_id_from(request.headers)
    service = _robot_service()
    if not service.has_robot(robot_id):
        bind_trace(logger, trace_id, robot_id=robot_id).warning("robot_not_found")
        return _domain_error("robot_not_found", "Robot not found.", status=404)
    return jsonify(_serialize_robot(robot_id, service.get_ai(robot_id), trace_id)), 200


@robots_bp.post("/<robot_id>/moves")
def make_robot_move(robot_id: str):
    payload = _json_body()
    trace_id = trace_id_from(request.headers)
    log = bind_trace(logger, trace_id, robot_id=robot_id)

    raw_state = payload.get("gameState")
    if not isinstance(raw_state, dict):
        return _domain_error("invalid_game_state", "gameState must be an object.")

    try:
        game_state = GameState.from_payload(raw_state)
    except (KeyError, TypeError, ValueError) as exc:
        log.warning("game_state_rejected", detail=str(exc))
        return _domain_error("invalid_game_state", "gameState could not be parsed.", detail=str(exc))

    difficulty = payload.get("difficulty")
    if difficulty is not None and _parse_difficulty(difficulty) is None:
        return _domain_error("invalid_difficulty", f"difficulty must be one of: {_VALID_DIFFICULTIES}.")

    service = _robot_service()
    service.get_ai(robot_id, difficulty or _default_difficulty())
    should_move = service.should_move(game_state)
    move = service.make_robot_move(robot_id, game_state)

    log.info(
        "robot_move_selected",
        move_id=move.id if move is not None else None,
        candidates=len(game_state.available_moves or []),
    )
    return jsonify(
        {
            "robotId": robot_id,
            "shouldMove": should_move,
            "move": move.to_payload() if move is not None else None,
            "traceId": trace_id,
        }
    ), 200


@robots_bp.put("/<robot_id>/difficulty")
def set_robot_difficulty(robot_id: str):
    payload = _json_body()
    trace_id = trace_id_from(request.headers)

    difficulty = _parse_difficulty(payload.get("difficulty"))
    if difficulty is None:
        return _domain_error("invalid_difficulty", f"difficulty must be one of: {_VALID_DIFFICULTIES}.")

    ai = _robot_service().set_robot_difficulty(robot_id, difficulty)
    bind_trace(logger, trace_id, robot_id=robot_id).info("robot_difficulty_updated", difficulty=difficulty.value)
    return jsonify(_serialize_robot(robot_id, ai, trace_id)), 200


@robots_bp.delete("/<robot_id>")
def remove_robot(robot_id: str):
    trace_id = trace_id_from(request.headers)
    _robot_service().remove_robot(robot_id)
    bind_trace(logger, trace_id, robot_id=robot_id).info("robot_removed")
    return "", 204


__all__ = ["robots_bp"]
