from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

BEAR_OFF_SENTINEL = "off"


class GamePhase(str, Enum):
    opening = "opening"
    middle = "middle"
    race = "race"
    bearoff = "bearoff"


@dataclass(frozen=True)
class PointPosition:
    """Distance of a point from each player's bear-off edge."""

    clockwise: int
    counterclockwise: int


@dataclass(frozen=True)
class MoveOrigin:
    position: PointPosition


@dataclass(frozen=True)
class Move:
    """A legal checker move proposed by the rules engine.

    Instances are read-only here; analyzers hand back the very object they
    were given so callers can use identity checks.
    """

    id: str
    die_value: int
    origin: MoveOrigin | None = None
    player: Any = None
    move_kind: str | None = None
    state_kind: str | None = None
    from_point: int | str | None = None
    to: int | str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Move":
        if not isinstance(payload, Mapping):
            raise TypeError(f"move must be an object, got {type(payload).__name__}")
        origin = None
        raw_origin = payload.get("origin") or {}
        raw_position = raw_origin.get("position") if isinstance(raw_origin, Mapping) else None
        if isinstance(raw_position, Mapping) and "clockwise" in raw_position:
            origin = MoveOrigin(
                position=PointPosition(
                    clockwise=int(raw_position["clockwise"]),
                    counterclockwise=int(raw_position.get("counterclockwise", 0)),
                )
            )
        return cls(
            id=str(payload["id"]),
            die_value=int(payload.get("dieValue", 0)),
            origin=origin,
            player=payload.get("player"),
            move_kind=payload.get("moveKind"),
            state_kind=payload.get("stateKind"),
            from_point=payload.get("from"),
            to=payload.get("to"),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "dieValue": self.die_value,
            "player": self.player,
            "moveKind": self.move_kind,
            "stateKind": self.state_kind,
            "from": self.from_point,
            "to": self.to,
        }
        if self.origin is not None:
            payload["origin"] = {
                "position": {
                    "clockwise": self.origin.position.clockwise,
                    "counterclockwise": self.origin.position.counterclockwise,
                }
            }
        return payload


@dataclass
class MoveAnalyzerContext:
    """Situational hints handed to an analyzer alongside the candidate moves."""

    board: Any = None
    position_id: str | None = None
    game_phase: GamePhase | str | None = None
    current_player: Any = None
    extra: dict[str, Any] = field(default_factory=dict)


def _read(obj: Any, *names: str) -> Any:
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    return None


def die_value_of(move: Any) -> int:
    value = _read(move, "die_value", "dieValue")
    return int(value) if value is not None else 0


def clockwise_position_of(move: Any) -> int | None:
    """Return ``origin.position.clockwise`` when the move carries an origin."""
    origin = _read(move, "origin")
    if origin is None:
        return None
    position = _read(origin, "position")
    if position is None:
        return None
    clockwise = _read(position, "clockwise")
    return int(clockwise) if clockwise is not None else None


def advancement_of(move: Any) -> int:
    clockwise = clockwise_position_of(move)
    return clockwise if clockwise is not None else die_value_of(move)


def destination_of(move: Any) -> int | str | None:
    return _read(move, "to")


def is_bear_off(move: Any) -> bool:
    destination = destination_of(move)
    return destination == 0 or destination == BEAR_OFF_SENTINEL


__all__ = [
    "BEAR_OFF_SENTINEL",
    "GamePhase",
    "Move",
    "MoveAnalyzerContext",
    "MoveOrigin",
    "PointPosition",
    "advancement_of",
    "clockwise_position_of",
    "destination_of",
    "die_value_of",
    "is_bear_off",
]
