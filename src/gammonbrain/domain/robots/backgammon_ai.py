from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence

from gammonbrain.domain.analyzers.move_analyzers import MoveAnalyzer
from gammonbrain.domain.analyzers.moves import GamePhase, Move, MoveAnalyzerContext
from gammonbrain.domain.analyzers.registry import (
    FURTHEST_FROM_OFF,
    RANDOM,
    STRATEGIC,
    AnalyzerRegistry,
)


class AIDifficulty(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


DIFFICULTY_ANALYZERS: dict[AIDifficulty, str] = {
    AIDifficulty.beginner: RANDOM,
    AIDifficulty.intermediate: FURTHEST_FROM_OFF,
    AIDifficulty.advanced: STRATEGIC,
}


def analyzer_name_for(difficulty: AIDifficulty | str) -> str:
    """Map a difficulty tier to a registry key; unknown tiers play randomly."""
    try:
        tier = AIDifficulty(difficulty)
    except ValueError:
        return RANDOM
    return DIFFICULTY_ANALYZERS.get(tier, RANDOM)


def difficulty_label(difficulty: AIDifficulty | str) -> str:
    return difficulty.value if isinstance(difficulty, AIDifficulty) else str(difficulty)


@dataclass
class GameState:
    """Snapshot of the game handed over by the rules engine."""

    position_id: str | None = None
    board: Any = None
    current_player: Any = None
    available_moves: Sequence[Move] | None = None
    game_phase: GamePhase | str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GameState":
        raw_moves = payload.get("availableMoves")
        if raw_moves is not None and not isinstance(raw_moves, (list, tuple)):
            raise TypeError("availableMoves must be a list")
        moves = [Move.from_payload(item) for item in raw_moves] if raw_moves is not None else None
        return cls(
            position_id=payload.get("positionId"),
            board=payload.get("board"),
            current_player=payload.get("currentPlayer"),
            available_moves=moves,
            game_phase=payload.get("gamePhase"),
        )

    def analyzer_context(self) -> MoveAnalyzerContext:
        return MoveAnalyzerContext(
            board=self.board,
            position_id=self.position_id,
            game_phase=self.game_phase,
            current_player=self.current_player,
        )


class BackgammonAI:
    """A difficulty tier bound to the analyzer that plays it."""

    def __init__(
        self,
        difficulty: AIDifficulty | str = AIDifficulty.intermediate,
        registry: AnalyzerRegistry | None = None,
    ) -> None:
        self._registry = registry or AnalyzerRegistry()
        self._difficulty, self._analyzer = self._bind(difficulty)

    @property
    def analyzer(self) -> MoveAnalyzer:
        return self._analyzer

    @property
    def analyzer_name(self) -> str:
        return analyzer_name_for(self._difficulty)

    def get_difficulty(self) -> AIDifficulty | str:
        return self._difficulty

    def set_difficulty(self, difficulty: AIDifficulty | str) -> None:
        # Single assignment so readers never see a tier paired with another tier's analyzer.
        self._difficulty, self._analyzer = self._bind(difficulty)

    def get_best_move(self, game_state: GameState) -> Move | None:
        if not self.should_make_move(game_state):
            return None
        return self._analyzer.select_move(
            game_state.available_moves,
            game_state.analyzer_context(),
        )

    def should_make_move(self, game_state: GameState) -> bool:
        return bool(game_state.available_moves)

    def _bind(self, difficulty: AIDifficulty | str) -> tuple[AIDifficulty | str, MoveAnalyzer]:
        try:
            tier: AIDifficulty | str = AIDifficulty(difficulty)
        except ValueError:
            tier = difficulty
        return tier, self._registry.create(analyzer_name_for(tier))


__all__ = [
    "AIDifficulty",
    "BackgammonAI",
    "DIFFICULTY_ANALYZERS",
    "GameState",
    "analyzer_name_for",
    "difficulty_label",
]
