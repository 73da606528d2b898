from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from gammonbrain.domain.analyzers.move_analyzers import _PROCESS_RNG
from gammonbrain.domain.analyzers.moves import (
    GamePhase,
    Move,
    MoveAnalyzerContext,
    advancement_of,
    die_value_of,
    is_bear_off,
)

MovePredicate = Callable[[Move, "MoveAnalyzerContext | None"], bool]

ADVANCEMENT_WEIGHT = 0.1
JITTER_SCALE = 0.5


def _never(move: Any, context: MoveAnalyzerContext | None) -> bool:
    return False


def _always(move: Any, context: MoveAnalyzerContext | None) -> bool:
    return True


@dataclass(frozen=True)
class StrategicPredicates:
    """Board-aware checks consulted by the phase scorer.

    The defaults are placeholders that ignore the board; supply real
    implementations once a board model is available.
    """

    creates_point: MovePredicate = _never
    brings_builder_into_play: MovePredicate = _never
    is_safe_move: MovePredicate = _always
    attacks_opponent_blot: MovePredicate = _never
    clears_back_point: MovePredicate = _never
    maintains_efficient_distribution: MovePredicate = _always


class StrategicMoveAnalyzer:
    """Phase-weighted scorer with a small random jitter.

    score = 0.1 * advancement + phase score + uniform jitter in [0, 0.5)
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        predicates: StrategicPredicates | None = None,
    ) -> None:
        self._rng = rng or _PROCESS_RNG
        self._predicates = predicates or StrategicPredicates()

    @property
    def predicates(self) -> StrategicPredicates:
        return self._predicates

    def select_move(
        self,
        moves: Sequence[Move],
        context: MoveAnalyzerContext | None = None,
    ) -> Move | None:
        best_move: Move | None = None
        best_score = float("-inf")
        for move in moves:
            score = self.score_move(move, context)
            if score > best_score:
                best_score = score
                best_move = move
        return best_move

    def score_move(self, move: Move, context: MoveAnalyzerContext | None = None) -> float:
        score = ADVANCEMENT_WEIGHT * advancement_of(move)
        score += self.phase_score(move, context)
        score += self._rng.random() * JITTER_SCALE
        return score

    def phase_score(self, move: Move, context: MoveAnalyzerContext | None = None) -> float:
        phase = _coerce_phase(context.game_phase if context else None)
        checks = self._predicates
        score = 0.0

        if phase is GamePhase.opening:
            if checks.creates_point(move, context):
                score += 2.0
            if checks.brings_builder_into_play(move, context):
                score += 1.5
        elif phase is GamePhase.middle:
            if checks.is_safe_move(move, context):
                score += 1.0
            if checks.attacks_opponent_blot(move, context):
                score += 1.5
        elif phase is GamePhase.race:
            score += 0.3 * die_value_of(move)
            if checks.clears_back_point(move, context):
                score += 1.0
        elif phase is GamePhase.bearoff:
            if is_bear_off(move):
                score += 3.0
            if checks.maintains_efficient_distribution(move, context):
                score += 1.0

        return score


def _coerce_phase(value: GamePhase | str | None) -> GamePhase | None:
    if value is None or isinstance(value, GamePhase):
        return value
    try:
        return GamePhase(value)
    except ValueError:
        return None


__all__ = [
    "ADVANCEMENT_WEIGHT",
    "JITTER_SCALE",
    "MovePredicate",
    "StrategicMoveAnalyzer",
    "StrategicPredicates",
]
