from __future__ import annotations

import random
from typing import Protocol, Sequence, runtime_checkable

from gammonbrain.domain.analyzers.moves import (
    Move,
    MoveAnalyzerContext,
    advancement_of,
)

# Seeded once per process; analyzers accept their own generator for tests.
_PROCESS_RNG = random.Random()


@runtime_checkable
class MoveAnalyzer(Protocol):
    """Contract for picking one move out of the legal candidates."""

    def select_move(
        self,
        moves: Sequence[Move],
        context: MoveAnalyzerContext | None = None,
    ) -> Move | None:
        """Return one element of ``moves`` (the same object), or None if empty."""


class RandomMoveAnalyzer:
    """Pick a uniformly random candidate."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or _PROCESS_RNG

    def select_move(
        self,
        moves: Sequence[Move],
        context: MoveAnalyzerContext | None = None,
    ) -> Move | None:
        if not moves:
            return None
        return moves[self._rng.randrange(len(moves))]


class FurthestFromOffMoveAnalyzer:
    """Prefer the move whose checker starts furthest from home.

    The clockwise distance of the origin point stands in for distance to
    bear-off; moves without an origin are scored by their die value. The
    first of several equally scored moves wins.
    """

    def select_move(
        self,
        moves: Sequence[Move],
        context: MoveAnalyzerContext | None = None,
    ) -> Move | None:
        best_move: Move | None = None
        best_score = float("-inf")
        for move in moves:
            score = advancement_of(move)
            if score > best_score:
                best_score = score
                best_move = move
        return best_move


class ExamplePluginAnalyzer:
    """Minimal analyzer for plugin authors to copy: always plays the first move."""

    def select_move(
        self,
        moves: Sequence[Move],
        context: MoveAnalyzerContext | None = None,
    ) -> Move | None:
        return moves[0] if moves else None


def select_move_from_list(
    moves: Sequence[Move],
    analyzer: MoveAnalyzer | None = None,
) -> Move | None:
    """Select a move with ``analyzer``, falling back to random choice."""
    move_analyzer = analyzer or RandomMoveAnalyzer()
    return move_analyzer.select_move(moves)


__all__ = [
    "ExamplePluginAnalyzer",
    "FurthestFromOffMoveAnalyzer",
    "MoveAnalyzer",
    "RandomMoveAnalyzer",
    "select_move_from_list",
]
