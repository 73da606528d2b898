from __future__ import annotations

import structlog

from gammonbrain.domain.analyzers.moves import Move
from gammonbrain.domain.analyzers.registry import AnalyzerRegistry
from gammonbrain.domain.robots.backgammon_ai import (
    AIDifficulty,
    BackgammonAI,
    GameState,
    difficulty_label,
)

logger = structlog.get_logger("gammonbrain.robots")


class RobotAIService:
    """Keep one BackgammonAI per robot and route move requests to it."""

    def __init__(self, registry: AnalyzerRegistry | None = None) -> None:
        self._registry = registry or AnalyzerRegistry()
        self._robots: dict[str, BackgammonAI] = {}

    @property
    def registry(self) -> AnalyzerRegistry:
        return self._registry

    def get_ai(
        self,
        robot_id: str,
        difficulty: AIDifficulty | str = AIDifficulty.intermediate,
    ) -> BackgammonAI:
        """Return the robot's AI, creating it on first use.

        ``difficulty`` only applies when the AI is created; use
        :meth:`set_robot_difficulty` to change the tier of an existing robot.
        """
        ai = self._robots.get(robot_id)
        if ai is not None:
            if difficulty != ai.get_difficulty():
                logger.debug(
                    "robot_difficulty_argument_ignored",
                    robot_id=robot_id,
                    requested=difficulty_label(difficulty),
                    bound=difficulty_label(ai.get_difficulty()),
                )
            return ai

        ai = BackgammonAI(difficulty, registry=self._registry)
        self._robots[robot_id] = ai
        logger.info(
            "robot_ai_created",
            robot_id=robot_id,
            difficulty=difficulty_label(ai.get_difficulty()),
            analyzer=ai.analyzer_name,
        )
        return ai

    def has_robot(self, robot_id: str) -> bool:
        return robot_id in self._robots

    def robot_ids(self) -> list[str]:
        return list(self._robots)

    def set_robot_difficulty(self, robot_id: str, difficulty: AIDifficulty | str) -> BackgammonAI:
        ai = self.get_ai(robot_id)
        ai.set_difficulty(difficulty)
        logger.info(
            "robot_difficulty_changed",
            robot_id=robot_id,
            difficulty=difficulty_label(ai.get_difficulty()),
            analyzer=ai.analyzer_name,
        )
        return ai

    def make_robot_move(self, robot_id: str, game_state: GameState) -> Move | None:
        ai = self.get_ai(robot_id)
        return ai.get_best_move(game_state)

    def should_move(self, game_state: GameState) -> bool:
        return bool(game_state.available_moves)

    def remove_robot(self, robot_id: str) -> None:
        if self._robots.pop(robot_id, None) is not None:
            logger.info("robot_ai_removed", robot_id=robot_id)


__all__ = ["RobotAIService"]
