from .backgammon_ai import (
    AIDifficulty,
    BackgammonAI,
    DIFFICULTY_ANALYZERS,
    GameState,
    analyzer_name_for,
    difficulty_label,
)
from .robot_service import RobotAIService

__all__ = [
    "AIDifficulty",
    "BackgammonAI",
    "DIFFICULTY_ANALYZERS",
    "GameState",
    "RobotAIService",
    "analyzer_name_for",
    "difficulty_label",
]
