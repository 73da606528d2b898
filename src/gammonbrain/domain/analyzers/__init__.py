from .move_analyzers import (
    ExamplePluginAnalyzer,
    FurthestFromOffMoveAnalyzer,
    MoveAnalyzer,
    RandomMoveAnalyzer,
    select_move_from_list,
)
from .moves import (
    GamePhase,
    Move,
    MoveAnalyzerContext,
    MoveOrigin,
    PointPosition,
)
from .registry import AnalyzerRegistry, UnknownAnalyzerError
from .strategic import StrategicMoveAnalyzer, StrategicPredicates

__all__ = [
    "AnalyzerRegistry",
    "ExamplePluginAnalyzer",
    "FurthestFromOffMoveAnalyzer",
    "GamePhase",
    "Move",
    "MoveAnalyzer",
    "MoveAnalyzerContext",
    "MoveOrigin",
    "PointPosition",
    "RandomMoveAnalyzer",
    "StrategicMoveAnalyzer",
    "StrategicPredicates",
    "UnknownAnalyzerError",
    "select_move_from_list",
]
