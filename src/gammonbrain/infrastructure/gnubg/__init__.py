"""Bridge to GNU Backgammon used as an external move oracle."""

from .api_client import GnubgApiClient, get_best_move_from_gnubg
from .errors import (
    EngineError,
    EngineExecutionError,
    EngineTimeoutError,
    EngineUnavailableError,
    HintParseError,
)
from .integration import (
    STARTING_POSITION_ID,
    GnubgIntegration,
    get_best_move_for_starting_position,
    get_gnubg_info,
    get_gnubg_move_hint,
)
from .parsing import parse_best_move_from_hint

__all__ = [
    "EngineError",
    "EngineExecutionError",
    "EngineTimeoutError",
    "EngineUnavailableError",
    "GnubgApiClient",
    "GnubgIntegration",
    "HintParseError",
    "STARTING_POSITION_ID",
    "get_best_move_for_starting_position",
    "get_best_move_from_gnubg",
    "get_gnubg_info",
    "get_gnubg_move_hint",
    "parse_best_move_from_hint",
]
