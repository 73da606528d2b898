"""Analyzer plugin that consults the gnubg evaluation service.

Load it by pointing ``GAMMONBRAIN_PLUGINS_DIR`` at this directory. The hint is
logged but not yet mapped onto a candidate; the first legal move is played,
also when the engine cannot be reached.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from gammonbrain.domain.analyzers import Move, MoveAnalyzerContext
from gammonbrain.infrastructure.config import load_config
from gammonbrain.infrastructure.gnubg import EngineError, GnubgApiClient

logger = structlog.get_logger("gammonbrain.plugins.gnubg")


class GnubgMoveAnalyzer:
    def __init__(self, client: GnubgApiClient | None = None) -> None:
        self._client = client or GnubgApiClient.from_config(load_config())

    def select_move(
        self,
        moves: Sequence[Move],
        context: MoveAnalyzerContext | None = None,
    ) -> Move | None:
        if not moves:
            return None

        position_id = context.position_id if context else None
        if not position_id:
            logger.warning("gnubg_plugin_missing_position")
            return moves[0]

        try:
            best_move = self._client.get_best_move(position_id)
        except EngineError as exc:
            logger.error("gnubg_plugin_failed", position_id=position_id, error=str(exc))
            return moves[0]

        # TODO: match the gnubg notation (e.g. "8/4 6/4") against move origins and destinations.
        logger.info("gnubg_plugin_hint", position_id=position_id, best_move=best_move)
        return moves[0]


default = GnubgMoveAnalyzer
