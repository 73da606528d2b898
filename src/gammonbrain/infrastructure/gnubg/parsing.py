from __future__ import annotations

import re

from gammonbrain.infrastructure.gnubg.errors import HintParseError

# "    1. Cubeful 0-ply    8/4 6/4                  Eq.:  +0.166"
_RANKED_MOVE = re.compile(
    r"^\s*1\.\s+\S+\s+\S+\s+((?:[a-zA-Z0-9*]+/[a-zA-Z0-9*]+\*?\s*)+)"
)
# "gnubg moves 8/4 6/4."
_ENGINE_MOVES = re.compile(r"gnubg moves ([\w/* ]+)\.", re.IGNORECASE)


def parse_best_move_from_hint(hint_output: str) -> str:
    """Extract the top-ranked move (e.g. ``"8/4 6/4"``) from ``hint`` output."""
    lines = hint_output.splitlines()

    for line in lines:
        match = _RANKED_MOVE.match(line)
        if match:
            return match.group(1).strip()

    for line in lines:
        match = _ENGINE_MOVES.search(line)
        if match:
            return match.group(1).strip()

    raise HintParseError("Could not parse best move from gnubg output.", output=hint_output)


__all__ = ["parse_best_move_from_hint"]
