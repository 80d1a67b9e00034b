"""Core layer: errors, value objects and the rules adapter.

Quick start::

    from chesstree.core import STARTING_FEN, replay

    played, position = replay(STARTING_FEN, "e4")
    print(played.san, position)
"""

from chesstree.core.errors import (
    ForeignNodeError,
    IllegalMoveError,
    InvalidPgnError,
    InvalidPositionError,
    MoveReplayError,
    VariationTreeError,
)
from chesstree.core.models import PlayedMove, Position
from chesstree.core.rules import (
    STARTING_FEN,
    apply_move,
    board_at,
    canonical_position,
    replay,
    replay_coordinates,
    validate_fen,
)

__all__ = [
    # Errors
    "ForeignNodeError",
    "IllegalMoveError",
    "InvalidPgnError",
    "InvalidPositionError",
    "MoveReplayError",
    "VariationTreeError",
    # Value objects
    "PlayedMove",
    "Position",
    # Rules
    "STARTING_FEN",
    "apply_move",
    "board_at",
    "canonical_position",
    "replay",
    "replay_coordinates",
    "validate_fen",
]
