"""chesstree: variation tree and cursor for an interactive analysis board."""

from chesstree.core import (
    STARTING_FEN,
    ForeignNodeError,
    IllegalMoveError,
    InvalidPgnError,
    InvalidPositionError,
    MoveReplayError,
    PlayedMove,
    VariationTreeError,
)
from chesstree.game import AnalysisController, AnalysisSettings
from chesstree.tree import VariationNode, build_from_moves, insert_move

__all__ = [
    "STARTING_FEN",
    "AnalysisController",
    "AnalysisSettings",
    "ForeignNodeError",
    "IllegalMoveError",
    "InvalidPgnError",
    "InvalidPositionError",
    "MoveReplayError",
    "PlayedMove",
    "VariationNode",
    "VariationTreeError",
    "build_from_moves",
    "insert_move",
]
