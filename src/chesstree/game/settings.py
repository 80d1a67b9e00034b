"""User-configurable analysis settings."""

from __future__ import annotations

from dataclasses import dataclass

from chesstree.core.rules import STARTING_FEN


@dataclass
class AnalysisSettings:
    """All user-configurable settings of an analysis board."""

    # Position a fresh session starts from
    starting_fen: str = STARTING_FEN

    # Move parsing leniency
    sloppy_engine_moves: bool = True  # engine lines, imported move lists
    sloppy_board_moves: bool = False  # single moves typed or dragged
