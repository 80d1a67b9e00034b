"""Value objects shared by the tree and the rules adapter."""

from __future__ import annotations

from dataclasses import dataclass

import chess

#: Canonical FEN produced by the rules engine. Equal strings == equal positions.
Position = str


@dataclass(slots=True, frozen=True)
class PlayedMove:
    """A move as validated and played by the rules engine."""

    move: chess.Move
    san: str
    color: chess.Color
    captured: chess.PieceType | None = None
    is_check: bool = False
    is_checkmate: bool = False

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation (``e2e4``, ``e7e8q``)."""
        return self.move.uci()

    @property
    def from_square(self) -> chess.Square:
        return self.move.from_square

    @property
    def to_square(self) -> chess.Square:
        return self.move.to_square

    @property
    def promotion(self) -> chess.PieceType | None:
        return self.move.promotion

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def __str__(self) -> str:
        return self.san
