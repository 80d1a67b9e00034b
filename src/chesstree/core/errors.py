"""Exception hierarchy for the variation tree."""

from __future__ import annotations


class VariationTreeError(Exception):
    """Base class for every error raised by :mod:`chesstree`."""


class IllegalMoveError(VariationTreeError, ValueError):
    """The rules engine rejected *token* in *position*."""

    def __init__(self, token: str, position: str, reason: str = "") -> None:
        self.token = token
        self.position = position
        self.reason = reason
        message = f"Illegal move {token!r} in position {position!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class MoveReplayError(IllegalMoveError):
    """A token of an imported move list could not be replayed.

    ``index`` is the 0-based offset of the failing token in the input.
    """

    def __init__(self, token: str, position: str, index: int, reason: str = "") -> None:
        self.index = index
        super().__init__(token, position, reason)

    def __str__(self) -> str:
        return f"Move #{self.index + 1}: {super().__str__()}"


class InvalidPositionError(VariationTreeError, ValueError):
    """A FEN string failed validation; nothing was changed."""

    def __init__(self, position: str, reason: str) -> None:
        self.position = position
        self.reason = reason
        super().__init__(f"Invalid position {position!r}: {reason}")


class InvalidPgnError(VariationTreeError, ValueError):
    """PGN text could not be turned into a variation tree."""


class ForeignNodeError(VariationTreeError):
    """A node from another tree was used as a navigation target."""
