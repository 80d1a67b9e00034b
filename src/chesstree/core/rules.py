"""Adapter over ``python-chess``: the only place chess rules are consulted.

The tree treats positions as opaque FEN strings and moves as
:class:`PlayedMove` records; everything here turns a ``(position, token)``
pair into the next ``(PlayedMove, position)`` or raises.
"""

from __future__ import annotations

import re

import chess

from chesstree.core.errors import IllegalMoveError, InvalidPositionError
from chesstree.core.models import PlayedMove, Position

STARTING_FEN: Position = chess.STARTING_FEN

_UCI_RE = re.compile(r"^[a-h][1-8][a-h][1-8][qrbn]?$")
# Long algebraic as typed by hand or emitted by GUIs: Ng1-f3, e2xe4, e7-e8=Q
_LONG_ALGEBRAIC_RE = re.compile(
    r"^[KQRBN]?([a-h][1-8])[-x]?([a-h][1-8])=?([qrbnQRBN])?[+#]?$"
)
_MOVE_NUMBER_RE = re.compile(r"^\d+\.+")
_ANNOTATION_RE = re.compile(r"[!?]+$")


# ── Positions ────────────────────────────────────────────────────────────────


def validate_fen(fen: str) -> str | None:
    """Return ``None`` when *fen* describes a valid position, else the reason."""
    if not isinstance(fen, str) or not fen.strip():
        return "empty FEN"
    try:
        board = chess.Board(fen.strip())
    except ValueError as exc:
        return str(exc)

    status = board.status()
    if status == chess.STATUS_VALID:
        return None
    problems = [
        flag.name.lower().replace("_", " ")
        for flag in chess.Status
        if flag and flag.name and status & flag
    ]
    return ", ".join(problems) or "invalid position"


def canonical_position(fen: str) -> Position:
    """Validate *fen* and return the engine's canonical encoding of it."""
    reason = validate_fen(fen)
    if reason is not None:
        raise InvalidPositionError(fen, reason)
    return chess.Board(fen.strip()).fen()


def board_at(position: Position) -> chess.Board:
    """Fresh board for *position* (no move stack)."""
    try:
        return chess.Board(position)
    except ValueError as exc:
        raise InvalidPositionError(position, str(exc)) from exc


# ── Moves ────────────────────────────────────────────────────────────────────


def replay(
    position: Position,
    token: str,
    *,
    sloppy: bool = False,
) -> tuple[PlayedMove, Position]:
    """Play the move written as *token* from *position*.

    Strict mode accepts UCI coordinates and SAN. Sloppy mode also accepts
    move-number prefixes, annotation glyphs and long algebraic notation.
    """
    board = board_at(position)
    move = _parse_token(board, token, sloppy=sloppy)
    if move is None:
        raise IllegalMoveError(token, position, "not a legal move")
    return _push(board, move)


def replay_coordinates(
    position: Position,
    from_square: chess.Square | str,
    to_square: chess.Square | str,
    promotion: chess.PieceType | str | None = None,
) -> tuple[PlayedMove, Position]:
    """Play a from/to square move, as produced by dragging a piece."""
    from_sq = _square(from_square)
    to_sq = _square(to_square)
    if from_sq is None or to_sq is None:
        raise IllegalMoveError(f"{from_square}{to_square}", position, "unknown square")
    promo = _piece_type(promotion)
    token = chess.square_name(from_sq) + chess.square_name(to_sq)
    if promo is None and promotion not in (None, ""):
        raise IllegalMoveError(f"{token}{promotion}", position, "unknown promotion piece")
    if promo is not None:
        token += chess.piece_symbol(promo)

    board = board_at(position)
    move = chess.Move(from_sq, to_sq, promotion=promo)
    if not board.is_legal(move):
        raise IllegalMoveError(token, position, "not a legal move")
    return _push(board, move)


def apply_move(position: Position, move: chess.Move) -> tuple[PlayedMove, Position]:
    """Play an already-parsed :class:`chess.Move` after checking legality."""
    board = board_at(position)
    if not move or not board.is_legal(move):
        raise IllegalMoveError(move.uci(), position, "not a legal move")
    return _push(board, move)


def _push(board: chess.Board, move: chess.Move) -> tuple[PlayedMove, Position]:
    san = board.san(move)
    color = board.turn
    if board.is_en_passant(move):
        captured: chess.PieceType | None = chess.PAWN
    elif board.is_castling(move):
        captured = None
    else:
        captured = board.piece_type_at(move.to_square)

    board.push(move)
    played = PlayedMove(
        move=move,
        san=san,
        color=color,
        captured=captured,
        is_check=board.is_check(),
        is_checkmate=board.is_checkmate(),
    )
    return played, board.fen()


def _parse_token(board: chess.Board, token: str, *, sloppy: bool) -> chess.Move | None:
    text = token.strip() if isinstance(token, str) else ""
    if not text:
        return None

    if sloppy:
        text = _MOVE_NUMBER_RE.sub("", text)
        text = _ANNOTATION_RE.sub("", text)
        if not text:
            return None

    candidates = [text]
    if sloppy:
        long_form = _LONG_ALGEBRAIC_RE.match(text)
        if long_form is not None:
            from_sq, to_sq, promo = long_form.groups()
            candidates.append(from_sq + to_sq + (promo or "").lower())
        if text.lower() != text and _UCI_RE.match(text.lower()):
            candidates.append(text.lower())

    for candidate in candidates:
        move = _parse_single(board, candidate)
        if move is not None:
            return move
    return None


def _parse_single(board: chess.Board, text: str) -> chess.Move | None:
    try:
        if _UCI_RE.match(text):
            move = board.parse_uci(text)
        else:
            move = board.parse_san(text)
    except ValueError:
        return None
    # parse_san maps "--" to a null move; the tree only holds real moves.
    if not move:
        return None
    return move


def _square(value: chess.Square | str) -> chess.Square | None:
    if isinstance(value, str):
        try:
            return chess.parse_square(value.strip().lower())
        except ValueError:
            return None
    if value in chess.SQUARES:
        return value
    return None


def _piece_type(value: chess.PieceType | str | None) -> chess.PieceType | None:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            return chess.Piece.from_symbol(value.strip().lower()).piece_type
        except (ValueError, IndexError):
            return None
    if value in chess.PIECE_TYPES:
        return value
    return None
