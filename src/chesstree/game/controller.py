"""AnalysisController: owns the variation tree and the current-node cursor.

Coordinates: rules adapter, tree builder, cursor navigation, PGN I/O.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

import chess

from chesstree.core.errors import (
    IllegalMoveError,
    InvalidPgnError,
    InvalidPositionError,
    VariationTreeError,
)
from chesstree.core.models import Position
from chesstree.core.rules import replay_coordinates
from chesstree.game.settings import AnalysisSettings
from chesstree.notation.pgn import tree_from_pgn, tree_to_pgn
from chesstree.tree import cursor as nav
from chesstree.tree.builder import (
    build_from_movetext,
    build_from_moves,
    insert_move,
    insert_move_sequence,
    play_move,
)
from chesstree.tree.node import VariationNode

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

CursorCallback = Callable[[VariationNode], None]  # new cursor
TreeResetCallback = Callable[[VariationNode], None]  # new root


@dataclass
class AnalysisEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_cursor_changed: list[CursorCallback] = field(default_factory=list)
    on_tree_reset: list[TreeResetCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class AnalysisController:
    """Holds the single mutable cursor slot of an analysis session.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread). Engine suggestions must be marshalled onto that
    thread before calling :meth:`make_moves`.

    Every failing operation raises and leaves both tree and cursor as they
    were before the call.
    """

    __slots__ = ("_root", "_cursor", "_settings", "events")

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        self._settings = settings if settings is not None else AnalysisSettings()
        self._root = nav.reset_to(self._settings.starting_fen)
        self._cursor = self._root
        self.events = AnalysisEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def root(self) -> VariationNode:
        return self._root

    @property
    def cursor(self) -> VariationNode:
        return self._cursor

    @property
    def position(self) -> Position:
        return self._cursor.position

    @property
    def settings(self) -> AnalysisSettings:
        return self._settings

    # ── Moves ────────────────────────────────────────────────────────────

    def make_move(
        self,
        from_square: chess.Square | str,
        to_square: chess.Square | str,
        promotion: chess.PieceType | str | None = None,
    ) -> VariationNode:
        """Play a board move from the cursor and advance onto it."""
        try:
            played, position = replay_coordinates(
                self._cursor.position, from_square, to_square, promotion
            )
        except IllegalMoveError as exc:
            _LOGGER.warning("Rejected board move: %s", exc)
            raise
        self._set_cursor(insert_move(self._cursor, played, position))
        return self._cursor

    def play(self, token: str) -> VariationNode:
        """Play a single SAN/UCI token from the cursor."""
        try:
            node = play_move(
                self._cursor, token, sloppy=self._settings.sloppy_board_moves
            )
        except IllegalMoveError as exc:
            _LOGGER.warning("Rejected move: %s", exc)
            raise
        self._set_cursor(node)
        return node

    def make_moves(self, tokens: Iterable[str]) -> VariationNode:
        """Insert a whole line (e.g. an engine PV) and jump to its end.

        Raises :class:`~chesstree.core.errors.MoveReplayError` on the first
        bad token; the cursor stays where it was.
        """
        try:
            node = insert_move_sequence(
                self._cursor,
                list(tokens),
                sloppy=self._settings.sloppy_engine_moves,
            )
        except IllegalMoveError as exc:
            _LOGGER.warning("Rejected move line: %s", exc)
            raise
        self._set_cursor(node)
        return node

    # ── Navigation ───────────────────────────────────────────────────────

    def undo_move(self) -> bool:
        return self._set_cursor(nav.step_back(self._cursor))

    def redo_move(self) -> bool:
        return self._set_cursor(nav.step_forward(self._cursor))

    def enter_variation(self, index: int) -> bool:
        return self._set_cursor(nav.step_into_variation(self._cursor, index))

    def go_to_start(self) -> bool:
        return self._set_cursor(nav.go_to_start(self._cursor))

    def go_to_end(self) -> bool:
        return self._set_cursor(nav.go_to_end(self._cursor))

    def go_to(self, node: VariationNode) -> bool:
        return self._set_cursor(nav.go_to(self._cursor, node))

    # ── Whole-tree replacement ───────────────────────────────────────────

    def reset_to_fen(self, fen: str) -> VariationNode:
        """Discard the tree and start over at *fen* (validated first)."""
        try:
            root = nav.reset_to(fen)
        except InvalidPositionError as exc:
            _LOGGER.warning("Rejected FEN reset: %s", exc.reason)
            raise
        self._replace_tree(root, root)
        return root

    def load_moves(
        self,
        moves: str | Iterable[str],
        starting_fen: str | None = None,
    ) -> VariationNode:
        """Replace the tree with one built from a move list or movetext."""
        start = starting_fen if starting_fen is not None else self._settings.starting_fen
        sloppy = self._settings.sloppy_engine_moves
        try:
            if isinstance(moves, str):
                root, cursor = build_from_movetext(moves, start, sloppy=sloppy)
            else:
                root, cursor = build_from_moves(moves, start, sloppy=sloppy)
        except VariationTreeError as exc:
            _LOGGER.warning("Rejected move list: %s", exc)
            raise
        self._replace_tree(root, cursor)
        return cursor

    def load_pgn(self, text: str) -> VariationNode:
        """Replace the tree with the one described by PGN *text*.

        The cursor is placed on the root, matching a freshly opened game.
        """
        try:
            root = tree_from_pgn(text)
        except InvalidPgnError as exc:
            _LOGGER.warning("Rejected PGN: %s", exc)
            raise
        self._replace_tree(root, root)
        return root

    def export_pgn(self, headers: Mapping[str, str] | None = None) -> str:
        return tree_to_pgn(self._root, headers)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _replace_tree(self, root: VariationNode, cursor: VariationNode) -> None:
        self._root = root
        self._cursor = cursor
        for cb in self.events.on_tree_reset:
            cb(root)
        self._emit_cursor()

    def _set_cursor(self, node: VariationNode) -> bool:
        if node is self._cursor:
            return False
        self._cursor = node
        self._emit_cursor()
        return True

    def _emit_cursor(self) -> None:
        for cb in self.events.on_cursor_changed:
            cb(self._cursor)
