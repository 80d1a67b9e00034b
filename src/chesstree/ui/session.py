"""Qt bridge exposing an :class:`AnalysisController` through signals/slots."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesstree.core.errors import ForeignNodeError, VariationTreeError
from chesstree.game.controller import AnalysisController
from chesstree.game.settings import AnalysisSettings
from chesstree.tree.node import VariationNode

_LOGGER = logging.getLogger(__name__)


class VariationSession(QObject):
    """UI-thread owner of the analysis cursor.

    Board, move list and annotation widgets connect to the signals; input
    widgets and hotkeys call the slots. Rejected input is reported through
    :attr:`move_rejected` because a slot has no caller to raise to.
    """

    cursor_changed = pyqtSignal(object)  # VariationNode
    tree_reset = pyqtSignal(object)  # new root VariationNode
    move_rejected = pyqtSignal(str)  # message

    __slots__ = ("_controller",)

    def __init__(
        self,
        settings: AnalysisSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = AnalysisController(settings)
        self._controller.events.on_cursor_changed.append(self.cursor_changed.emit)
        self._controller.events.on_tree_reset.append(self.tree_reset.emit)

    @property
    def controller(self) -> AnalysisController:
        return self._controller

    @property
    def cursor(self) -> VariationNode:
        return self._controller.cursor

    @property
    def root(self) -> VariationNode:
        return self._controller.root

    # ── Moves ────────────────────────────────────────────────────────────

    @pyqtSlot(str, str, str)
    def make_move(self, from_square: str, to_square: str, promotion: str = "") -> None:
        """Board drag/drop; *promotion* is a piece letter or empty."""
        try:
            self._controller.make_move(from_square, to_square, promotion or None)
        except VariationTreeError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot(str)
    def play(self, token: str) -> None:
        try:
            self._controller.play(token)
        except VariationTreeError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot(object)
    def make_moves(self, tokens: object) -> None:
        """Insert an engine line given as a list of move tokens."""
        if not isinstance(tokens, (list, tuple)):
            self.move_rejected.emit("Move line must be a list of moves")
            return
        try:
            self._controller.make_moves([str(token) for token in tokens])
        except VariationTreeError as exc:
            self.move_rejected.emit(str(exc))

    # ── Navigation ───────────────────────────────────────────────────────

    @pyqtSlot()
    def undo_move(self) -> None:
        self._controller.undo_move()

    @pyqtSlot()
    def redo_move(self) -> None:
        self._controller.redo_move()

    @pyqtSlot()
    def go_to_start(self) -> None:
        self._controller.go_to_start()

    @pyqtSlot()
    def go_to_end(self) -> None:
        self._controller.go_to_end()

    @pyqtSlot(int)
    def enter_variation(self, index: int) -> None:
        self._controller.enter_variation(index)

    @pyqtSlot(object)
    def go_to(self, node: object) -> None:
        """Jump to a node clicked in the move list."""
        if not isinstance(node, VariationNode):
            _LOGGER.warning("Ignoring jump to non-node %r", node)
            return
        try:
            self._controller.go_to(node)
        except ForeignNodeError:
            # Stale node from a tree that was reset in the meantime.
            _LOGGER.warning("Ignoring jump to node outside the current tree")

    # ── Whole-tree replacement ───────────────────────────────────────────

    @pyqtSlot(str)
    def reset_to_fen(self, fen: str) -> None:
        try:
            self._controller.reset_to_fen(fen)
        except VariationTreeError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot(str)
    def load_moves(self, movetext: str) -> None:
        try:
            self._controller.load_moves(movetext)
        except VariationTreeError as exc:
            self.move_rejected.emit(str(exc))

    @pyqtSlot(str)
    def load_pgn(self, text: str) -> None:
        try:
            self._controller.load_pgn(text)
        except VariationTreeError as exc:
            self.move_rejected.emit(str(exc))

    def export_pgn(self) -> str:
        return self._controller.export_pgn()
