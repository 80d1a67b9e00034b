"""Tests for AnalysisController: the host-owned cursor slot."""

from __future__ import annotations

import chess
import pytest

from chesstree.core.errors import (
    ForeignNodeError,
    IllegalMoveError,
    InvalidPgnError,
    InvalidPositionError,
    MoveReplayError,
)
from chesstree.core.rules import STARTING_FEN
from chesstree.game.controller import AnalysisController
from chesstree.game.settings import AnalysisSettings
from chesstree.tree.builder import build_from_moves
from chesstree.tree.node import VariationNode


def _controller_with_events() -> tuple[AnalysisController, list[VariationNode], list[VariationNode]]:
    ctrl = AnalysisController()
    cursors: list[VariationNode] = []
    resets: list[VariationNode] = []
    ctrl.events.on_cursor_changed.append(cursors.append)
    ctrl.events.on_tree_reset.append(resets.append)
    return ctrl, cursors, resets


class TestNewSession:
    def test_starts_at_lone_root(self) -> None:
        ctrl = AnalysisController()
        assert ctrl.cursor is ctrl.root
        assert ctrl.position == STARTING_FEN
        assert ctrl.root.children == []

    def test_custom_starting_fen(self) -> None:
        fen = "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1"
        ctrl = AnalysisController(AnalysisSettings(starting_fen=fen))
        assert ctrl.position == fen

    def test_invalid_starting_fen(self) -> None:
        with pytest.raises(InvalidPositionError):
            AnalysisController(AnalysisSettings(starting_fen="bogus"))


class TestMoves:
    def test_make_move_advances_cursor(self) -> None:
        ctrl, cursors, _ = _controller_with_events()
        node = ctrl.make_move("e2", "e4")
        assert ctrl.cursor is node
        assert node.move.san == "e4"
        assert cursors == [node]

    def test_make_move_with_square_indices(self) -> None:
        ctrl = AnalysisController()
        node = ctrl.make_move(chess.G1, chess.F3)
        assert node.move.san == "Nf3"

    def test_repeated_move_reuses_node(self) -> None:
        ctrl = AnalysisController()
        first = ctrl.make_move("e2", "e4")
        ctrl.undo_move()
        second = ctrl.make_move("e2", "e4")
        assert first is second
        assert len(ctrl.root.children) == 1

    def test_illegal_board_move_leaves_state(self) -> None:
        ctrl, cursors, _ = _controller_with_events()
        with pytest.raises(IllegalMoveError):
            ctrl.make_move("e2", "e5")
        assert ctrl.cursor is ctrl.root
        assert ctrl.root.children == []
        assert cursors == []

    def test_play_is_strict_by_default(self) -> None:
        ctrl = AnalysisController()
        with pytest.raises(IllegalMoveError):
            ctrl.play("1.e4")
        assert ctrl.play("e4").move.san == "e4"

    def test_play_sloppy_when_configured(self) -> None:
        ctrl = AnalysisController(AnalysisSettings(sloppy_board_moves=True))
        assert ctrl.play("1.e4").move.san == "e4"

    def test_make_moves_from_engine_line(self) -> None:
        ctrl, cursors, _ = _controller_with_events()
        ctrl.make_moves(["e2e4", "e7e5", "g1f3"])
        assert ctrl.cursor.ply == 3
        assert ctrl.cursor.move.san == "Nf3"
        assert cursors == [ctrl.cursor]

    def test_make_moves_branches_from_cursor(self) -> None:
        ctrl = AnalysisController()
        ctrl.make_moves(["e4", "e5", "Nf3"])
        ctrl.undo_move()
        ctrl.make_moves(["Nc3", "Nf6"])
        s2 = ctrl.cursor.parent.parent
        assert [c.move.san for c in s2.children] == ["Nf3", "Nc3"]

    def test_make_moves_error_keeps_cursor(self) -> None:
        ctrl = AnalysisController()
        ctrl.make_moves(["e4"])
        before = ctrl.cursor
        with pytest.raises(MoveReplayError) as info:
            ctrl.make_moves(["e5", "Ke2", "Ke5"])
        assert info.value.index == 2
        assert ctrl.cursor is before


class TestNavigation:
    def test_undo_redo(self) -> None:
        ctrl = AnalysisController()
        ctrl.load_moves(["e4", "e5"])
        end = ctrl.cursor
        assert ctrl.undo_move()
        assert ctrl.cursor is end.parent
        assert ctrl.redo_move()
        assert ctrl.cursor is end

    def test_boundaries_are_noops_without_events(self) -> None:
        ctrl, cursors, _ = _controller_with_events()
        assert not ctrl.undo_move()
        assert not ctrl.redo_move()
        assert not ctrl.go_to_start()
        assert not ctrl.go_to_end()
        assert cursors == []

    def test_start_and_end(self) -> None:
        ctrl = AnalysisController()
        ctrl.load_moves("1. d4 d5 2. c4")
        end = ctrl.cursor
        assert ctrl.go_to_start()
        assert ctrl.cursor is ctrl.root
        assert ctrl.go_to_end()
        assert ctrl.cursor is end

    def test_enter_variation(self) -> None:
        ctrl = AnalysisController()
        ctrl.make_moves(["e4"])
        ctrl.undo_move()
        ctrl.make_moves(["d4"])
        ctrl.undo_move()
        assert ctrl.enter_variation(1)
        assert ctrl.cursor.move.san == "d4"
        assert not ctrl.enter_variation(3)

    def test_go_to(self) -> None:
        ctrl = AnalysisController()
        ctrl.load_moves(["e4", "e5", "Nf3"])
        target = ctrl.root.children[0]
        assert ctrl.go_to(target)
        assert ctrl.cursor is target

    def test_go_to_foreign_node(self) -> None:
        ctrl = AnalysisController()
        _root, other = build_from_moves(["e4"])
        with pytest.raises(ForeignNodeError):
            ctrl.go_to(other)


class TestReplaceTree:
    def test_reset_to_fen(self) -> None:
        ctrl, cursors, resets = _controller_with_events()
        ctrl.load_moves(["e4", "e5"])
        fen = "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1"
        root = ctrl.reset_to_fen(fen)
        assert ctrl.root is root
        assert ctrl.cursor is root
        assert root.position == fen
        assert resets[-1] is root
        assert cursors[-1] is root

    def test_invalid_reset_is_all_or_nothing(self) -> None:
        ctrl, cursors, resets = _controller_with_events()
        ctrl.load_moves(["e4", "e5"])
        root, cursor = ctrl.root, ctrl.cursor
        cursors.clear()
        resets.clear()
        with pytest.raises(InvalidPositionError):
            ctrl.reset_to_fen("8/8/8/8/8/8/8/8 w - - 0 1")
        assert ctrl.root is root
        assert ctrl.cursor is cursor
        assert cursors == []
        assert resets == []

    def test_load_moves_from_movetext(self) -> None:
        ctrl = AnalysisController()
        cursor = ctrl.load_moves("1. e4 e5 2. Nf3 *")
        assert cursor.move.san == "Nf3"
        assert ctrl.cursor is cursor

    def test_load_moves_failure_keeps_tree(self) -> None:
        ctrl = AnalysisController()
        ctrl.load_moves(["d4"])
        root = ctrl.root
        with pytest.raises(MoveReplayError):
            ctrl.load_moves(["e4", "e4"])
        assert ctrl.root is root

    def test_pgn_round_trip(self) -> None:
        ctrl = AnalysisController()
        ctrl.load_moves(["e4", "e5", "Nf3"])
        ctrl.undo_move()
        ctrl.make_moves(["Nc3"])
        text = ctrl.export_pgn({"Event": "Analysis"})
        assert '[Event "Analysis"]' in text

        other = AnalysisController()
        root = other.load_pgn(text)
        assert other.cursor is root
        assert len(root.children[0].children[0].children) == 2

    def test_bad_pgn_keeps_tree(self) -> None:
        ctrl = AnalysisController()
        root = ctrl.root
        with pytest.raises(InvalidPgnError):
            ctrl.load_pgn("")
        assert ctrl.root is root

    def test_free_text_pgn_keeps_tree(self) -> None:
        ctrl, cursor_log, reset_log = _controller_with_events()
        ctrl.load_moves("e4 e5 Nf3")
        root, cursor = ctrl.root, ctrl.cursor
        cursor_log.clear()
        reset_log.clear()
        with pytest.raises(InvalidPgnError):
            ctrl.load_pgn("this is not a chess game")
        assert ctrl.root is root
        assert ctrl.cursor is cursor
        assert len(list(root.walk())) == 4
        assert cursor_log == []
        assert reset_log == []
