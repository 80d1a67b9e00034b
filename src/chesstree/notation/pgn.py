"""PGN import/export of a complete variation tree via ``chess.pgn``."""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping

import chess
import chess.pgn

from chesstree.core.errors import (
    IllegalMoveError,
    InvalidPgnError,
    InvalidPositionError,
    VariationTreeError,
)
from chesstree.core.rules import apply_move, canonical_position
from chesstree.tree.builder import insert_move
from chesstree.tree.node import VariationNode

_LOGGER = logging.getLogger(__name__)


class _TagTrackingBuilder(chess.pgn.GameBuilder):
    """GameBuilder that also reports whether any tag pair was read.

    ``read_game`` fills in the Seven Tag Roster on its own, so the headers of
    the result cannot tell a tag-only game apart from free text.
    """

    def begin_game(self) -> None:
        self.saw_tags = False
        super().begin_game()

    def visit_header(self, tagname: str, tagvalue: str) -> None:
        self.saw_tags = True
        super().visit_header(tagname, tagvalue)

    def result(self) -> tuple[chess.pgn.Game, bool]:  # type: ignore[override]
        return super().result(), self.saw_tags


def tree_to_pgn(
    root: VariationNode,
    headers: Mapping[str, str] | None = None,
) -> str:
    """Serialise the tree below *root* as PGN.

    The first child of every node is written as the main move, the others
    as parenthesised variations in insertion order.
    """
    game = chess.pgn.Game()
    board = chess.Board(root.position)
    if board.fen() != chess.STARTING_FEN:
        game.setup(board)
    for key, value in (headers or {}).items():
        game.headers[key] = value
    game.comment = root.comment

    stack: list[tuple[VariationNode, chess.pgn.GameNode]] = [(root, game)]
    while stack:
        node, pgn_node = stack.pop()
        for child in node.children:
            if child.move is None:
                raise VariationTreeError(f"Node below ply {node.ply} has no move")
            pgn_child = pgn_node.add_variation(child.move.move, comment=child.comment)
            stack.append((child, pgn_child))

    return str(game)


def tree_from_pgn(text: str) -> VariationNode:
    """Parse the first game in *text* into a new tree and return its root."""
    try:
        parsed = chess.pgn.read_game(io.StringIO(text), Visitor=_TagTrackingBuilder)
    except ValueError as exc:
        raise InvalidPgnError(f"Unreadable PGN: {exc}") from exc
    if parsed is None:
        raise InvalidPgnError("No game found in PGN text")
    game, saw_tags = parsed
    if not saw_tags and not game.variations:
        raise InvalidPgnError("No tags or moves found in PGN text")
    if game.errors:
        raise InvalidPgnError(f"PGN contains errors: {game.errors[0]}")

    try:
        root = VariationNode(None, canonical_position(game.board().fen()), None)
    except InvalidPositionError as exc:
        raise InvalidPgnError(f"Invalid FEN header: {exc.reason}") from exc
    root.comment = game.comment

    count = 0
    stack: list[tuple[chess.pgn.GameNode, VariationNode]] = [(game, root)]
    while stack:
        pgn_node, node = stack.pop()
        for pgn_child in pgn_node.variations:
            try:
                played, position = apply_move(node.position, pgn_child.move)
            except IllegalMoveError as exc:
                raise InvalidPgnError(str(exc)) from exc
            child = insert_move(node, played, position)
            if pgn_child.comment:
                child.comment = pgn_child.comment
            stack.append((pgn_child, child))
            count += 1

    _LOGGER.debug("Imported PGN with %d moves", count)
    return root
