"""Tree construction: inserting moves without duplicating existing lines."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from chesstree.core.errors import IllegalMoveError, MoveReplayError
from chesstree.core.models import PlayedMove, Position
from chesstree.core.rules import STARTING_FEN, canonical_position, replay
from chesstree.tree.node import VariationNode

_LOGGER = logging.getLogger(__name__)

# Tokens in a stored movetext that are not moves: "1.", "12...", results.
_MOVE_NUMBER_ONLY_RE = re.compile(r"^\d+\.+$")
_RESULT_TOKENS = frozenset({"1-0", "0-1", "1/2-1/2", "*"})


def insert_move(
    cursor_node: VariationNode,
    move: PlayedMove,
    resulting_position: Position,
) -> VariationNode:
    """Return the child of *cursor_node* for *resulting_position*.

    An existing child with the same position is reused; otherwise a new
    child is appended after the existing ones. Calling this twice with the
    same arguments returns the same node.
    """
    existing = cursor_node.child_with_position(resulting_position)
    if existing is not None:
        return existing

    child = VariationNode(cursor_node, resulting_position, move)
    cursor_node.children.append(child)
    _LOGGER.debug(
        "Added %s at ply %d (variation %d)",
        move.san,
        child.ply,
        len(cursor_node.children) - 1,
    )
    return child


def play_move(
    cursor_node: VariationNode,
    token: str,
    *,
    sloppy: bool = False,
) -> VariationNode:
    """Replay one move token from *cursor_node* and insert the result."""
    played, position = replay(cursor_node.position, token, sloppy=sloppy)
    return insert_move(cursor_node, played, position)


def insert_move_sequence(
    start_node: VariationNode,
    tokens: Iterable[str],
    *,
    sloppy: bool = True,
) -> VariationNode:
    """Insert a whole line below *start_node* and return its last node.

    Each token is replayed from the position the previous one produced.
    On an illegal token :class:`MoveReplayError` is raised; moves before it
    remain in the tree.
    """
    node = start_node
    for index, token in enumerate(tokens):
        try:
            played, position = replay(node.position, token, sloppy=sloppy)
        except IllegalMoveError as exc:
            raise MoveReplayError(token, node.position, index, exc.reason) from exc
        node = insert_move(node, played, position)
    return node


def build_from_moves(
    tokens: Iterable[str],
    starting_position: Position = STARTING_FEN,
    *,
    sloppy: bool = True,
) -> tuple[VariationNode, VariationNode]:
    """Build a fresh tree from a move list.

    Returns ``(root, cursor)`` with the cursor on the last inserted node
    (the root itself for an empty list).
    """
    root = VariationNode(None, canonical_position(starting_position), None)
    cursor = insert_move_sequence(root, tokens, sloppy=sloppy)
    _LOGGER.debug("Built tree with %d plies", cursor.ply)
    return root, cursor


def build_from_movetext(
    text: str,
    starting_position: Position = STARTING_FEN,
    *,
    sloppy: bool = True,
) -> tuple[VariationNode, VariationNode]:
    """Build a tree from a whitespace-separated movetext string."""
    return build_from_moves(
        split_movetext(text),
        starting_position,
        sloppy=sloppy,
    )


def split_movetext(text: str) -> list[str]:
    """Split *text* into move tokens, dropping move numbers and results."""
    tokens: list[str] = []
    for raw in text.split():
        if _MOVE_NUMBER_ONLY_RE.match(raw) or raw in _RESULT_TOKENS:
            continue
        tokens.append(raw)
    return tokens
