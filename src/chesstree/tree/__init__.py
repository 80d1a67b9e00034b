"""Variation tree: nodes, insertion and cursor navigation."""

from chesstree.tree.builder import (
    build_from_movetext,
    build_from_moves,
    insert_move,
    insert_move_sequence,
    play_move,
    split_movetext,
)
from chesstree.tree.cursor import (
    go_to,
    go_to_end,
    go_to_start,
    reset_to,
    step_back,
    step_forward,
    step_into_variation,
)
from chesstree.tree.node import VariationNode

__all__ = [
    "VariationNode",
    # Builder
    "build_from_movetext",
    "build_from_moves",
    "insert_move",
    "insert_move_sequence",
    "play_move",
    "split_movetext",
    # Cursor
    "go_to",
    "go_to_end",
    "go_to_start",
    "reset_to",
    "step_back",
    "step_forward",
    "step_into_variation",
]
