"""Notation package: PGN import/export of variation trees."""

from chesstree.notation.pgn import tree_from_pgn, tree_to_pgn

__all__ = [
    "tree_from_pgn",
    "tree_to_pgn",
]
