"""Cursor navigation over a variation tree.

The cursor is just a :class:`VariationNode`; every function here takes the
current cursor and returns the new one without touching the tree.
"""

from __future__ import annotations

import logging

from chesstree.core.errors import ForeignNodeError
from chesstree.core.models import Position
from chesstree.core.rules import canonical_position
from chesstree.tree.node import VariationNode

_LOGGER = logging.getLogger(__name__)


def step_back(cursor: VariationNode) -> VariationNode:
    parent = cursor.parent
    return parent if parent is not None else cursor


def step_forward(cursor: VariationNode) -> VariationNode:
    """Follow the main line one move; a leaf stays where it is."""
    if cursor.children:
        return cursor.children[0]
    return cursor


def step_into_variation(cursor: VariationNode, index: int) -> VariationNode:
    """Enter the *index*-th continuation, or stay put when it does not exist."""
    if 0 <= index < len(cursor.children):
        return cursor.children[index]
    return cursor


def go_to_start(cursor: VariationNode) -> VariationNode:
    return cursor.top_of_line()


def go_to_end(cursor: VariationNode) -> VariationNode:
    return cursor.bottom_of_line()


def go_to(cursor: VariationNode, target: VariationNode) -> VariationNode:
    """Jump to *target*, which must belong to the cursor's tree."""
    if target is cursor:
        return cursor
    if target.top_of_line() is not cursor.top_of_line():
        raise ForeignNodeError(f"{target!r} is not part of the current tree")
    return target


def reset_to(position: Position) -> VariationNode:
    """Discard the current tree and start a new one at *position*.

    The new root stores ``canonical_position(position)``, which differs from
    *position* when the FEN names an en passant square with no legal capture
    or omits the move clocks. Compare against the canonical form, not the
    input string.

    Raises :class:`~chesstree.core.errors.InvalidPositionError` before
    anything is created when *position* is not a valid FEN.
    """
    root = VariationNode(None, canonical_position(position), None)
    _LOGGER.debug("Reset tree to %s", root.position)
    return root
