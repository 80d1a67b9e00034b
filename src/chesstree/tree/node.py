"""VariationNode: one position in the game tree."""

from __future__ import annotations

import weakref
from collections.abc import Iterator

from chesstree.core.models import PlayedMove, Position


class VariationNode:
    """A position reached by playing :attr:`move` from :attr:`parent`.

    The tree is owned top-down: a node holds strong references to its
    children and only a weak reference to its parent, so dropping the root
    releases the whole tree. ``children[0]`` is the main-line continuation.

    Nodes compare by identity, never by position; the same position may
    appear in different branches (transpositions).
    """

    __slots__ = (
        "__weakref__",
        "position",
        "move",
        "children",
        "comment",
        "_parent_ref",
        "_ply",
    )

    def __init__(
        self,
        parent: VariationNode | None,
        position: Position,
        move: PlayedMove | None,
    ) -> None:
        self.position = position
        self.move = move
        self.children: list[VariationNode] = []
        self.comment = ""
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._ply = parent.ply + 1 if parent is not None else 0

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def parent(self) -> VariationNode | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def ply(self) -> int:
        """Number of moves between the root and this node."""
        return self._ply

    @property
    def is_main_line(self) -> bool:
        """True when every step from the root follows the first child."""
        node = self
        parent = node.parent
        while parent is not None:
            if not parent.children or parent.children[0] is not node:
                return False
            node, parent = parent, parent.parent
        return True

    # ── Structural queries ───────────────────────────────────────────────

    def top_of_line(self) -> VariationNode:
        """Return the root of the tree this node belongs to."""
        node = self
        parent = node.parent
        while parent is not None:
            node, parent = parent, parent.parent
        return node

    def bottom_of_line(self) -> VariationNode:
        """Follow the main line down to a leaf (``self`` when already a leaf)."""
        node = self
        while node.children:
            node = node.children[0]
        return node

    def line_from_root(self) -> list[VariationNode]:
        """Nodes from the root down to and including this one."""
        line = [self]
        parent = self.parent
        while parent is not None:
            line.append(parent)
            parent = parent.parent
        line.reverse()
        return line

    def moves_from_root(self) -> list[PlayedMove]:
        return [node.move for node in self.line_from_root() if node.move is not None]

    def main_line(self) -> Iterator[VariationNode]:
        """Yield the main-line continuation after this node."""
        node = self
        while node.children:
            node = node.children[0]
            yield node

    def walk(self) -> Iterator[VariationNode]:
        """Pre-order traversal of this node and every descendant."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def child_with_position(self, position: Position) -> VariationNode | None:
        for child in self.children:
            if child.position == position:
                return child
        return None

    def __repr__(self) -> str:
        label = self.move.san if self.move is not None else "root"
        return f"VariationNode({label!r}, ply={self._ply}, children={len(self.children)})"
