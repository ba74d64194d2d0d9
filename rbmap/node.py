"""Red-black tree nodes and the structural helpers that navigate them."""

from __future__ import annotations

from enum import Enum, auto, unique
from typing import Optional

from rbmap.common import Impossible

__all__ = ["Color", "Dir", "RbNode", "is_black", "is_red"]


@unique
class Color(Enum):
    Black = auto()
    Red = auto()


@unique
class Dir(Enum):
    """Which child link of a node is meant.

    Fixups and rotations are written once against a direction and its
    opposite, so the mirrored halves of each algorithm share one code path.
    """

    Left = auto()
    Right = auto()

    @property
    def opposite(self) -> Dir:
        return Dir.Right if self == Dir.Left else Dir.Left


class RbNode[K, V]:
    """A tree entry: key, value, color and the three structural links.

    ``left`` and ``right`` own their subtrees; ``parent`` is a back-reference
    used only to navigate. The value may be overwritten in place at any time
    without disturbing the tree. The key must not be changed by callers.
    """

    __slots__ = ["key", "value", "color", "parent", "left", "right"]

    def __init__(
        self,
        key: K,
        value: V,
        color: Color = Color.Red,
        parent: Optional[RbNode[K, V]] = None,
    ) -> None:
        self.key = key
        self.value = value
        self.color = color
        self.parent: Optional[RbNode[K, V]] = parent
        self.left: Optional[RbNode[K, V]] = None
        self.right: Optional[RbNode[K, V]] = None

    def __repr__(self) -> str:
        tag = "R" if self.color == Color.Red else "B"
        return f"RbNode({self.key!r}: {self.value!r}, {tag})"

    def child(self, direction: Dir) -> Optional[RbNode[K, V]]:
        return self.left if direction == Dir.Left else self.right

    def set_child(self, direction: Dir, node: Optional[RbNode[K, V]]) -> None:
        if direction == Dir.Left:
            self.left = node
        else:
            self.right = node

    def side(self) -> Dir:
        """Return which child of its parent this node is.

        Raises:
            Impossible: If called on a root, or on a node its parent does not
                link to.
        """
        parent = self.parent
        if parent is None:
            raise Impossible
        elif parent.left is self:
            return Dir.Left
        elif parent.right is self:
            return Dir.Right
        else:
            raise Impossible

    def sibling(self) -> Optional[RbNode[K, V]]:
        parent = self.parent
        if parent is None:
            return None
        return parent.right if parent.left is self else parent.left

    def extreme(self, direction: Dir) -> RbNode[K, V]:
        """Descend as far as possible in one direction from this node."""
        node = self
        while (step := node.child(direction)) is not None:
            node = step
        return node

    def min(self) -> RbNode[K, V]:
        """Return the node with the smallest key in this subtree."""
        return self.extreme(Dir.Left)

    def max(self) -> RbNode[K, V]:
        """Return the node with the largest key in this subtree."""
        return self.extreme(Dir.Right)

    def step(self, direction: Dir) -> Optional[RbNode[K, V]]:
        """Return the in-order neighbor in the given direction.

        ``Dir.Right`` is the successor and ``Dir.Left`` the predecessor. If the
        node has a child on that side the neighbor is the nearest key within
        that subtree; otherwise it is the first ancestor reached by climbing
        out of a subtree on the opposite side.

        Time Complexity: O(log n) worst case, O(1) amortized over a full scan
        Space Complexity: O(1)
        """
        down = self.child(direction)
        if down is not None:
            return down.extreme(direction.opposite)
        node = self
        parent = node.parent
        while parent is not None and node is parent.child(direction):
            node = parent
            parent = parent.parent
        return parent

    def next(self) -> Optional[RbNode[K, V]]:
        """Get the next node in ascending key order, or None at the end."""
        return self.step(Dir.Right)

    def prev(self) -> Optional[RbNode[K, V]]:
        """Get the previous node in ascending key order, or None at the start."""
        return self.step(Dir.Left)

    def detach(self) -> None:
        self.parent = None
        self.left = None
        self.right = None


def is_red(node: Optional[RbNode]) -> bool:
    return node is not None and node.color == Color.Red


def is_black(node: Optional[RbNode]) -> bool:
    # Empty child positions count as black
    return node is None or node.color == Color.Black
