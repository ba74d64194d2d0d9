"""Shape-changing primitives shared by every red-black tree algorithm.

Rotations and transplant are the only operations that rewire links between
nodes. Each runs in constant time and leaves the in-order key sequence
unchanged.
"""

from __future__ import annotations

from typing import Optional

from rbmap.common import Impossible
from rbmap.node import Dir, RbNode

__all__ = ["RbTree"]


class RbTree[K, V]:
    """Owner of a root link, with the rotation and transplant primitives."""

    def __init__(self) -> None:
        self._root: Optional[RbNode[K, V]] = None

    @property
    def root(self) -> Optional[RbNode[K, V]]:
        return self._root

    def transplant(self, old: RbNode[K, V], new: Optional[RbNode[K, V]]) -> None:
        """Replace the subtree rooted at ``old`` with the one rooted at ``new``.

        The parent of ``old`` (or the root link) is pointed at ``new`` and
        ``new`` takes over ``old``'s parent. ``old`` keeps its own links.
        """
        parent = old.parent
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new
        if new is not None:
            new.parent = parent

    def rotate(self, node: RbNode[K, V], direction: Dir) -> None:
        """Rotate ``node`` down toward ``direction``.

        The child on the opposite side rises into ``node``'s position and
        ``node`` becomes its child on the ``direction`` side. The rising
        child's inner subtree moves across to ``node``.

        Raises:
            Impossible: If there is no child on the opposite side to rise.
        """
        rising = node.child(direction.opposite)
        if rising is None:
            raise Impossible
        self.transplant(node, rising)
        inner = rising.child(direction)
        node.set_child(direction.opposite, inner)
        if inner is not None:
            inner.parent = node
        rising.set_child(direction, node)
        node.parent = rising

    def left_rotate(self, node: RbNode[K, V]) -> None:
        """Lift ``node.right`` into ``node``'s position."""
        self.rotate(node, Dir.Left)

    def right_rotate(self, node: RbNode[K, V]) -> None:
        """Lift ``node.left`` into ``node``'s position."""
        self.rotate(node, Dir.Right)
