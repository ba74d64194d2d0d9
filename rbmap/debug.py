"""Diagnostics for red-black trees: an invariant checker and a tree renderer.

Neither function is needed for correct operation. Both walk the entire tree
and are meant for tests and interactive debugging.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, List, NoReturn, Optional, Tuple

from rbmap.common import Less
from rbmap.node import Color, RbNode, is_black, is_red

if TYPE_CHECKING:
    from rbmap.map import RbMap

__all__ = ["InvariantViolation", "dump", "verify"]


class InvariantViolation(AssertionError):
    """Raised by ``verify`` when a tree breaks a red-black or ordering invariant."""

    pass


def _fail(message: str, node: Optional[RbNode] = None) -> NoReturn:
    if node is not None:
        message = f"{message} at key {node.key!r}"
    logging.error("Tree invariant violated: %s", message)
    raise InvariantViolation(message)


def verify(rbmap: RbMap[Any, Any]) -> None:
    """Check that a map satisfies every structural invariant.

    Verifies that the root is black and has no parent, that child and parent
    links agree, that no red node has a red child or parent, that every path
    from the root to an empty child position crosses the same number of black
    nodes, that keys are in strictly ascending order under the map's ordering,
    and that the node count matches ``size()``.

    Time Complexity: O(n)
    Space Complexity: O(log n) for recursion stack

    Args:
        rbmap: The map to check.

    Raises:
        InvariantViolation: Describing the first violation found.
    """
    root = rbmap.root
    if root is None:
        if rbmap.size() != 0:
            _fail(f"empty tree reports size {rbmap.size()}")
        return
    if root.parent is not None:
        _fail("root has a parent", root)
    if root.color != Color.Black:
        _fail("root is red", root)
    count, black_height = _check_subtree(rbmap.less, root, None, None)
    if count != rbmap.size():
        _fail(f"tree holds {count} nodes but reports size {rbmap.size()}")
    logging.debug("Verified %d entries with black height %d", count, black_height)


def _check_subtree(
    less: Less[Any],
    node: RbNode,
    low: Optional[RbNode],
    high: Optional[RbNode],
) -> Tuple[int, int]:
    # Returns (node count, black height) of the subtree; keys must fall
    # strictly between the nearest ancestors on either side.
    if low is not None and not less(low.key, node.key):
        _fail("key out of order with an ancestor on its left", node)
    if high is not None and not less(node.key, high.key):
        _fail("key out of order with an ancestor on its right", node)
    if is_red(node):
        if not is_black(node.parent):
            _fail("red node has a red parent", node)
        if not (is_black(node.left) and is_black(node.right)):
            _fail("red node has a red child", node)

    count = 1
    heights = []
    for child, child_low, child_high in (
        (node.left, low, node),
        (node.right, node, high),
    ):
        if child is None:
            heights.append(0)
            continue
        if child.parent is not node:
            _fail("child does not link back to its parent", child)
        child_count, child_height = _check_subtree(less, child, child_low, child_high)
        count += child_count
        heights.append(child_height)

    if heights[0] != heights[1]:
        _fail(f"black heights differ ({heights[0]} left, {heights[1]} right)", node)
    return count, heights[0] + (1 if node.color == Color.Black else 0)


def dump(rbmap: RbMap[Any, Any]) -> str:
    """Render a tree one node per line, children indented under their parent.

    Each line reads ``<side>[<key>:<value>]<color>`` where side is ``*`` for
    the root and ``L:``/``R:`` otherwise, and color is ``B`` or ``R``.

    Example:
        >>> from rbmap.map import RbMap
        >>> print(dump(RbMap.mk([(2, "b"), (1, "a"), (3, "c")])))
        *[2:'b']B
            L:[1:'a']R
            R:[3:'c']R
    """
    if rbmap.root is None:
        return "<empty tree>"
    lines: List[str] = []
    _dump_node(rbmap.root, 0, "*", lines)
    return "\n".join(lines)


def _dump_node(node: RbNode, depth: int, tag: str, lines: List[str]) -> None:
    color = "R" if node.color == Color.Red else "B"
    lines.append(f"{'    ' * depth}{tag}[{node.key!r}:{node.value!r}]{color}")
    if node.left is not None:
        _dump_node(node.left, depth + 1, "L:", lines)
    if node.right is not None:
        _dump_node(node.right, depth + 1, "R:", lines)
