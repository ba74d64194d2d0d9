"""Mutable ordered map implementation based on red-black trees"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Union, override

from rbmap.common import (
    Impossible,
    Iterating,
    Less,
    Ordering,
    Sized,
    compare,
    default_less,
)
from rbmap.debug import verify
from rbmap.node import Color, Dir, RbNode, is_black, is_red
from rbmap.tree import RbTree

__all__ = ["RbMap"]


@dataclass(frozen=True)
class Missing:
    pass


_MISSING = Missing()


class RbMap[K, V](RbTree[K, V], Sized, Iterating[Tuple[K, V]]):
    """An ordered map with unique keys kept in a red-black tree.

    Keys are ordered solely by the ``less`` predicate given at construction.
    Search, insertion and deletion take O(log n). Nodes handed out by
    ``find_node``, ``first``, ``last``, ``next`` and ``prev`` can be used to
    walk the map in either direction or to delete that entry directly.

    Not safe for concurrent use: callers must serialize access themselves.

    Example:
        >>> m = RbMap[int, str]()
        >>> m.insert(2, "two")
        True
        >>> m.insert(1, "one")
        True
        >>> m.insert(2, "deux")
        False
        >>> list(m.items())
        [(1, 'one'), (2, 'deux')]
    """

    def __init__(self, less: Optional[Less[K]] = None) -> None:
        super().__init__()
        self._less: Less[K] = default_less if less is None else less
        self._size = 0

    @staticmethod
    def mk(pairs: Iterable[Tuple[K, V]], less: Optional[Less[K]] = None) -> RbMap[K, V]:
        """Create a map from an iterable of key-value pairs.

        Later pairs overwrite the values of earlier pairs with equal keys.

        Time Complexity: O(n log n) where n is the number of pairs
        Space Complexity: O(n) for the resulting tree

        Args:
            pairs: Iterable of (key, value) tuples.
            less: Ordering predicate, ``default_less`` if omitted.

        Returns:
            A map containing all the given key-value pairs.
        """
        rbmap: RbMap[K, V] = RbMap(less)
        for key, value in pairs:
            rbmap.insert(key, value)
        return rbmap

    @property
    def less(self) -> Less[K]:
        return self._less

    @override
    def size(self) -> int:
        """Get the number of entries in the map.

        Time Complexity: O(1)
        Space Complexity: O(1)
        """
        return self._size

    def clear(self) -> None:
        """Remove every entry.

        Nodes previously handed out become invalid.
        """
        logging.debug("Clearing map of %d entries", self._size)
        self._root = None
        self._size = 0

    # ----- Lookup -----

    def find_node(self, key: K) -> Optional[RbNode[K, V]]:
        """Find the node holding a key.

        Time Complexity: O(log n)
        Space Complexity: O(1)

        Args:
            key: The key to look up.

        Returns:
            The node whose key compares equal to ``key``, or None.
        """
        node = self._root
        while node is not None:
            match compare(self._less, key, node.key):
                case Ordering.Lt:
                    node = node.left
                case Ordering.Gt:
                    node = node.right
                case Ordering.Eq:
                    return node
                case _:
                    raise Impossible
        return None

    def find(self, key: K) -> Optional[V]:
        """Get the value associated with a key, returning None if not found."""
        node = self.find_node(key)
        return None if node is None else node.value

    def lookup(self, key: K) -> Optional[V]:
        return self.find(key)

    def get(self, key: K, default: Union[V, Missing] = _MISSING) -> V:
        """Get the value associated with a key.

        Args:
            key: The key to look up.
            default: Value to return if key is not found. If not provided and key
                    is not found, raises KeyError.

        Raises:
            KeyError: If key is not found and no default is provided.
        """
        node = self.find_node(key)
        if node is not None:
            return node.value
        elif isinstance(default, Missing):
            raise KeyError(key)
        else:
            return default

    def contains(self, key: K) -> bool:
        return self.find_node(key) is not None

    # ----- Insertion -----

    def insert(self, key: K, value: V) -> bool:
        """Insert a key-value pair, or overwrite the value of an equal key.

        Time Complexity: O(log n)
        Space Complexity: O(1)

        Args:
            key: The key to insert.
            value: The value to associate with the key.

        Returns:
            True if a new entry was created, False if an existing entry's
            value was replaced (the tree shape is then unchanged).
        """
        parent: Optional[RbNode[K, V]] = None
        side = Dir.Left
        node = self._root
        while node is not None:
            parent = node
            match compare(self._less, key, node.key):
                case Ordering.Lt:
                    side = Dir.Left
                    node = node.left
                case Ordering.Gt:
                    side = Dir.Right
                    node = node.right
                case Ordering.Eq:
                    node.value = value
                    return False
                case _:
                    raise Impossible
        fresh = RbNode(key, value, Color.Red, parent)
        if parent is None:
            self._root = fresh
        else:
            parent.set_child(side, fresh)
        self._size += 1
        self._insert_fixup(fresh)
        return True

    def _insert_fixup(self, node: RbNode[K, V]) -> None:
        # A red node under a red parent is pushed up by recoloring while the
        # uncle is red, then settled with one or two rotations.
        while is_red(node.parent):
            parent = node.parent
            assert parent is not None
            grandparent = parent.parent
            if grandparent is None:
                # A red parent is never the root
                raise Impossible
            side = parent.side()
            uncle = grandparent.child(side.opposite)
            if uncle is not None and uncle.color == Color.Red:
                parent.color = Color.Black
                uncle.color = Color.Black
                grandparent.color = Color.Red
                node = grandparent
            else:
                if node is parent.child(side.opposite):
                    # Inner grandchild: straighten into the outer shape first
                    node = parent
                    self.rotate(node, side)
                    parent = node.parent
                    assert parent is not None
                parent.color = Color.Black
                grandparent.color = Color.Red
                self.rotate(grandparent, side.opposite)
        assert self._root is not None
        self._root.color = Color.Black

    # ----- Deletion -----

    def delete(self, key: K) -> bool:
        """Remove the entry for a key.

        Time Complexity: O(log n)
        Space Complexity: O(1)

        Returns:
            True if an entry was removed, False if the key was absent.
        """
        node = self.find_node(key)
        if node is None:
            return False
        self.delete_node(node)
        return True

    def delete_node(self, node: RbNode[K, V]) -> None:
        """Remove the entry held by a live node of this map.

        When the node has two children, the key and value of its in-order
        predecessor are moved into it and the predecessor's node is removed
        instead. A caller holding ``node`` then sees the predecessor's entry
        there, while a handle to the predecessor becomes invalid.

        Time Complexity: O(log n)
        Space Complexity: O(1)

        Args:
            node: A node obtained from this map and not removed since.
        """
        if node.left is not None and node.right is not None:
            pred = node.left.max()
            node.key, node.value = pred.key, pred.value
            node = pred
        child = node.left if node.left is not None else node.right
        parent = node.parent
        side = node.side() if parent is not None else Dir.Left
        self.transplant(node, child)
        if node.color == Color.Black:
            self._delete_fixup(child, parent, side)
        node.detach()
        self._size -= 1

    def _delete_fixup(
        self,
        node: Optional[RbNode[K, V]],
        parent: Optional[RbNode[K, V]],
        side: Dir,
    ) -> None:
        # The subtree at ``node`` (the ``side`` child of ``parent``) is one
        # black short. Either absorb the deficit locally or move it upward.
        while parent is not None and is_black(node):
            sibling = parent.child(side.opposite)
            if sibling is None:
                # The sibling side carries at least one black node
                raise Impossible
            if sibling.color == Color.Red:
                sibling.color = Color.Black
                parent.color = Color.Red
                self.rotate(parent, side)
                sibling = parent.child(side.opposite)
                if sibling is None:
                    raise Impossible
            if is_black(sibling.left) and is_black(sibling.right):
                sibling.color = Color.Red
                node = parent
                parent = node.parent
                if parent is not None:
                    side = node.side()
            else:
                far = sibling.child(side.opposite)
                if far is None or far.color == Color.Black:
                    near = sibling.child(side)
                    if near is None:
                        raise Impossible
                    near.color = Color.Black
                    sibling.color = Color.Red
                    self.rotate(sibling, side.opposite)
                    sibling = parent.child(side.opposite)
                    if sibling is None:
                        raise Impossible
                    far = sibling.child(side.opposite)
                    if far is None:
                        raise Impossible
                sibling.color = parent.color
                parent.color = Color.Black
                far.color = Color.Black
                self.rotate(parent, side)
                node = self._root
                parent = None
        if node is not None:
            node.color = Color.Black

    # ----- Traversal -----

    def first(self) -> Optional[RbNode[K, V]]:
        """Get the node with the smallest key, or None if the map is empty."""
        return None if self._root is None else self._root.min()

    def last(self) -> Optional[RbNode[K, V]]:
        """Get the node with the largest key, or None if the map is empty."""
        return None if self._root is None else self._root.max()

    def next(self, node: RbNode[K, V]) -> Optional[RbNode[K, V]]:
        return node.next()

    def prev(self, node: RbNode[K, V]) -> Optional[RbNode[K, V]]:
        return node.prev()

    @override
    def iter(self) -> Iterator[Tuple[K, V]]:
        """Iterate over all key-value pairs in ascending key order.

        Time Complexity: O(n) for complete iteration
        Space Complexity: O(1)
        """
        node = self.first()
        while node is not None:
            yield (node.key, node.value)
            node = node.next()

    def iter_reversed(self) -> Iterator[Tuple[K, V]]:
        """Iterate over all key-value pairs in descending key order."""
        node = self.last()
        while node is not None:
            yield (node.key, node.value)
            node = node.prev()

    def keys(self) -> Iterator[K]:
        for key, _ in self.iter():
            yield key

    def values(self) -> Iterator[V]:
        for _, value in self.iter():
            yield value

    def items(self) -> Iterator[Tuple[K, V]]:
        yield from self.iter()

    def verify(self) -> None:
        """Check every red-black invariant, raising InvariantViolation on failure.

        Walks the whole tree; intended for tests and debugging only.
        """
        verify(self)

    # ----- Python container protocol -----

    def __contains__(self, key: K) -> bool:
        return self.contains(key)

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        if not self.delete(key):
            raise KeyError(key)

    def __reversed__(self) -> Iterator[Tuple[K, V]]:
        return self.iter_reversed()

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r}: {value!r}" for key, value in self.iter())
        return f"RbMap({{{body}}})"
