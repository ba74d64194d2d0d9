"""Mutable ordered set implementation based on red-black trees"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, override

from rbmap.common import Iterating, Less, Sized, Unit
from rbmap.map import RbMap

__all__ = ["RbSet"]


class RbSet[K](Sized, Iterating[K]):
    """An ordered set of unique keys, stored as an ``RbMap`` of ``Unit`` values."""

    def __init__(self, less: Optional[Less[K]] = None) -> None:
        self._map: RbMap[K, Unit] = RbMap(less)

    @staticmethod
    def mk(keys: Iterable[K], less: Optional[Less[K]] = None) -> RbSet[K]:
        """Create a set from an iterable of keys, dropping duplicates.

        Time Complexity: O(n log n) where n is the number of keys
        Space Complexity: O(n) for the resulting tree
        """
        rbset: RbSet[K] = RbSet(less)
        for key in keys:
            rbset.add(key)
        return rbset

    @property
    def less(self) -> Less[K]:
        return self._map.less

    @override
    def size(self) -> int:
        return self._map.size()

    def add(self, key: K) -> bool:
        """Add a key.

        Returns:
            True if the key was new, False if it was already present.
        """
        return self._map.insert(key, Unit.instance())

    def discard(self, key: K) -> bool:
        """Remove a key if present.

        Returns:
            True if the key was removed, False if it was absent.
        """
        return self._map.delete(key)

    def remove(self, key: K) -> None:
        """Remove a key.

        Raises:
            KeyError: If the key is absent.
        """
        if not self._map.delete(key):
            raise KeyError(key)

    def contains(self, key: K) -> bool:
        return self._map.contains(key)

    def clear(self) -> None:
        self._map.clear()

    def first(self) -> Optional[K]:
        """Get the smallest key, or None if the set is empty."""
        node = self._map.first()
        return None if node is None else node.key

    def last(self) -> Optional[K]:
        """Get the largest key, or None if the set is empty."""
        node = self._map.last()
        return None if node is None else node.key

    @override
    def iter(self) -> Iterator[K]:
        """Iterate over all keys in ascending order."""
        return self._map.keys()

    def verify(self) -> None:
        self._map.verify()

    def __contains__(self, key: K) -> bool:
        return self.contains(key)

    def __reversed__(self) -> Iterator[K]:
        for key, _ in self._map.iter_reversed():
            yield key

    def __repr__(self) -> str:
        return f"RbSet({{{', '.join(repr(key) for key in self.iter())}}})"
