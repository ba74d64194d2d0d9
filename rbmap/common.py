"""Common utility types and functions for the rbmap library.

This module provides the shared vocabulary of the tree implementation:
comparison results, the ordering predicate type, and the small container
base classes the map and set build on.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, List, Optional

__all__ = [
    "Impossible",
    "Iterating",
    "Less",
    "Ordering",
    "Sized",
    "Unit",
    "by_key",
    "compare",
    "default_less",
    "flip",
]


class Impossible(Exception):
    """Exception raised when encountering theoretically impossible states.

    Used to indicate internal consistency violations in tree operations.
    """

    pass


@dataclass(frozen=True)
class Unit:
    """Singleton unit type representing no meaningful value.

    Used as the value type of maps that only care about their keys.
    """

    @staticmethod
    def instance() -> Unit:
        """Get the singleton Unit instance.

        Returns:
            The global Unit instance.
        """
        return _UNIT


_UNIT = Unit()


class Sized(metaclass=ABCMeta):
    @abstractmethod
    def size(self) -> int: ...

    def null(self) -> bool:
        return self.size() == 0

    def __bool__(self) -> bool:
        return not self.null()

    def __len__(self) -> int:
        return self.size()


class Iterating[U](metaclass=ABCMeta):
    @abstractmethod
    def iter(self) -> Iterator[U]: ...

    def list(self) -> List[U]:
        return list(self.iter())

    def __iter__(self) -> Iterator[U]:
        return self.iter()


class Ordering(Enum):
    """Enumeration representing the result of a comparison operation."""

    Lt = -1
    Eq = 0
    Gt = 1


# A strict weak order: True iff the first key sorts before the second
type Less[K] = Callable[[K, K], bool]


def default_less(a: Any, b: Any) -> bool:
    """Order keys with their own ``<`` operator."""
    return a < b


def compare[K](less: Less[K], a: K, b: K) -> Ordering:
    """Compare two keys under a strict weak order.

    Keys for which neither ``less(a, b)`` nor ``less(b, a)`` holds are
    considered equal.

    Args:
        less: The ordering predicate.
        a: First key to compare.
        b: Second key to compare.

    Returns:
        Ordering indicating the relationship between a and b.

    Example:
        >>> compare(default_less, 1, 2)
        <Ordering.Lt: -1>
        >>> compare(flip(default_less), 1, 2)
        <Ordering.Gt: 1>
    """
    if less(a, b):
        return Ordering.Lt
    elif less(b, a):
        return Ordering.Gt
    else:
        return Ordering.Eq


def flip[K](less: Less[K]) -> Less[K]:
    """Reverse an ordering, turning an ascending map into a descending one.

    Args:
        less: The ordering to reverse.

    Returns:
        An ordering that sorts b before a whenever ``less`` sorts a before b.
    """

    def flipped(a: K, b: K) -> bool:
        return less(b, a)

    return flipped


def by_key[K, P](project: Callable[[K], P], less: Optional[Less[P]] = None) -> Less[K]:
    """Order keys by a projection of themselves, in the manner of ``sorted(key=...)``.

    Args:
        project: Function extracting the comparison key.
        less: Ordering over projected keys, ``default_less`` if omitted.

    Returns:
        An ordering over the original keys.
    """
    inner: Less[P] = default_less if less is None else less

    def projected(a: K, b: K) -> bool:
        return inner(project(a), project(b))

    return projected
