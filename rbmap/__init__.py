from rbmap.common import Impossible, Ordering, Unit, by_key, compare, default_less, flip
from rbmap.debug import InvariantViolation, dump, verify
from rbmap.map import RbMap
from rbmap.node import Color, Dir, RbNode
from rbmap.set import RbSet

__all__ = [
    "Color",
    "Dir",
    "Impossible",
    "InvariantViolation",
    "Ordering",
    "RbMap",
    "RbNode",
    "RbSet",
    "Unit",
    "by_key",
    "compare",
    "default_less",
    "dump",
    "flip",
    "verify",
]
