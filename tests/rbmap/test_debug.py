"""Tests for the invariant checker and tree renderer."""

import pytest

from rbmap.debug import InvariantViolation, dump, verify
from rbmap.map import RbMap
from rbmap.node import Color


def _scenario_map() -> RbMap[int, str]:
    # Root 5 and its children 3, 8 are black; leaves 1, 4, 7, 9 are red
    return RbMap.mk((k, str(k)) for k in [5, 3, 8, 1, 4, 7, 9])


def _node(rbmap: RbMap, key):
    node = rbmap.find_node(key)
    assert node is not None
    return node


def test_verify_accepts_valid_trees():
    """Test verify passes on empty and populated maps"""
    verify(RbMap())
    verify(_scenario_map())


def test_violation_is_an_assertion_error():
    """Test InvariantViolation reads as a failed assertion"""
    assert issubclass(InvariantViolation, AssertionError)


def test_detects_red_root():
    """Test a red root is rejected"""
    rbmap = _scenario_map()
    _node(rbmap, 5).color = Color.Red
    with pytest.raises(InvariantViolation, match="root is red"):
        verify(rbmap)


def test_detects_red_child_of_red():
    """Test two consecutive reds are rejected"""
    rbmap = _scenario_map()
    _node(rbmap, 3).color = Color.Red
    with pytest.raises(InvariantViolation, match="red node has a red child"):
        verify(rbmap)


def test_detects_black_height_mismatch():
    """Test unequal black counts across siblings are rejected"""
    rbmap = _scenario_map()
    _node(rbmap, 1).color = Color.Black
    with pytest.raises(InvariantViolation, match="black heights differ"):
        verify(rbmap)


def test_detects_broken_parent_link():
    """Test a child pointing at the wrong parent is rejected"""
    rbmap = _scenario_map()
    _node(rbmap, 1).parent = _node(rbmap, 8)
    with pytest.raises(InvariantViolation, match="link back to its parent"):
        verify(rbmap)


def test_detects_out_of_order_keys():
    """Test swapped keys break the search order check"""
    rbmap = _scenario_map()
    one, four = _node(rbmap, 1), _node(rbmap, 4)
    one.key, four.key = four.key, one.key
    with pytest.raises(InvariantViolation, match="out of order"):
        verify(rbmap)


def test_detects_size_mismatch():
    """Test a wrong entry count is rejected"""
    rbmap = _scenario_map()
    rbmap._size += 1
    with pytest.raises(InvariantViolation, match="reports size 8"):
        verify(rbmap)

    empty = RbMap[int, int]()
    empty._size = 2
    with pytest.raises(InvariantViolation, match="empty tree"):
        verify(empty)


def test_map_verify_delegates():
    """Test RbMap.verify runs the same checks"""
    rbmap = _scenario_map()
    rbmap.verify()
    _node(rbmap, 5).color = Color.Red
    with pytest.raises(InvariantViolation):
        rbmap.verify()


def test_dump_empty():
    """Test dumping an empty tree"""
    assert dump(RbMap()) == "<empty tree>"


def test_dump_scenario():
    """Test dump renders sides, colors and indentation"""
    assert dump(_scenario_map()).splitlines() == [
        "*[5:'5']B",
        "    L:[3:'3']B",
        "        L:[1:'1']R",
        "        R:[4:'4']R",
        "    R:[8:'8']B",
        "        L:[7:'7']R",
        "        R:[9:'9']R",
    ]
