import pytest

from rbmap.common import flip
from rbmap.set import RbSet


def test_empty_set():
    """Test creating an empty RbSet and asserting it is empty"""
    rbset = RbSet[int]()
    assert rbset.null()
    assert rbset.size() == 0
    assert rbset.first() is None
    assert rbset.last() is None
    assert list(rbset) == []


def test_add_and_contains():
    """Test adding keys reports whether each was new"""
    rbset = RbSet[int]()
    assert rbset.add(3)
    assert rbset.add(1)
    assert not rbset.add(3)
    assert rbset.size() == 2
    assert 3 in rbset
    assert rbset.contains(1)
    assert 2 not in rbset
    rbset.verify()


def test_ordering_and_ends():
    """Test iteration order and first/last"""
    rbset = RbSet.mk([5, 3, 8, 1, 4, 7, 9, 3])
    assert list(rbset) == [1, 3, 4, 5, 7, 8, 9]
    assert list(reversed(rbset)) == [9, 8, 7, 5, 4, 3, 1]
    assert rbset.first() == 1
    assert rbset.last() == 9
    assert repr(rbset) == "RbSet({1, 3, 4, 5, 7, 8, 9})"


def test_discard_and_remove():
    """Test discard is silent on absent keys and remove raises"""
    rbset = RbSet.mk([1, 2, 3])
    assert rbset.discard(2)
    assert not rbset.discard(2)
    rbset.remove(1)
    with pytest.raises(KeyError):
        rbset.remove(1)
    assert list(rbset) == [3]
    rbset.verify()


def test_custom_ordering():
    """Test a set ordered by a supplied predicate"""
    rbset = RbSet.mk(["b", "c", "a"], flip(lambda a, b: a < b))
    assert list(rbset) == ["c", "b", "a"]
    assert rbset.first() == "c"
    assert rbset.less("b", "a")


def test_clear():
    """Test clear removes every key"""
    rbset = RbSet.mk(range(10))
    rbset.clear()
    assert rbset.null()
    assert rbset.add(4)
    assert list(rbset) == [4]
