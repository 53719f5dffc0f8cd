"""
NodeIndex tests
"""

import pytest

from codegraph_pagerank.common.exceptions import CapacityError
from codegraph_pagerank.pagerank.index_map import NodeIndex


class TestResolve:
    def test_assigns_indices_in_first_seen_order(self):
        index = NodeIndex(5)

        assert index.resolve(30, 10) == (0, 1)
        assert index.resolve(10, 20) == (1, 2)
        assert list(index.keys()) == [30, 10, 20]
        assert len(index) == 3

    def test_same_key_twice_gets_one_index(self):
        index = NodeIndex(1)

        assert index.resolve(7, 7) == (0, 0)
        assert len(index) == 1

    def test_mapping_is_bijective(self):
        index = NodeIndex(10)
        for key in (100, 3, 55, 3, 8):
            index.resolve(key)

        for i, key in enumerate(index.keys()):
            assert index.get(key) == i
            assert index.key_of(i) == key

    def test_remaining(self):
        index = NodeIndex(3)
        index.resolve(1, 2)
        assert index.remaining == 1


class TestCapacity:
    def test_fills_to_capacity(self):
        index = NodeIndex(2)
        index.resolve(1, 2)
        assert index.remaining == 0

    def test_overflow_is_atomic(self):
        index = NodeIndex(2)
        index.resolve(1)

        with pytest.raises(CapacityError) as exc_info:
            index.resolve(2, 3)

        assert exc_info.value.index == 1
        assert len(index) == 1
        assert 2 not in index
        assert 3 not in index

    def test_known_keys_resolve_when_full(self):
        index = NodeIndex(1)
        index.resolve(9)

        assert index.resolve(9, 9) == (0, 0)


class TestClear:
    def test_clear_resets_cursor(self):
        index = NodeIndex(2)
        index.resolve(1, 2)
        index.clear()

        assert len(index) == 0
        assert index.get(1) is None
        assert index.resolve(2) == (0,)
        assert index.capacity == 2

    def test_repr(self):
        index = NodeIndex(4)
        index.resolve(1)
        assert repr(index) == "NodeIndex(size=1, capacity=4)"
