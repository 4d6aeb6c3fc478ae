"""Tests for the red-black tree and the ordered map built on it."""

import random

import pytest

from sudoku_search.structures import (
    RedBlackTree, OrderedMap, Entry, Color, NIL, KeyNotFoundError
)
from sudoku_search.structures.comparators import greater


class TestRedBlackTree:
    """Test RedBlackTree insertion, deletion and invariants."""

    @pytest.fixture
    def tree(self):
        tree = RedBlackTree()
        for value in [41, 38, 31, 12, 19, 8]:
            tree.insert(value)
        return tree

    def test_empty_tree(self):
        """An empty tree has no root and is trivially balanced."""
        tree = RedBlackTree()
        assert tree.is_empty()
        assert len(tree) == 0
        assert tree.root == NIL
        assert tree.is_balanced()
        assert tree.black_height() == 0
        assert list(tree) == []

    def test_insert_keeps_order(self, tree):
        """In-order iteration yields ascending values."""
        assert list(tree) == [8, 12, 19, 31, 38, 41]
        assert tree.size() == 6
        assert tree.min() == 8
        assert tree.max() == 41

    def test_root_is_black(self, tree):
        assert tree.node(tree.root).color == Color.BLACK

    def test_sequential_inserts_stay_balanced(self):
        """Ascending inserts trigger rotations without breaking invariants."""
        tree = RedBlackTree()
        for value in range(100):
            tree.insert(value)
            assert tree.is_balanced()

        # n >= 2^bh - 1 bounds the black height
        assert tree.black_height() <= 8
        assert list(tree) == list(range(100))

    def test_duplicate_insert_returns_existing(self, tree):
        """Inserting an equal value returns the stored node."""
        handle = tree.search(19)
        assert tree.insert(19) == handle
        assert tree.size() == 6

    def test_search_and_contains(self, tree):
        assert tree.contains(31)
        assert not tree.contains(32)
        assert tree.search(32) == NIL
        assert tree.node(tree.search(31)).value == 31

    def test_remove_leaf_and_internal(self, tree):
        """Removing leaves and nodes with two children keeps the order."""
        assert tree.remove(8)
        assert tree.remove(38)
        assert list(tree) == [12, 19, 31, 41]
        assert tree.is_balanced()

    def test_remove_missing(self, tree):
        assert tree.remove(100) is False
        assert tree.size() == 6

    def test_remove_everything(self, tree):
        """Draining the tree leaves it empty and reusable."""
        for value in [19, 8, 41, 12, 31, 38]:
            assert tree.remove(value)
            assert tree.is_balanced()

        assert tree.is_empty()
        assert tree.root == NIL

        tree.insert(7)
        assert list(tree) == [7]

    def test_random_operations_keep_invariants(self):
        """Random interleaved inserts and removals preserve all invariants."""
        rng = random.Random(1234)
        tree = RedBlackTree()
        reference = set()

        for _ in range(500):
            value = rng.randint(0, 200)
            if rng.random() < 0.6:
                tree.insert(value)
                reference.add(value)
            else:
                assert tree.remove(value) == (value in reference)
                reference.discard(value)
            assert tree.is_balanced()

        assert list(tree) == sorted(reference)
        assert len(tree) == len(reference)

    def test_custom_ordering(self):
        """The injected predicate decides the iteration order."""
        tree = RedBlackTree(less=greater)
        for value in [3, 1, 2]:
            tree.insert(value)
        assert list(tree) == [3, 2, 1]
        assert tree.is_balanced()

    def test_successor_walk(self, tree):
        handle = tree.search(12)
        assert tree.node(tree.successor(handle)).value == 19
        assert tree.successor(tree.search(41)) == NIL

    def test_min_of_empty_tree(self):
        with pytest.raises(ValueError):
            RedBlackTree().min()

    def test_invalid_handle(self, tree):
        with pytest.raises(ValueError):
            tree.node(999)

    def test_clear(self, tree):
        tree.clear()
        assert tree.is_empty()
        assert list(tree) == []
        assert tree.is_balanced()

    def test_dump_tree(self, tree):
        """Every node appears once with its color."""
        dump = tree.dump_tree()
        lines = dump.splitlines()
        assert len(lines) == 6
        assert all("(RED)" in line or "(BLACK)" in line for line in lines)
        assert f"{tree.node(tree.root).value} (BLACK)" in dump


class TestOrderedMap:
    """Test OrderedMap key/value semantics."""

    @pytest.fixture
    def ordered_map(self):
        m = OrderedMap()
        m.insert(3, "c")
        m.insert(1, "a")
        m.insert(2, "b")
        return m

    def test_insert_and_get(self, ordered_map):
        assert ordered_map.get(1) == "a"
        assert ordered_map[2] == "b"
        assert ordered_map.size() == 3

    def test_insert_existing_keeps_value(self, ordered_map):
        """insert() is lookup-or-insert."""
        entry = ordered_map.insert(1, "other")
        assert isinstance(entry, Entry)
        assert entry.value == "a"
        assert ordered_map.size() == 3

    def test_setitem_overwrites(self, ordered_map):
        ordered_map[1] = "z"
        assert ordered_map.get(1) == "z"
        ordered_map[4] = "d"
        assert ordered_map.size() == 4

    def test_get_missing_raises(self, ordered_map):
        """A missing key raises and leaves the map unchanged."""
        with pytest.raises(KeyNotFoundError):
            ordered_map.get(42)
        with pytest.raises(KeyError):
            ordered_map[42]
        assert ordered_map.size() == 3

    def test_contains(self, ordered_map):
        assert ordered_map.contains(2)
        assert 3 in ordered_map
        assert 5 not in ordered_map

    def test_remove(self, ordered_map):
        assert ordered_map.remove(2)
        assert not ordered_map.contains(2)
        assert ordered_map.remove(2) is False
        assert ordered_map.size() == 2

    def test_iteration_is_sorted(self, ordered_map):
        assert list(ordered_map) == [1, 2, 3]
        assert list(ordered_map.keys()) == [1, 2, 3]
        assert list(ordered_map.values()) == ["a", "b", "c"]
        assert list(ordered_map.items()) == [(1, "a"), (2, "b"), (3, "c")]
        assert [e.key for e in ordered_map.entries()] == [1, 2, 3]

    def test_clear(self, ordered_map):
        ordered_map.clear()
        assert ordered_map.is_empty()
        assert len(ordered_map) == 0

    def test_many_keys_stay_balanced(self):
        m = OrderedMap()
        for key in range(64):
            m.insert(key, key * key)
        for key in range(0, 64, 2):
            m.remove(key)

        assert m.is_balanced()
        assert list(m) == list(range(1, 64, 2))
        assert m.get(9) == 81

    def test_repr(self, ordered_map):
        assert repr(ordered_map) == "OrderedMap({1: 'a', 2: 'b', 3: 'c'})"
