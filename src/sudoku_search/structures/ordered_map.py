"""Ordered key/value map backed by a red-black tree."""

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Optional, Tuple, TypeVar

from .comparators import entry_equal, entry_less
from .exceptions import KeyNotFoundError
from .red_black_tree import NIL, RedBlackTree

K = TypeVar('K')
V = TypeVar('V')


@dataclass
class Entry(Generic[K, V]):
    """A key/value pair stored in the map. Ordered by key only."""
    key: K
    value: V = None


class OrderedMap(Generic[K, V]):
    """Associative container with ascending-key iteration.

    ``insert`` has lookup-or-insert semantics and returns the live entry;
    ``get`` never inserts and raises ``KeyNotFoundError`` for a missing key.
    """

    def __init__(self):
        self._tree: RedBlackTree[Entry[K, V]] = RedBlackTree(less=entry_less, equal=entry_equal)

    def _find(self, key: K) -> Optional[Entry[K, V]]:
        handle = self._tree.search(Entry(key))
        if handle == NIL:
            return None
        return self._tree.node(handle).value

    def insert(self, key: K, value: V = None) -> Entry[K, V]:
        """Return the entry for ``key``, creating it with ``value`` if absent.

        An existing entry keeps its current value.
        """
        handle = self._tree.insert(Entry(key, value))
        return self._tree.node(handle).value

    def get(self, key: K) -> V:
        """Return the value stored for ``key``.

        Raises:
            KeyNotFoundError: If ``key`` is not in the map
        """
        entry = self._find(key)
        if entry is None:
            raise KeyNotFoundError(key)
        return entry.value

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key).value = value

    def contains(self, key: K) -> bool:
        return self._find(key) is not None

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def remove(self, key: K) -> bool:
        """Remove ``key``. Returns False when it was not present."""
        return self._tree.remove(Entry(key))

    def size(self) -> int:
        return len(self._tree)

    def __len__(self) -> int:
        return len(self._tree)

    def is_empty(self) -> bool:
        return self._tree.is_empty()

    def clear(self) -> None:
        self._tree.clear()

    def entries(self) -> Iterator[Entry[K, V]]:
        """Entries in ascending key order."""
        return iter(self._tree)

    def __iter__(self) -> Iterator[K]:
        for entry in self._tree:
            yield entry.key

    def keys(self) -> Iterator[K]:
        return iter(self)

    def values(self) -> Iterator[V]:
        for entry in self._tree:
            yield entry.value

    def items(self) -> Iterator[Tuple[K, V]]:
        for entry in self._tree:
            yield entry.key, entry.value

    def is_balanced(self) -> bool:
        """Whether the backing tree satisfies the red-black invariants."""
        return self._tree.is_balanced()

    def dump_tree(self) -> str:
        return self._tree.dump_tree(lambda entry: f"{entry.key}")

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"OrderedMap({{{body}}})"
