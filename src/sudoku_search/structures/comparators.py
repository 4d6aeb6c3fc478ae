"""Ordering predicates shared by the tree, map and heap.

A predicate ``comp(a, b)`` returns True when ``a`` should come before ``b``.
"""

from typing import Any


def less(a: Any, b: Any) -> bool:
    """Natural ascending order (min-heap / ascending tree)."""
    return a < b


def greater(a: Any, b: Any) -> bool:
    """Natural descending order (max-heap)."""
    return a > b


def equal(a: Any, b: Any) -> bool:
    return a == b


def entry_less(a: Any, b: Any) -> bool:
    """Order map entries by key only."""
    return a.key < b.key


def entry_equal(a: Any, b: Any) -> bool:
    """Deduplicate map entries by key only."""
    return a.key == b.key
