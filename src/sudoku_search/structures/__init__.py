"""Container types used by the search engine.

Provides a red-black tree, an ordered map on top of it and a binary-heap
priority queue with an injectable ordering predicate.
"""

from .exceptions import KeyNotFoundError, EmptyQueueError
from .red_black_tree import RedBlackTree, Color, NIL
from .ordered_map import OrderedMap, Entry
from .binary_heap import BinaryHeap, PriorityQueue
from . import comparators

__all__ = [
    'KeyNotFoundError',
    'EmptyQueueError',
    'RedBlackTree',
    'Color',
    'NIL',
    'OrderedMap',
    'Entry',
    'BinaryHeap',
    'PriorityQueue',
    'comparators'
]
