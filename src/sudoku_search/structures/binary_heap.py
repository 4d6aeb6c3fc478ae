"""Array-backed binary heap and the priority queue built on it.

Ordering is injected as a predicate ``comp(a, b)`` that returns True when
``a`` has priority over ``b``. The default ``less`` gives a min-heap,
``greater`` a max-heap; any domain-specific order works the same way.
"""

from typing import Callable, Generic, List, TypeVar

from .comparators import less
from .exceptions import EmptyQueueError

T = TypeVar('T')


class BinaryHeap(Generic[T]):
    """Binary heap keeping the dominant element at index 0."""

    def __init__(self, comp: Callable[[T, T], bool] = less):
        """Initialize an empty heap.

        Args:
            comp: Priority predicate, True when the first argument dominates
        """
        self._heap: List[T] = []
        self._comp = comp

    def push(self, element: T) -> None:
        self._heap.append(element)
        self._sift_up(len(self._heap) - 1)

    def peek(self) -> T:
        if not self._heap:
            raise EmptyQueueError("peek from an empty heap")
        return self._heap[0]

    def pop(self) -> T:
        """Remove and return the dominant element.

        Raises:
            EmptyQueueError: If the heap has no elements
        """
        if not self._heap:
            raise EmptyQueueError("pop from an empty heap")

        heap = self._heap
        top = heap[0]
        heap[0], heap[-1] = heap[-1], heap[0]
        heap.pop()
        if heap:
            self._sift_down(0)
        return top

    def is_empty(self) -> bool:
        return not self._heap

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def clear(self) -> None:
        self._heap.clear()

    def _sift_up(self, index: int) -> None:
        heap = self._heap
        while index > 0:
            parent = (index - 1) // 2
            if not self._comp(heap[index], heap[parent]):
                break
            heap[index], heap[parent] = heap[parent], heap[index]
            index = parent

    def _sift_down(self, index: int) -> None:
        heap = self._heap
        size = len(heap)
        while True:
            left = 2 * index + 1
            right = left + 1
            best = index

            if left < size and self._comp(heap[left], heap[best]):
                best = left
            if right < size and self._comp(heap[right], heap[best]):
                best = right

            if best == index:
                return
            heap[index], heap[best] = heap[best], heap[index]
            index = best


class PriorityQueue(Generic[T]):
    """Queue interface over a ``BinaryHeap``."""

    def __init__(self, comp: Callable[[T, T], bool] = less):
        self._heap: BinaryHeap[T] = BinaryHeap(comp)

    def enqueue(self, element: T) -> None:
        self._heap.push(element)

    def peek(self) -> T:
        if self._heap.is_empty():
            raise EmptyQueueError("Queue is empty!")
        return self._heap.peek()

    def dequeue(self) -> T:
        if self._heap.is_empty():
            raise EmptyQueueError("Queue is empty!")
        return self._heap.pop()

    def is_empty(self) -> bool:
        return self._heap.is_empty()

    def size(self) -> int:
        return self._heap.size()

    def __len__(self) -> int:
        return len(self._heap)

    def clear(self) -> None:
        self._heap.clear()
