"""Red-black tree with arena-allocated nodes.

Nodes live in a list owned by the tree and refer to each other through
integer handles instead of object references, so rotations and deletions
only ever rewrite integers. ``NIL`` (-1) stands for an absent child or parent
and is treated as a BLACK leaf.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

from .comparators import equal as default_equal
from .comparators import less as default_less

logger = logging.getLogger(__name__)

T = TypeVar('T')

NIL = -1


class Color(IntEnum):
    RED = 0
    BLACK = 1


@dataclass
class Node(Generic[T]):
    """A tree node. Links are handles into the owning tree's arena."""
    value: T
    color: Color = Color.RED
    parent: int = NIL
    left: int = NIL
    right: int = NIL


class RedBlackTree(Generic[T]):
    """Self-balancing binary search tree.

    Ordering and deduplication are driven by two injected predicates:
    ``less(a, b)`` and ``equal(a, b)``. Inserting a value equal to a stored
    one returns the existing node instead of adding a duplicate.
    """

    def __init__(self,
                 less: Callable[[T, T], bool] = default_less,
                 equal: Callable[[T, T], bool] = default_equal):
        """Initialize an empty tree.

        Args:
            less: Strict ordering predicate
            equal: Equality predicate consistent with ``less``
        """
        self._less = less
        self._equal = equal
        self._nodes: List[Optional[Node[T]]] = []
        self._free: List[int] = []
        self._root = NIL
        self._size = 0

    # ------------------------------------------------------------------
    # Arena management
    # ------------------------------------------------------------------

    def _allocate(self, value: T, parent: int) -> int:
        node = Node(value=value, parent=parent)
        if self._free:
            handle = self._free.pop()
            self._nodes[handle] = node
        else:
            handle = len(self._nodes)
            self._nodes.append(node)
        return handle

    def _release(self, handle: int) -> None:
        self._nodes[handle] = None
        self._free.append(handle)

    def node(self, handle: int) -> Node[T]:
        """Return the live node behind ``handle``."""
        node = self._nodes[handle] if 0 <= handle < len(self._nodes) else None
        if node is None:
            raise ValueError(f"Invalid node handle: {handle}")
        return node

    def _color(self, handle: int) -> Color:
        if handle == NIL:
            return Color.BLACK
        return self._nodes[handle].color

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def root(self) -> int:
        return self._root

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def search(self, value: T) -> int:
        """Find the node holding a value equal to ``value``.

        Returns:
            Handle of the matching node, or ``NIL`` if absent
        """
        current = self._root
        while current != NIL:
            node = self._nodes[current]
            if self._equal(node.value, value):
                return current
            current = node.left if self._less(value, node.value) else node.right
        return NIL

    def contains(self, value: T) -> bool:
        return self.search(value) != NIL

    def _minimum(self, handle: int) -> int:
        while self._nodes[handle].left != NIL:
            handle = self._nodes[handle].left
        return handle

    def _maximum(self, handle: int) -> int:
        while self._nodes[handle].right != NIL:
            handle = self._nodes[handle].right
        return handle

    def min(self) -> T:
        if self._root == NIL:
            raise ValueError("min() of an empty tree")
        return self._nodes[self._minimum(self._root)].value

    def max(self) -> T:
        if self._root == NIL:
            raise ValueError("max() of an empty tree")
        return self._nodes[self._maximum(self._root)].value

    def successor(self, handle: int) -> int:
        """In-order successor of ``handle`` or ``NIL`` for the last node."""
        node = self._nodes[handle]
        if node.right != NIL:
            return self._minimum(node.right)
        parent = node.parent
        while parent != NIL and handle == self._nodes[parent].right:
            handle = parent
            parent = self._nodes[parent].parent
        return parent

    def iter_handles(self) -> Iterator[int]:
        """Yield node handles in ascending order, leftmost first.

        The tree must not be mutated while the iterator is alive.
        """
        if self._root == NIL:
            return
        handle = self._minimum(self._root)
        while handle != NIL:
            yield handle
            handle = self.successor(handle)

    def __iter__(self) -> Iterator[T]:
        for handle in self.iter_handles():
            yield self._nodes[handle].value

    # ------------------------------------------------------------------
    # Rotations
    # ------------------------------------------------------------------

    def _replace_child(self, parent: int, old: int, new: int) -> None:
        if parent == NIL:
            self._root = new
        elif self._nodes[parent].left == old:
            self._nodes[parent].left = new
        else:
            self._nodes[parent].right = new

    def _rotate_left(self, handle: int) -> int:
        node = self._nodes[handle]
        pivot = node.right
        pivot_node = self._nodes[pivot]

        node.right = pivot_node.left
        if pivot_node.left != NIL:
            self._nodes[pivot_node.left].parent = handle

        pivot_node.parent = node.parent
        self._replace_child(node.parent, handle, pivot)

        pivot_node.left = handle
        node.parent = pivot
        return pivot

    def _rotate_right(self, handle: int) -> int:
        node = self._nodes[handle]
        pivot = node.left
        pivot_node = self._nodes[pivot]

        node.left = pivot_node.right
        if pivot_node.right != NIL:
            self._nodes[pivot_node.right].parent = handle

        pivot_node.parent = node.parent
        self._replace_child(node.parent, handle, pivot)

        pivot_node.right = handle
        node.parent = pivot
        return pivot

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def insert(self, value: T) -> int:
        """Insert ``value`` unless an equal value is already stored.

        Returns:
            Handle of the new node, or of the pre-existing equal node
        """
        parent = NIL
        current = self._root
        while current != NIL:
            node = self._nodes[current]
            if self._equal(node.value, value):
                return current
            parent = current
            current = node.left if self._less(value, node.value) else node.right

        handle = self._allocate(value, parent)
        if parent == NIL:
            self._root = handle
        elif self._less(value, self._nodes[parent].value):
            self._nodes[parent].left = handle
        else:
            self._nodes[parent].right = handle

        self._size += 1
        self._fix_insert(handle)
        return handle

    def _fix_insert(self, handle: int) -> None:
        nodes = self._nodes
        while handle != self._root and self._color(nodes[handle].parent) == Color.RED:
            parent = nodes[handle].parent
            grandparent = nodes[parent].parent

            if parent == nodes[grandparent].left:
                uncle = nodes[grandparent].right
                if self._color(uncle) == Color.RED:
                    nodes[parent].color = Color.BLACK
                    nodes[uncle].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    handle = grandparent
                    continue
                if handle == nodes[parent].right:
                    handle = parent
                    self._rotate_left(handle)
                    parent = nodes[handle].parent
                nodes[parent].color = Color.BLACK
                nodes[grandparent].color = Color.RED
                self._rotate_right(grandparent)
            else:
                uncle = nodes[grandparent].left
                if self._color(uncle) == Color.RED:
                    nodes[parent].color = Color.BLACK
                    nodes[uncle].color = Color.BLACK
                    nodes[grandparent].color = Color.RED
                    handle = grandparent
                    continue
                if handle == nodes[parent].left:
                    handle = parent
                    self._rotate_right(handle)
                    parent = nodes[handle].parent
                nodes[parent].color = Color.BLACK
                nodes[grandparent].color = Color.RED
                self._rotate_left(grandparent)

        nodes[self._root].color = Color.BLACK

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def remove(self, value: T) -> bool:
        """Remove the node holding a value equal to ``value``.

        A node with two children takes over its in-order successor's value
        and the successor's position is the one physically unlinked.

        Returns:
            True if a node was removed, False if the value was absent
        """
        target = self.search(value)
        if target == NIL:
            return False

        node = self._nodes[target]
        if node.left != NIL and node.right != NIL:
            successor = self._minimum(node.right)
            node.value = self._nodes[successor].value
            target = successor

        self._unlink(target)
        self._size -= 1
        return True

    def _unlink(self, handle: int) -> None:
        """Remove a node that has at most one child."""
        node = self._nodes[handle]
        child = node.left if node.left != NIL else node.right

        if child != NIL:
            self._nodes[child].parent = node.parent
            self._replace_child(node.parent, handle, child)
            if node.color == Color.BLACK:
                self._nodes[child].color = Color.BLACK
        elif node.parent == NIL:
            self._root = NIL
        else:
            # Leaf: fix the double black while the node still holds its place
            if node.color == Color.BLACK:
                self._fix_delete(handle)
            self._replace_child(node.parent, handle, NIL)

        self._release(handle)

    def _fix_delete(self, handle: int) -> None:
        nodes = self._nodes
        while handle != self._root and self._color(handle) == Color.BLACK:
            parent = nodes[handle].parent

            if handle == nodes[parent].left:
                sibling = nodes[parent].right
                if self._color(sibling) == Color.RED:
                    nodes[sibling].color = Color.BLACK
                    nodes[parent].color = Color.RED
                    self._rotate_left(parent)
                    sibling = nodes[parent].right

                if (self._color(nodes[sibling].left) == Color.BLACK and
                        self._color(nodes[sibling].right) == Color.BLACK):
                    nodes[sibling].color = Color.RED
                    handle = parent
                    continue

                if self._color(nodes[sibling].right) == Color.BLACK:
                    nodes[nodes[sibling].left].color = Color.BLACK
                    nodes[sibling].color = Color.RED
                    self._rotate_right(sibling)
                    sibling = nodes[parent].right

                nodes[sibling].color = nodes[parent].color
                nodes[parent].color = Color.BLACK
                nodes[nodes[sibling].right].color = Color.BLACK
                self._rotate_left(parent)
                handle = self._root
            else:
                sibling = nodes[parent].left
                if self._color(sibling) == Color.RED:
                    nodes[sibling].color = Color.BLACK
                    nodes[parent].color = Color.RED
                    self._rotate_right(parent)
                    sibling = nodes[parent].left

                if (self._color(nodes[sibling].left) == Color.BLACK and
                        self._color(nodes[sibling].right) == Color.BLACK):
                    nodes[sibling].color = Color.RED
                    handle = parent
                    continue

                if self._color(nodes[sibling].left) == Color.BLACK:
                    nodes[nodes[sibling].right].color = Color.BLACK
                    nodes[sibling].color = Color.RED
                    self._rotate_left(sibling)
                    sibling = nodes[parent].left

                nodes[sibling].color = nodes[parent].color
                nodes[parent].color = Color.BLACK
                nodes[nodes[sibling].left].color = Color.BLACK
                self._rotate_right(parent)
                handle = self._root

        nodes[handle].color = Color.BLACK

    def clear(self) -> None:
        """Drop every node and reset the arena."""
        self._nodes.clear()
        self._free.clear()
        self._root = NIL
        self._size = 0

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def black_height(self) -> int:
        """Number of BLACK nodes on the leftmost root-to-leaf path."""
        height = 0
        handle = self._root
        while handle != NIL:
            if self._nodes[handle].color == Color.BLACK:
                height += 1
            handle = self._nodes[handle].left
        return height

    def _check_subtree(self, handle: int) -> int:
        """Return the subtree's black height, or -1 if an invariant fails."""
        if handle == NIL:
            return 0

        node = self._nodes[handle]
        for child in (node.left, node.right):
            if child == NIL:
                continue
            if self._nodes[child].parent != handle:
                return -1
            if node.color == Color.RED and self._nodes[child].color == Color.RED:
                return -1
        if node.left != NIL and not self._less(self._nodes[node.left].value, node.value):
            return -1
        if node.right != NIL and self._less(self._nodes[node.right].value, node.value):
            return -1

        left_height = self._check_subtree(node.left)
        right_height = self._check_subtree(node.right)
        if left_height < 0 or right_height < 0 or left_height != right_height:
            return -1
        return left_height + (1 if node.color == Color.BLACK else 0)

    def is_balanced(self) -> bool:
        """Check every red-black invariant plus search-tree ordering."""
        if self._root == NIL:
            return self._size == 0
        if self._nodes[self._root].color != Color.BLACK:
            return False
        if self._nodes[self._root].parent != NIL:
            return False
        values = list(self)
        if len(values) != self._size:
            return False
        if any(not self._less(a, b) for a, b in zip(values, values[1:])):
            return False
        return self._check_subtree(self._root) >= 0

    def dump_tree(self, formatter: Callable[[Any], str] = str) -> str:
        """Render the tree sideways, right subtree on top.

        Args:
            formatter: Converts a stored value to text

        Returns:
            Multi-line string, one node per line
        """
        lines: List[str] = []

        def walk(handle: int, prefix: str, is_left: bool) -> None:
            node = self._nodes[handle]
            if node.right != NIL:
                walk(node.right, prefix + ("│   " if is_left else "    "), False)
            connector = "└── " if is_left else "┌── "
            lines.append(f"{prefix}{connector}{formatter(node.value)} ({node.color.name})")
            if node.left != NIL:
                walk(node.left, prefix + ("    " if is_left else "│   "), True)

        if self._root != NIL:
            walk(self._root, "", False)
        return "\n".join(lines)
