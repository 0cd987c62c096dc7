"""Unbalanced binary search tree holding key/value pairs.

Every node is itself a ``BinarySearchTree``: the root object is the tree and
any child can be treated as the root of its own subtree. An empty tree is a
root whose ``key`` is ``None``. Removing the root's key rewrites the root in
place, so references to the tree stay valid across removals.

Equal keys go to the right subtree on insert and are kept side by side;
``find`` and ``remove`` act on the first match from the top.
"""

import logging
from typing import Generic, Iterator, List, NamedTuple, Optional, Tuple, TypeVar

from circular_queue import CircularQueue

logger = logging.getLogger(__name__)

K = TypeVar('K')
V = TypeVar('V')


class Balance(NamedTuple):
    balanced: bool
    height: int


class BinarySearchTree(Generic[K, V]):
    def __init__(
        self,
        key: Optional[K] = None,
        value: Optional[V] = None,
        parent: Optional['BinarySearchTree[K, V]'] = None,
    ) -> None:
        if key is None and value is not None:
            raise ValueError("value given without a key")
        self.key: Optional[K] = key
        self.value: Optional[V] = value
        self.parent: Optional[BinarySearchTree[K, V]] = parent
        self.left: Optional[BinarySearchTree[K, V]] = None
        self.right: Optional[BinarySearchTree[K, V]] = None

    def insert(self, key: K, value: V) -> None:
        if key is None:
            raise ValueError("key must not be None")
        if self.key is None:
            self.key = key
            self.value = value
            return

        node = self
        while True:
            if key < node.key:
                if node.left is None:
                    node.left = BinarySearchTree(key, value, node)
                    return
                node = node.left
            else:
                if node.right is None:
                    node.right = BinarySearchTree(key, value, node)
                    return
                node = node.right

    def find(self, key: K) -> V:
        return self._find_node(key).value

    def remove(self, key: K) -> None:
        self._find_node(key)._unlink()

    def min_node(self) -> 'BinarySearchTree[K, V]':
        if self.key is None:
            raise ValueError("min from empty tree")
        node = self
        while node.left is not None:
            node = node.left
        return node

    def dfs_in_order(self, values: Optional[List[V]] = None) -> List[V]:
        if values is None:
            values = []
        values.extend(node.value for node in self._in_order_nodes())
        return values

    def dfs_pre_order(self, values: Optional[List[V]] = None) -> List[V]:
        if values is None:
            values = []
        values.extend(node.value for node in self._pre_order_nodes())
        return values

    def dfs_post_order(self, values: Optional[List[V]] = None) -> List[V]:
        if values is None:
            values = []
        values.extend(node.value for node in self._post_order_nodes())
        return values

    def bfs(
        self,
        tree: Optional['BinarySearchTree[K, V]'] = None,
        values: Optional[List[V]] = None,
    ) -> List[V]:
        if tree is None:
            tree = self
        if values is None:
            values = []
        if tree.key is None:
            return values

        queue: CircularQueue[BinarySearchTree[K, V]] = CircularQueue()
        queue.enqueue(tree)
        while queue:
            node = queue.dequeue()
            values.append(node.value)
            if node.left is not None:
                queue.enqueue(node.left)
            if node.right is not None:
                queue.enqueue(node.right)
        return values

    def get_height(self, current_height: int = 0) -> int:
        """Edges on the longest path from this node down to a leaf.

        ``current_height`` is the height assigned to this node, so a subtree
        can be measured relative to where it sits in a larger tree.
        """
        height = current_height
        stack: List[Tuple[BinarySearchTree[K, V], int]] = [(self, current_height)]
        while stack:
            node, depth = stack.pop()
            height = max(height, depth)
            if node.left is not None:
                stack.append((node.left, depth + 1))
            if node.right is not None:
                stack.append((node.right, depth + 1))
        return height

    def is_bst(self) -> bool:
        """Check every key against the bounds inherited from its ancestors.

        Left subtrees must hold keys strictly less than their ancestor and
        right subtrees keys not less than it, matching how ``insert`` routes
        equal keys.
        """
        if self.key is None:
            return True

        stack: List[Tuple[BinarySearchTree[K, V], Optional[K], Optional[K]]] = [(self, None, None)]
        while stack:
            node, low, high = stack.pop()
            if low is not None and node.key < low:
                return False
            if high is not None and not node.key < high:
                return False
            if node.left is not None:
                stack.append((node.left, low, node.key))
            if node.right is not None:
                stack.append((node.right, node.key, high))
        return True

    def find_kth_largest_value(self, k: int) -> V:
        values = self.dfs_in_order()
        if k <= 0 or k > len(values):
            logger.debug("k=%d requested from a tree of %d values", k, len(values))
            raise IndexError("k out of range")
        return values[len(values) - k]

    def count_leaves(self) -> int:
        return sum(
            1 for node in self._pre_order_nodes()
            if node.left is None and node.right is None
        )

    def is_balanced_bst(self) -> Balance:
        """Compare the heights of this node's two subtrees.

        A missing child counts as height 0, the same as a leaf child, so a
        node whose only child is a two-level chain still reads as balanced.
        Only this node is checked; the subtrees themselves may be unbalanced.
        """
        if self.left is None and self.right is None:
            return Balance(True, 0)

        left_height = self.left.get_height() if self.left is not None else 0
        right_height = self.right.get_height() if self.right is not None else 0
        return Balance(
            abs(left_height - right_height) <= 1,
            max(left_height, right_height) + 1,
        )

    def size(self) -> int:
        return sum(1 for _ in self._pre_order_nodes())

    def is_empty(self) -> bool:
        return self.key is None

    def keys(self) -> List[K]:
        return [node.key for node in self._in_order_nodes()]

    def items(self) -> List[Tuple[K, V]]:
        return [(node.key, node.value) for node in self._in_order_nodes()]

    def copy(self) -> 'BinarySearchTree[K, V]':
        # re-inserting in pre-order rebuilds the same shape
        clone: BinarySearchTree[K, V] = BinarySearchTree()
        for node in self._pre_order_nodes():
            clone.insert(node.key, node.value)
        return clone

    def clear(self) -> None:
        parent = self.parent
        if parent is not None:
            # a keyless node may only exist as the root of an empty tree
            if parent.left is self:
                parent.left = None
            elif parent.right is self:
                parent.right = None
            self.parent = None
        self.key = None
        self.value = None
        self.left = None
        self.right = None

    def _find_node(self, key: K) -> 'BinarySearchTree[K, V]':
        node = self if self.key is not None else None
        while node is not None:
            if key == node.key:
                return node
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                break
        raise KeyError(key)

    def _unlink(self) -> None:
        if self.left is not None and self.right is not None:
            successor = self.right.min_node()
            logger.debug("removing %r: two children, successor %r", self.key, successor.key)
            self.key = successor.key
            self.value = successor.value
            # the successor has no left child, so this lands in a simpler case
            successor._unlink()
        elif self.left is not None:
            logger.debug("removing %r: left child only", self.key)
            self._replace_with(self.left)
        elif self.right is not None:
            logger.debug("removing %r: right child only", self.key)
            self._replace_with(self.right)
        else:
            logger.debug("removing %r: leaf", self.key)
            self._replace_with(None)

    def _replace_with(self, node: Optional['BinarySearchTree[K, V]']) -> None:
        parent = self.parent
        if parent is not None:
            if parent.left is self:
                parent.left = node
            elif parent.right is self:
                parent.right = node
            if node is not None:
                node.parent = parent
            self.parent = None
            return

        # root: overwrite in place so the tree object keeps its identity
        if node is None:
            self.clear()
            return
        self.key = node.key
        self.value = node.value
        self.left = node.left
        self.right = node.right
        for child in (self.left, self.right):
            if child is not None:
                child.parent = self

    def _in_order_nodes(self) -> Iterator['BinarySearchTree[K, V]']:
        stack: List[BinarySearchTree[K, V]] = []
        node = self if self.key is not None else None
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def _pre_order_nodes(self) -> Iterator['BinarySearchTree[K, V]']:
        if self.key is None:
            return
        stack: List[BinarySearchTree[K, V]] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def _post_order_nodes(self) -> Iterator['BinarySearchTree[K, V]']:
        if self.key is None:
            return
        # root-right-left, reversed
        visited: List[BinarySearchTree[K, V]] = []
        stack: List[BinarySearchTree[K, V]] = [self]
        while stack:
            node = stack.pop()
            visited.append(node)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        yield from reversed(visited)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        if key is None:
            return False
        try:
            self._find_node(key)  # type: ignore[arg-type]
        except (KeyError, TypeError):
            return False
        return True

    def __iter__(self) -> Iterator[K]:
        return (node.key for node in self._in_order_nodes())

    def __repr__(self) -> str:
        return f"BinarySearchTree({self.items()})"

    def __str__(self) -> str:
        return f"BinarySearchTree(size={self.size()}, height={self.get_height()})"
