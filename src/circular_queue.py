"""Ring-buffer FIFO queue.

Used by ``BinarySearchTree.bfs`` to hold the frontier of nodes still to be
visited. Named ``circular_queue`` so it never shadows the stdlib ``queue``.
"""

from typing import Generic, Iterator, List, Optional, TypeVar

T = TypeVar('T')

_INITIAL_CAPACITY = 4


class CircularQueue(Generic[T]):
    def __init__(self) -> None:
        self._slots: List[Optional[T]] = [None] * _INITIAL_CAPACITY
        self._head = 0
        self._count = 0

    def enqueue(self, value: T) -> None:
        if self._count == len(self._slots):
            self._resize(len(self._slots) * 2)
        self._slots[self._index(self._count)] = value
        self._count += 1

    def dequeue(self) -> T:
        if self._count == 0:
            raise IndexError("dequeue from empty queue")
        value = self._slots[self._head]
        # drop the reference so dequeued nodes can be collected
        self._slots[self._head] = None
        self._head = self._index(1)
        self._count -= 1
        return value  # type: ignore[return-value]

    def front(self) -> T:
        if self._count == 0:
            raise IndexError("front from empty queue")
        return self._slots[self._head]  # type: ignore[return-value]

    def back(self) -> T:
        if self._count == 0:
            raise IndexError("back from empty queue")
        return self._slots[self._index(self._count - 1)]  # type: ignore[return-value]

    def size(self) -> int:
        return self._count

    def is_empty(self) -> bool:
        return self._count == 0

    def clear(self) -> None:
        self._slots = [None] * _INITIAL_CAPACITY
        self._head = 0
        self._count = 0

    def copy(self) -> 'CircularQueue[T]':
        clone: CircularQueue[T] = CircularQueue()
        for value in self:
            clone.enqueue(value)
        return clone

    def _index(self, offset: int) -> int:
        return (self._head + offset) % len(self._slots)

    def _resize(self, capacity: int) -> None:
        slots: List[Optional[T]] = [None] * capacity
        for i in range(self._count):
            slots[i] = self._slots[self._index(i)]
        self._slots = slots
        self._head = 0

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def __iter__(self) -> Iterator[T]:
        for i in range(self._count):
            yield self._slots[self._index(i)]  # type: ignore[misc]

    def __repr__(self) -> str:
        return f"CircularQueue({list(self)})"
