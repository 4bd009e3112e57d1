"""An indexed binary min-heap that supports removal and re-prioritisation."""

from __future__ import annotations

from typing import Any, Callable, Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


class PriorityQueue(Generic[T]):
    """A min-heap ordered by key(element), with O(log n) remove and update.

    Elements must be hashable and unique; their current heap index is
    tracked so that any element can be found, moved or removed.
    """

    def __init__(self, key: Callable[[T], Any]) -> None:
        self._key = key
        self._heap: list[T] = []
        self._locations: dict[T, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, element: object) -> bool:
        return element in self._locations

    def top(self) -> T:
        if not self._heap:
            raise IndexError("top of empty priority queue")
        return self._heap[0]

    def push(self, element: T) -> None:
        if element in self._locations:
            raise ValueError(f"priority queue already contains {element}")
        self._heap.append(element)
        self._locations[element] = len(self._heap) - 1
        self._percolate_up(len(self._heap) - 1)

    def pop(self) -> T:
        """Remove and return the element with the smallest key."""
        if not self._heap:
            raise IndexError("pop from empty priority queue")
        top = self._heap[0]
        self._remove_at(0)
        return top

    def remove(self, element: T) -> None:
        """Remove an element from anywhere in the heap."""
        try:
            index = self._locations[element]
        except KeyError:
            raise KeyError(element) from None
        self._remove_at(index)

    def update_position(self, element: T) -> None:
        """Restore heap order after the element's key has changed."""
        try:
            index = self._locations[element]
        except KeyError:
            raise KeyError(element) from None
        index = self._percolate_up(index)
        self._percolate_down(index)

    def format_heap(self) -> str:
        """Return one line per heap slot: index, priority and element."""
        return "".join(
            f"[{i:4d}] : {format(self._key(e), '6g')} {e}\n"
            for i, e in enumerate(self._heap)
        )

    def check_heap(self) -> bool:
        """Verify element values and the min-heap property; report problems."""
        if len(self._heap) <= 1:
            return True
        error_found = False
        for element in self._heap:
            check_value = getattr(element, "check_value", None)
            if check_value is not None and check_value():
                error_found = True
        size = len(self._heap)
        for i in range(size):
            parent_value = self._key(self._heap[i])
            for side, child in (("left", 2 * i + 1), ("right", 2 * i + 2)):
                if child >= size:
                    continue
                child_value = self._key(self._heap[child])
                if parent_value > child_value:
                    error_found = True
                    print(
                        f"Error: at heap location {i}, the value is greater "
                        f"than the value at the {side} child."
                    )
                    print(f"value@{i}={parent_value}value@{child}={child_value}")
        if error_found:
            print(self.format_heap(), end="")
        return not error_found

    def _remove_at(self, index: int) -> None:
        element = self._heap[index]
        del self._locations[element]
        last = self._heap.pop()
        if index < len(self._heap):
            self._heap[index] = last
            self._locations[last] = index
            index = self._percolate_up(index)
            self._percolate_down(index)

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        self._locations[heap[i]] = i
        self._locations[heap[j]] = j

    def _percolate_up(self, i: int) -> int:
        while i > 0:
            parent = (i - 1) // 2
            if self._key(self._heap[i]) < self._key(self._heap[parent]):
                self._swap(i, parent)
                i = parent
            else:
                break
        return i

    def _percolate_down(self, i: int) -> int:
        size = len(self._heap)
        while 2 * i + 1 < size:
            child = 2 * i + 1
            right = child + 1
            if right < size and self._key(self._heap[right]) < self._key(self._heap[child]):
                child = right
            if self._key(self._heap[child]) < self._key(self._heap[i]):
                self._swap(i, child)
                i = child
            else:
                break
        return i