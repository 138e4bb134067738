"""
Indexed binary min-heap.

Slots are 1-indexed (slot 0 is a placeholder) so the parent of slot i is
i // 2 and its children are 2i and 2i + 1. A position index maps every
queued element to its slot, which gives O(1) membership tests and
O(log n) in-place priority changes.
"""

from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional
import time

from algorithms import PriorityQueue


class EmptyQueueError(IndexError):
    """pop() or peek() on an empty queue."""


class DuplicateElementError(ValueError):
    """push() of an element that is already queued."""


@dataclass
class HeapEntry:
    """
    One heap slot. Only ``priority`` takes part in ordering; ``timestamp``
    records when the element was pushed.
    """
    element: Hashable
    priority: float
    timestamp: float = field(default_factory=time.time)


class IndexedPriorityQueue(PriorityQueue):
    """
    Min-priority queue with decrease/increase-key.

    Ties are broken towards the left child when sifting down, so the
    pop order for equal priorities is deterministic for a given sequence
    of operations.

    Complexity:
        push, pop, change_priority: O(log n)
        contains, count, is_empty, peek: O(1)
    """

    def __init__(self) -> None:
        self._slots: List[Optional[HeapEntry]] = [None]
        self._position: Dict[Hashable, int] = {}

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, element: Hashable) -> bool:
        return self.contains(element)

    def __repr__(self) -> str:
        return f"IndexedPriorityQueue(count={self.count()})"

    # --- PriorityQueue interface ---------------------------------------------

    def is_empty(self) -> bool:
        return len(self._slots) == 1

    def count(self) -> int:
        return len(self._slots) - 1

    def contains(self, element: Hashable) -> bool:
        return element in self._position

    def push(self, element: Hashable, priority: float) -> None:
        """
        Append element at the next free leaf and sift it up.

        Raises:
            DuplicateElementError: element is already queued.
        """
        if element in self._position:
            raise DuplicateElementError(f"element {element!r} is already queued")

        self._slots.append(HeapEntry(element, priority))
        self._position[element] = self.count()
        self._up_heap(self.count())

    def pop(self) -> Hashable:
        """
        Remove and return the minimum-priority element.

        The last leaf replaces the root and is sifted down.

        Raises:
            EmptyQueueError: the queue is empty.
        """
        if self.is_empty():
            raise EmptyQueueError("queue is empty")

        first = self._slots[1]
        last = self._slots.pop()
        del self._position[first.element]

        if not self.is_empty():
            self._slots[1] = last
            self._position[last.element] = 1
            self._down_heap(1)

        return first.element

    def change_priority(self, element: Hashable, priority: float) -> bool:
        """
        Set a new priority for a queued element and restore the heap.

        Sifting up is a no-op unless the new priority beats the parent;
        sifting down afterwards is a no-op unless a child now beats it. The
        pair covers both decrease-key and increase-key.

        Returns:
            False if element is not queued (the queue is left untouched).
        """
        pos = self._position.get(element)
        if pos is None:
            return False

        self._slots[pos].priority = priority
        pos = self._up_heap(pos)
        self._down_heap(pos)
        return True

    def purge(self) -> None:
        self._slots = [None]
        self._position.clear()

    # --- Introspection -------------------------------------------------------

    def peek(self) -> Hashable:
        """Minimum-priority element without removing it."""
        if self.is_empty():
            raise EmptyQueueError("queue is empty")
        return self._slots[1].element

    def priority_of(self, element: Hashable) -> Optional[float]:
        """Current priority of element, or None if it is not queued."""
        pos = self._position.get(element)
        if pos is None:
            return None
        return self._slots[pos].priority

    def position_of(self, element: Hashable) -> Optional[int]:
        """1-based slot currently holding element, or None."""
        return self._position.get(element)

    def entries(self) -> List[HeapEntry]:
        """Snapshot of the occupied slots in slot order (slot 1 first)."""
        return list(self._slots[1:])

    # --- Heap repair ---------------------------------------------------------

    def _up_heap(self, pos: int) -> int:
        """Move the entry at pos towards the root. Returns its final slot."""
        entry = self._slots[pos]
        parent = pos // 2
        while parent > 0 and self._slots[parent].priority > entry.priority:
            moved = self._slots[parent]
            self._slots[pos] = moved
            self._position[moved.element] = pos
            pos = parent
            parent = pos // 2

        self._slots[pos] = entry
        self._position[entry.element] = pos
        return pos

    def _down_heap(self, pos: int) -> int:
        """Move the entry at pos towards the leaves. Returns its final slot."""
        size = self.count()
        entry = self._slots[pos]
        child = 2 * pos
        while child <= size:
            # Right child only wins on a strictly smaller priority.
            if child < size and self._slots[child + 1].priority < self._slots[child].priority:
                child += 1
            if not self._slots[child].priority < entry.priority:
                break
            moved = self._slots[child]
            self._slots[pos] = moved
            self._position[moved.element] = pos
            pos = child
            child = 2 * pos

        self._slots[pos] = entry
        self._position[entry.element] = pos
        return pos
