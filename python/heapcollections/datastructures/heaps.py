###############################################################################
# Copyright (C) 2023 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""
Module containing a binary max-heap ordered by a caller-supplied predicate.

The heap is the engine behind `heapcollections.datastructures.queues`. It is
for algorithmic use, it is not thread-safe, since the sift operations perform
multi-step read-modify-write sequences on the backing list.
"""

import heapq
import logging
from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar, overload

from heapcollections.auxiliary.typingutils import OrderingPredicate
from heapcollections.datastructures.orderings import (check_ordering,
                                                      no_ordering,
                                                      sorted_by_priority)

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "BinaryHeap",
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return tuple(sorted(__all__))


HT = TypeVar("HT")
DT = TypeVar("DT")


class _HeapStorage(Generic[HT]):
    """Backing list of a heap, shared between copies until one mutates."""

    __slots__ = {
        "items": "The items of the heap in array order.",
        "owners": "The number of heaps sharing this storage."
    }

    def __init__(self, items: list[HT]) -> None:
        self.items: list[HT] = items
        self.owners: int = 1


@dataclass(frozen=True, eq=False)
class _OrderedIndex(Generic[HT]):
    """Index into a heap's items, ordered by the item's priority."""

    index: int
    items: list[HT]
    ordering: OrderingPredicate[HT]

    def __lt__(self, other: "_OrderedIndex[HT]") -> bool:
        return self.ordering(self.items[self.index], self.items[other.index])


class BinaryHeap(Generic[HT]):
    """
    A binary max-heap with a caller-supplied ordering predicate.

    The highest priority item (under the ordering) is always at the root of
    the heap. For every index `i > 0` with parent `p = (i - 1) // 2`, either
    the item at `p` has higher priority than the item at `i`, or the two are
    of equal priority. The items have no further order, they are not sorted.

    Items are only ever swapped when one has strictly higher priority than the
    other, hence items of equal priority are never exchanged, and a heap with
    the no-op ordering keeps pushed items in insertion order. This differs
    from the classic formulation of sift-up and sift-down, which swap an item
    with its parent (or child) whenever the parent does not have strictly
    higher priority, and so also swap items of equal priority, and which
    prefer the right child when both children are of equal priority. Here
    ties go to the left child. The heap invariant and the set of possible pop
    orders are the same either way.

    Copies share their backing storage until either is mutated, at which
    point the mutated heap duplicates the storage (copy-on-write). Copies are
    therefore cheap and are always observably independent.

    Instances are not thread-safe.
    """

    __HEAP_LOGGER = logging.getLogger("BinaryHeap")

    __slots__ = {
        "__storage": "The (possibly shared) storage of the heap's items.",
        "__ordering": "The ordering predicate of the heap.",
        "__debug": "Whether to log debug messages."
    }

    def __init__(
        self,
        ordering: OrderingPredicate[HT] = no_ordering,
        debug: bool = False
    ) -> None:
        """
        Create a new empty binary heap.

        Parameters
        ----------
        `ordering: (HT, HT) -> bool = no_ordering` - Predicate returning True
        if its first argument has strictly higher priority than its second.
        It must define a strict weak ordering over the items. It is fixed for
        the lifetime of the heap.

        `debug: bool = False` - Whether to log debug messages.

        Raises
        ------
        `TypeError` - If the ordering is not callable.
        """
        self.__storage: _HeapStorage[HT] = _HeapStorage([])
        check_ordering(ordering)
        self.__ordering: OrderingPredicate[HT] = ordering
        self.__debug: bool = debug
        if self.__debug:
            self.__HEAP_LOGGER.debug(
                "Creating new binary heap with: ordering=%s",
                getattr(ordering, "__qualname__", ordering)
            )

    def __del__(self) -> None:
        """Release this heap's share of its storage."""
        self.__storage.owners -= 1

    def copy(self) -> "BinaryHeap[HT]":
        """
        Return a shallow copy of the heap.

        The copy shares the storage of this heap until either is mutated.
        """
        if self.__debug:
            self.__HEAP_LOGGER.debug(
                "Copying binary heap of %s items", len(self)
            )
        return self.__share()

    def __share(self) -> "BinaryHeap[HT]":
        """Create a heap sharing this heap's storage, without logging."""
        heap: "BinaryHeap[HT]" = self.__class__.__new__(self.__class__)
        heap.__storage = self.__storage
        heap.__ordering = self.__ordering
        heap.__debug = self.__debug
        self.__storage.owners += 1
        return heap

    def __copy__(self) -> "BinaryHeap[HT]":
        return self.copy()

    @property
    def ordering(self) -> OrderingPredicate[HT]:
        """The ordering predicate of the heap."""
        return self.__ordering

    @property
    def count(self) -> int:
        """The number of items in the heap."""
        return len(self.__storage.items)

    @property
    def is_empty(self) -> bool:
        """Whether the heap contains no items."""
        return not self.__storage.items

    @property
    def is_unique(self) -> bool:
        """Whether the heap is the sole owner of its storage."""
        return self.__storage.owners == 1

    def __len__(self) -> int:
        """Return the number of items in the heap."""
        return len(self.__storage.items)

    def __bool__(self) -> bool:
        """Return True if the heap is not empty."""
        return bool(self.__storage.items)

    def __repr__(self) -> str:
        """Return a string representation of the heap."""
        ordering = getattr(self.__ordering, "__qualname__", self.__ordering)
        return (f"{self.__class__.__name__}({self.__storage.items!r}, "
                f"ordering={ordering})")

    def __eq__(self, other: object) -> bool:
        """
        Return whether two heaps contain the same items.

        The items of each heap are sorted by that heap's own ordering and the
        sorted lists are compared element-wise. The layout of the items within
        the heaps is irrelevant. If an ordering does not define a total order,
        the result is only as well defined as the relative order of its equal
        priority items.
        """
        if not isinstance(other, BinaryHeap):
            return NotImplemented
        if (self.__storage is other.__storage
                and self.__ordering is other.__ordering):
            return True
        if len(self) != len(other):
            return False
        return (sorted_by_priority(self.__storage.items, self.__ordering)
                == sorted_by_priority(other.__storage.items, other.__ordering))

    def __iter__(self) -> Iterator[HT]:
        """
        Return an iterator over the items in the heap.

        The items are yielded in internal array order (not in priority order).
        The iterator sees a snapshot of the heap as it was when this method
        was called, mutating the heap does not affect existing iterators.
        """
        return self.__iter_snapshot(self.__share())

    @staticmethod
    def __iter_snapshot(snapshot: "BinaryHeap[HT]") -> Iterator[HT]:
        yield from snapshot.__storage.items

    def iter_ordered(self) -> Iterator[HT]:
        """
        Iterate over the items in the heap in priority order.

        The heap is not mutated. The iterator walks the implicit tree of the
        heap best-first, such that producing all items costs O(n log n).
        Like `__iter__`, the iterator sees a snapshot of the heap.

        Returns
        -------
        `Iterator[HT]` - An iterator over the items in the heap, highest
        priority first.
        """
        return self.__iter_ordered_snapshot(self.__share())

    @staticmethod
    def __iter_ordered_snapshot(
        snapshot: "BinaryHeap[HT]"
    ) -> Iterator[HT]:
        items = snapshot.__storage.items
        ordering = snapshot.__ordering
        len_ = len(items)
        if not len_:
            return
        frontier: list[_OrderedIndex[HT]] = [_OrderedIndex(0, items, ordering)]
        while frontier:
            index: int = heapq.heappop(frontier).index
            yield items[index]
            child: int = (index * 2) + 1
            if child < len_:
                heapq.heappush(frontier, _OrderedIndex(child, items, ordering))
            if child + 1 < len_:
                heapq.heappush(
                    frontier, _OrderedIndex(child + 1, items, ordering))

    def push(self, item: HT, /) -> None:
        """
        Push an item onto the heap in-place.

        The item is appended at the end of the heap and then sifted up
        towards the root until its parent has higher or equal priority.

        Parameters
        ----------
        `item: HT@BinaryHeap` - The item to push.
        """
        self.__make_unique()
        items = self.__storage.items
        items.append(item)
        self.__sift_up(len(items) - 1)

    @overload
    def pop(self) -> HT | None:
        ...

    @overload
    def pop(self, default: DT) -> HT | DT:
        ...

    def pop(self, default=None):
        """
        Pop the highest priority item from the heap.

        The last item in the heap replaces the root and is then sifted down
        towards the leaves until neither child has strictly higher priority.

        Parameters
        ----------
        `default: DT = None` - The value to return if the heap is empty.

        Returns
        -------
        `HT@BinaryHeap | DT` - The highest priority item, or the default if
        the heap is empty.
        """
        if not self.__storage.items:
            return default
        self.__make_unique()
        items = self.__storage.items
        root: HT = items[0]
        last: HT = items.pop()
        if items:
            items[0] = last
            self.__sift_down(0)
        return root

    @overload
    def peek(self) -> HT | None:
        ...

    @overload
    def peek(self, default: DT) -> HT | DT:
        ...

    def peek(self, default=None):
        """
        Peek at the highest priority item in the heap.

        Parameters
        ----------
        `default: DT = None` - The value to return if the heap is empty.

        Returns
        -------
        `HT@BinaryHeap | DT` - The highest priority item, or the default if
        the heap is empty.
        """
        items = self.__storage.items
        if not items:
            return default
        return items[0]

    def remove_all(self, keep_capacity: bool = False) -> None:
        """
        Remove all items from the heap in-place.

        Parameters
        ----------
        `keep_capacity: bool = False` - Whether to clear the existing list in
        place, keeping it for future pushes. Otherwise the list is released
        and replaced by a new empty list. Shared storage is never cleared in
        place, it is released regardless.
        """
        if self.__debug:
            self.__HEAP_LOGGER.debug(
                "Removing %s items from binary heap: keep_capacity=%s",
                len(self), keep_capacity
            )
        storage = self.__storage
        if storage.owners > 1:
            storage.owners -= 1
            self.__storage = _HeapStorage([])
        elif keep_capacity:
            storage.items.clear()
        else:
            storage.items = []

    def __make_unique(self) -> None:
        """Duplicate the storage of the heap if it is shared."""
        storage = self.__storage
        if storage.owners > 1:
            if self.__debug:
                self.__HEAP_LOGGER.debug(
                    "Copying shared storage of %s items (owners=%s)",
                    len(storage.items), storage.owners
                )
            storage.owners -= 1
            self.__storage = _HeapStorage(storage.items.copy())

    def __sift_up(self, index: int) -> None:
        """Move the item at the given index towards the root."""
        items = self.__storage.items
        ordering = self.__ordering
        while index > 0:
            parent: int = (index - 1) // 2
            if not ordering(items[index], items[parent]):
                break
            items[index], items[parent] = items[parent], items[index]
            index = parent

    def __higher_child(self, index: int) -> int:
        """
        Get the index of the higher priority child of the item at the given
        index, or -1 if the item has no children.
        """
        items = self.__storage.items
        left: int = (index * 2) + 1
        right: int = left + 1
        if left >= len(items):
            return -1
        if right >= len(items) or not self.__ordering(items[right],
                                                       items[left]):
            return left
        return right

    def __sift_down(self, index: int) -> None:
        """Move the item at the given index towards the leaves."""
        items = self.__storage.items
        ordering = self.__ordering
        child: int = self.__higher_child(index)
        while child >= 0 and ordering(items[child], items[index]):
            items[index], items[child] = items[child], items[index]
            index = child
            child = self.__higher_child(index)
