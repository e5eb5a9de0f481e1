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
Module containing a priority queue data structure.

The priority queue is for algorithmic use. It is not thread-safe, and not
intended to be used in multi-threaded or multi-process applications. Use the
Python standard library `queue` module instead for such purposes.
"""

import collections.abc
import logging
from typing import Iterable, Iterator, TypeVar, overload

from typing_extensions import override

from heapcollections.auxiliary.typingutils import OrderingPredicate
from heapcollections.datastructures.heaps import BinaryHeap
from heapcollections.datastructures.orderings import no_ordering

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "PriorityQueue",
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return tuple(sorted(__all__))


QT = TypeVar("QT")
DT = TypeVar("DT")


class PriorityQueue(collections.abc.Collection[QT]):
    """
    Class defining a priority queue implementation.

    A priority queue is a queue where items are popped in priority order
    (always highest priority first). The priority of items is defined by an
    ordering predicate given when the queue is created, which returns True if
    its first argument has strictly higher priority than its second. Items of
    equal priority are popped in an unspecified order.

    Wraps a binary max-heap, pushing and popping take O(log n) time, peeking
    takes O(1) time.

    Priority queues behave as values. A copy of a queue is independent of the
    original, mutating one is never observable through the other, even though
    the two share their storage until one of them is mutated.

    Iterating over the queue does not yield items in priority order, and the
    order of iteration depends on the order in which items were pushed. Use
    `iter_ordered()` to iterate in priority order.

    Instances are not thread-safe.
    """

    __QUEUE_LOGGER = logging.getLogger("PriorityQueue")

    __slots__ = {
        "__heap": "The binary heap of items.",
        "__debug": "Whether to log debug messages."
    }

    @overload
    def __init__(self) -> None:
        """
        Create an empty priority queue with no ordering.

        The queue never reorders its items, they are kept in the order they
        were pushed and popping has no priority semantics. This is a
        placeholder state, not a true priority queue.
        """
        ...

    @overload
    def __init__(
        self,
        ordering: OrderingPredicate[QT],
        items: Iterable[QT] = (), *,
        debug: bool = False
    ) -> None:
        """
        Create a priority queue with an ordering and an optional iterable of
        initial items.
        """
        ...

    def __init__(
        self,
        ordering: OrderingPredicate[QT] | None = None,
        items: Iterable[QT] = (), *,
        debug: bool = False
    ) -> None:
        """
        Create a new priority queue.

        Parameters
        ----------
        `ordering: (QT, QT) -> bool | None = None` - Predicate returning True
        if its first argument has strictly higher priority than its second.
        It must define a strict weak ordering over the items. If None, the
        queue has no ordering and never reorders its items (see `empty()`).

        `items: Iterable[QT] = ()` - Initial items, pushed one at a time in
        iteration order. The order does not affect which items are popped
        first, but does affect the order of iteration over the queue.

        `debug: bool = False` - Whether to log debug messages.

        Raises
        ------
        `TypeError` - If the ordering is not callable.
        """
        if ordering is None:
            ordering = no_ordering
        self.__debug: bool = debug
        self.__heap: BinaryHeap[QT] = BinaryHeap(ordering, debug=debug)
        for item in items:
            self.__heap.push(item)
        if self.__debug:
            self.__QUEUE_LOGGER.debug(
                "Created new priority queue with %s initial items",
                len(self.__heap)
            )

    @classmethod
    def empty(cls) -> "PriorityQueue[QT]":
        """
        Create an empty priority queue with no ordering.

        Only intended as a default or placeholder. The queue never reorders
        its items, so it has no priority semantics.
        """
        return cls()

    @classmethod
    def with_ordering(
        cls,
        ordering: OrderingPredicate[QT],
        items: Iterable[QT] = (), *,
        debug: bool = False
    ) -> "PriorityQueue[QT]":
        """
        Create a priority queue with an ordering and an optional iterable of
        initial items.

        Items with higher priority under the ordering are popped first.
        """
        return cls(ordering, items, debug=debug)

    @classmethod
    def from_iterable(
        cls,
        iterable: Iterable[QT], /,
        ordering: OrderingPredicate[QT]
    ) -> "PriorityQueue[QT]":
        """Create a priority queue from an iterable of items and an ordering."""
        return cls(ordering, iterable)

    # pylint: disable=W0212,W0238
    def copy(self) -> "PriorityQueue[QT]":
        """
        Return a shallow copy of the queue.

        The copy shares storage with this queue until either is mutated.
        """
        if self.__debug:
            self.__QUEUE_LOGGER.debug(
                "Copying priority queue of %s items", len(self.__heap)
            )
        queue: "PriorityQueue[QT]" = self.__class__.__new__(self.__class__)
        queue.__debug = self.__debug
        queue.__heap = self.__heap.copy()
        return queue

    def __copy__(self) -> "PriorityQueue[QT]":
        return self.copy()

    def __str__(self) -> str:
        """Return a string representation of the items in the queue."""
        return "[" + ", ".join(str(item) for item in self) + "]"

    def __repr__(self) -> str:
        """Return an instantiable string representation of the queue."""
        ordering = self.__heap.ordering
        name = getattr(ordering, "__qualname__", repr(ordering))
        return f"{self.__class__.__name__}({name}, {list(self)!r})"

    def __eq__(self, other: object) -> bool:
        """
        Return whether two queues contain the same items.

        The order in which items were pushed, and hence the layout of the
        queues, is irrelevant. Each queue's items are sorted by that queue's
        own ordering before being compared element-wise.
        """
        if not isinstance(other, PriorityQueue):
            return NotImplemented
        return self.__heap == other.__heap

    @override
    def __contains__(self, item: object) -> bool:
        """Return whether an item is in the queue, takes O(n) time."""
        return any(
            member is item or member == item
            for member in self.__heap
        )

    @override
    def __iter__(self) -> Iterator[QT]:
        """
        Return an iterator over the items in the queue.

        The items are yielded in arbitrary order (not in priority order).
        """
        return iter(self.__heap)

    @override
    def __len__(self) -> int:
        """Return the number of items in the queue."""
        return len(self.__heap)

    def __bool__(self) -> bool:
        """Return True if the queue is not empty."""
        return bool(self.__heap)

    @property
    def ordering(self) -> OrderingPredicate[QT]:
        """The ordering predicate of the queue."""
        return self.__heap.ordering

    @property
    def count(self) -> int:
        """The number of items in the queue."""
        return self.__heap.count

    @property
    def is_empty(self) -> bool:
        """Whether the queue contains no items."""
        return self.__heap.is_empty

    def iter_ordered(self) -> Iterator[QT]:
        """
        Iterate over the items in the queue in priority order.

        The queue is not modified.

        Returns
        -------
        `Iterator[QT]` - An iterator over the items in the queue, highest
        priority first.
        """
        return self.__heap.iter_ordered()

    def push(self, item: QT, /) -> None:
        """
        Push an item onto the queue in-place.

        Parameters
        ----------
        `item: QT@PriorityQueue` - The item to push.
        """
        self.__heap.push(item)

    def push_all(self, *items: QT) -> None:
        """
        Push a series of items onto the queue in-place.

        Parameters
        ----------
        `*items: QT@PriorityQueue` - The items to push.
        """
        for item in items:
            self.__heap.push(item)

    def push_from(self, iterable: Iterable[QT], /) -> None:
        """
        Push an iterable of items onto the queue in-place.

        Parameters
        ----------
        `iterable: Iterable[QT@PriorityQueue]` - The items to push.
        """
        for item in iterable:
            self.__heap.push(item)

    @overload
    def pop(self) -> QT | None:
        ...

    @overload
    def pop(self, default: DT) -> QT | DT:
        ...

    def pop(self, default=None):
        """
        Pop the highest priority item from the queue.

        Popping from an empty queue is not an error.

        Parameters
        ----------
        `default: DT = None` - The value to return if the queue is empty.

        Returns
        -------
        `QT@PriorityQueue | DT` - The highest priority item, or the default if
        the queue is empty.
        """
        return self.__heap.pop(default)

    def pop_all(self) -> list[QT]:
        """
        Pop all items from the queue.

        Returns
        -------
        `list[QT@PriorityQueue]` - The items of the queue, highest priority
        first.
        """
        heap = self.__heap
        return [heap.pop() for _ in range(len(heap))]

    @overload
    def peek(self) -> QT | None:
        ...

    @overload
    def peek(self, default: DT) -> QT | DT:
        ...

    def peek(self, default=None):
        """
        Peek at the highest priority item in the queue.

        Parameters
        ----------
        `default: DT = None` - The value to return if the queue is empty.

        Returns
        -------
        `QT@PriorityQueue | DT` - The highest priority item, or the default if
        the queue is empty.
        """
        return self.__heap.peek(default)

    def remove_all(self, keep_capacity: bool = False) -> None:
        """
        Remove all items from the queue in-place.

        Parameters
        ----------
        `keep_capacity: bool = False` - Whether to keep the underlying storage
        for future pushes, otherwise it is released.
        """
        self.__heap.remove_all(keep_capacity)
