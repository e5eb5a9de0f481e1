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
Module containing ordering predicates for heaps and priority queues.

An ordering predicate is a function `(a, b) -> bool` which returns True if and
only if `a` has strictly higher priority than `b`. Predicates are decoupled
from the item type, so differently ordered heaps can be built over the same
type of items.

Predicates must define a strict weak ordering over the items they are given
(irreflexive, asymmetric and transitive, with a transitive "equal priority"
relation). This is a precondition and is not checked, an invalid predicate
only degrades the quality of the resulting order.
"""

import functools
from numbers import Real
from typing import Any, Callable, Iterable, TypeVar

from heapcollections.auxiliary.typingutils import (OrderingPredicate,
                                                   SupportsRichComparison)

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "no_ordering",
    "greater_first",
    "lesser_first",
    "by_key",
    "reverse_ordering",
    "order_equivalent",
    "sorted_by_priority",
    "check_ordering"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return tuple(sorted(__all__))


IT = TypeVar("IT")


def no_ordering(first: Any, second: Any, /) -> bool:
    """
    The no-op ordering, no item is ever of higher priority than another.

    Heaps using this ordering never reorder their items.
    """
    return False


def greater_first(
    first: SupportsRichComparison,
    second: SupportsRichComparison, /
) -> bool:
    """Ordering in which greater items have higher priority."""
    return first > second


def lesser_first(
    first: SupportsRichComparison,
    second: SupportsRichComparison, /
) -> bool:
    """Ordering in which lesser items have higher priority."""
    return first < second


def check_ordering(ordering: object, /) -> None:
    """
    Check that the given object can be used as an ordering predicate.

    Raises
    ------
    `TypeError` - If the ordering is not callable.
    """
    if not callable(ordering):
        raise TypeError(
            "Ordering must be a callable predicate. "
            f"Got; {ordering!r} of type {type(ordering)!r}."
        )


def by_key(
    key: Callable[[IT], Real],
    max_first: bool = True
) -> OrderingPredicate[IT]:
    """
    Create an ordering over the values returned by a key function.

    Parameters
    ----------
    `key: (IT) -> Real` - The key function, returns the priority value of an
    item.

    `max_first: bool = True` - Whether items with the maximum key value have
    the highest priority. If False, items with the minimum key value have the
    highest priority.

    Returns
    -------
    `(IT, IT) -> bool` - The ordering predicate.

    Raises
    ------
    `TypeError` - If the key function is not callable.
    """
    if not callable(key):
        raise TypeError(
            "Key must be callable. "
            f"Got; {key!r} of type {type(key)!r}."
        )

    if max_first:
        def _ordering(first: IT, second: IT, /) -> bool:
            return key(first) > key(second)  # type: ignore
    else:
        def _ordering(first: IT, second: IT, /) -> bool:
            return key(first) < key(second)  # type: ignore

    _ordering.__qualname__ = (
        f"by_key({getattr(key, '__qualname__', repr(key))}, "
        f"max_first={max_first})"
    )
    return _ordering


def reverse_ordering(ordering: OrderingPredicate[IT], /) -> OrderingPredicate[IT]:
    """
    Create the reverse of an ordering, such that the lowest priority items
    under the given ordering become the highest priority items.

    Raises
    ------
    `TypeError` - If the ordering is not callable.
    """
    check_ordering(ordering)

    def _reversed(first: IT, second: IT, /) -> bool:
        return ordering(second, first)

    _reversed.__qualname__ = (
        f"reverse_ordering({getattr(ordering, '__qualname__', repr(ordering))})"
    )
    return _reversed


def order_equivalent(
    ordering: OrderingPredicate[IT],
    first: IT,
    second: IT, /
) -> bool:
    """
    Check whether two items are of equal priority under an ordering.

    That is, neither item has strictly higher priority than the other.
    """
    return not ordering(first, second) and not ordering(second, first)


def sorted_by_priority(
    iterable: Iterable[IT],
    ordering: OrderingPredicate[IT], /
) -> list[IT]:
    """
    Get a new list of the items in an iterable sorted by an ordering, with
    the highest priority item first.

    The sort is stable, items of equal priority keep their relative order.
    """
    def _compare(first: IT, second: IT) -> int:
        if ordering(first, second):
            return -1
        if ordering(second, first):
            return 1
        return 0

    return sorted(iterable, key=functools.cmp_to_key(_compare))
