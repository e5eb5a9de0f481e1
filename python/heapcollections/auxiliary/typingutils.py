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

"""Module defining protocols and aliases for type hinting ordered items."""

# Useful links for typing:
#      - Type hints: https://docs.python.org/3/library/typing.html
#          - Type Aliasing: https://peps.python.org/pep-0613/
#      - Protocols: https://peps.python.org/pep-0544/

from typing import Any, Callable, Protocol, TypeAlias, TypeVar, runtime_checkable

__copyright__ = "Copyright (C) 2023 Oliver Michael Kamperis"
__license__ = "GPL-3.0"

__all__ = (
    "SupportsRichComparison",
    "OrderingPredicate"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return tuple(sorted(__all__))


_T = TypeVar("_T")


@runtime_checkable
class SupportsRichComparison(Protocol):
    """
    Protocol for type hinting and checking support for fundamental rich
    comparison magic methods `__lt__` and `__gt__`.
    """

    def __lt__(self, __other: Any) -> bool:
        ...

    def __gt__(self, __other: Any) -> bool:
        ...


# A predicate returning True if its first argument has strictly higher
# priority than its second. Must be a strict weak ordering over the items.
OrderingPredicate: TypeAlias = Callable[[_T, _T], bool]
