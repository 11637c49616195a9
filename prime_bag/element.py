"""
Element index mapping.

A bag stores prime indices, never elements. The application supplies the
mapping between its elements and small non-negative indices; lower indices
get smaller primes, so common elements should get the lowest indices.
"""

import operator
from dataclasses import dataclass
from typing import Any, Callable, Protocol, Type


class PrimeBagElement(Protocol):
    """
    An element type that carries its own index mapping.

    Every value must map to a distinct index, and that index must map back to
    the value. `from_prime_index` may also be called with indices that were
    never produced by `to_prime_index` (e.g. from a raw integer), and must
    return some value for them.
    """

    def to_prime_index(self) -> int:
        ...

    @classmethod
    def from_prime_index(cls, index: int) -> 'PrimeBagElement':
        ...


@dataclass(frozen=True)
class ElementMapping:
    """Pair of functions between elements and prime indices."""

    to_index: Callable[[Any], int]
    from_index: Callable[[int], Any]

    @classmethod
    def for_type(cls, element_type: Type[PrimeBagElement]) -> 'ElementMapping':
        """Mapping that delegates to a PrimeBagElement class."""
        return cls(element_type.to_prime_index, element_type.from_prime_index)


# Elements are the indices themselves
INDEX_MAPPING = ElementMapping(operator.index, int)
