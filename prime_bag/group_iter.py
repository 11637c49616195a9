"""
Group iterator: one (element, multiplicity) pair per distinct element.
"""

from typing import Any, Tuple

from .element import ElementMapping
from .helpers import Helpers


class PrimeBagGroupIter:
    """
    Iterator over (element, count) pairs in ascending index order.

    Elements that are not present are skipped; every count is >= 1.
    """

    __slots__ = ('_chunk', '_prime_index', '_helpers', '_mapping')

    def __init__(self, chunk: int, helpers: Helpers, mapping: ElementMapping):
        self._chunk = chunk
        self._prime_index = 0
        self._helpers = helpers
        self._mapping = mapping

    def __iter__(self) -> 'PrimeBagGroupIter':
        return self

    def __next__(self) -> Tuple[Any, int]:
        if self._chunk == 1:
            raise StopIteration

        primes = self._helpers.prime_list
        while self._prime_index < len(primes):
            prime = primes[self._prime_index]
            count = 0
            while self._chunk % prime == 0:
                self._chunk //= prime
                count += 1

            index = self._prime_index
            self._prime_index += 1
            if count:
                return (self._mapping.from_index(index), count)
        raise StopIteration
