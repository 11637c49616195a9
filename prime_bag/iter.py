"""
Element iterators.

Responsibility: decode a bag value back into its elements without building a
count array. PrimeBagIter walks the table upward by trial division and can
also be consumed from the back; PrimeBagReverseIter drives it from the back
only.

Factors that are not in the prime table (possible after from_inner) are
never emitted.
"""

from typing import Any, Tuple

from .element import ElementMapping
from .helpers import Helpers, ilog, trailing_zeros

_MISSING = object()


class PrimeBagIter:
    """
    Iterator over the elements of a bag in ascending index order.

    Each element is yielded once per copy in the bag.

    Parameters
    ----------
    chunk : int
        Bag value still to decode.
    helpers : Helpers
        Arithmetic for the bag's width.
    mapping : ElementMapping
        Index to element conversion.
    """

    __slots__ = ('_chunk', '_prime_index', '_helpers', '_mapping')

    def __init__(self, chunk: int, helpers: Helpers, mapping: ElementMapping):
        self._chunk = chunk
        self._prime_index = 0
        self._helpers = helpers
        self._mapping = mapping

    def __repr__(self) -> str:
        return f"{type(self).__name__}(chunk={self._chunk}, prime_index={self._prime_index})"

    def __iter__(self) -> 'PrimeBagIter':
        return self

    def __next__(self) -> Any:
        chunk = self._chunk
        if chunk == 1:
            raise StopIteration

        primes = self._helpers.prime_list
        while self._prime_index < len(primes):
            quo, rem = divmod(chunk, primes[self._prime_index])
            if rem == 0:
                # prime_index stays put: the same prime may divide again
                self._chunk = quo
                return self._mapping.from_index(self._prime_index)
            self._prime_index += 1
        raise StopIteration

    def __reversed__(self) -> 'PrimeBagReverseIter':
        return PrimeBagReverseIter(self)

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def __copy__(self) -> 'PrimeBagIter':
        return self.copy()

    def copy(self) -> 'PrimeBagIter':
        """Independent iterator at the same position."""
        clone = PrimeBagIter(self._chunk, self._helpers, self._mapping)
        clone._prime_index = self._prime_index
        return clone

    def size_hint(self) -> Tuple[int, int]:
        """
        Bounds on the number of remaining elements, without consuming.

        Returns
        -------
        tuple
            (lower, upper). Exact while only the smallest prime remains.
        """
        chunk = self._chunk
        if chunk == 1:
            return (0, 0)

        if self._prime_index == 0:
            zeros = trailing_zeros(chunk)
            residual = chunk >> zeros
            base_index = 1
        else:
            zeros = 0
            residual = chunk
            base_index = self._prime_index

        if residual == 1:
            return (zeros, zeros)

        base = self._helpers.get_prime(base_index)
        if base is None:
            return (zeros, zeros)
        # residual may hold only primes past the table, which are never emitted
        tabled = any(residual % p == 0 for p in self._helpers.prime_list[base_index:])
        return (zeros + int(tabled), zeros + ilog(residual, base))

    def count(self) -> int:
        """Consume the iterator and return the number of remaining elements."""
        total = self._helpers.count_chunk(self._chunk, self._prime_index)
        self._chunk = 1
        return total

    def nth(self, n: int, default: Any = None) -> Any:
        """
        Skip n elements and return the next one.

        Returns `default` if fewer than n + 1 elements remain.
        """
        if self._prime_index == 0 and self._chunk != 1:
            zeros = trailing_zeros(self._chunk)
            if n < zeros:
                self._chunk >>= n + 1
                return self._mapping.from_index(0)
            self._chunk >>= zeros
            self._prime_index = 1
            n -= zeros

        for _ in range(n):
            if next(self, _MISSING) is _MISSING:
                return default
        return next(self, default)

    def next_back(self) -> Any:
        """
        Remove and return the element with the largest index.

        The residual value is looked up in the prime table by binary search;
        when it is not itself a prime the table is scanned downward from the
        insertion point for the largest prime that divides it.

        Raises
        ------
        StopIteration
            When no tabled factor remains.
        """
        chunk = self._chunk
        if chunk == 1:
            raise StopIteration

        helpers = self._helpers
        primes = helpers.prime_list
        zeros = 0
        if self._prime_index == 0:
            zeros = trailing_zeros(chunk)
            residual = chunk >> zeros
            if residual == 1:
                self._chunk = chunk >> 1
                return self._mapping.from_index(0)
            skip = 1
        else:
            residual = chunk
            skip = self._prime_index

        index = helpers.find_largest_possible_prime(skip, residual)
        if index < len(primes) and primes[index] == residual:
            self._chunk = chunk // residual
            return self._mapping.from_index(index)

        for i in range(min(index, len(primes)) - 1, skip - 1, -1):
            if residual % primes[i] == 0:
                self._chunk = chunk // primes[i]
                return self._mapping.from_index(i)

        if zeros:
            # only untabled odd factors are left above the factors of 2
            self._chunk = chunk >> 1
            return self._mapping.from_index(0)
        raise StopIteration

    def last(self, default: Any = None) -> Any:
        """Consume the iterator and return its final element."""
        try:
            element = self.next_back()
        except StopIteration:
            return default
        self._chunk = 1
        return element


class PrimeBagReverseIter:
    """Iterator over the elements of a bag in descending index order."""

    __slots__ = ('_inner',)

    def __init__(self, inner: PrimeBagIter):
        self._inner = inner

    def __iter__(self) -> 'PrimeBagReverseIter':
        return self

    def __next__(self) -> Any:
        return self._inner.next_back()

    def __reversed__(self) -> PrimeBagIter:
        return self._inner

    def __length_hint__(self) -> int:
        return self._inner.size_hint()[0]
