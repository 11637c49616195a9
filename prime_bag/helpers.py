"""
Arithmetic helpers over a fixed backing width.

Responsibility: the integer operations bags are built from. Every function
here is pure. Failures are reported as None so the iteration loops never
need to raise; the bag layer turns None into an exception.

Values are Python ints bounded by 2**bits - 1. The prime table is a numpy
array, mirrored as a tuple of ints for the arithmetic itself.
"""

from functools import cached_property, lru_cache
from typing import Optional, Tuple

import numpy as np

from .primes import prime_table


def trailing_zeros(x: int) -> int:
    """Number of trailing zero bits of x > 0."""
    return (x & -x).bit_length() - 1


def binary_gcd(a: int, b: int) -> int:
    """
    Greatest common divisor by Stein's binary algorithm.

    Parameters
    ----------
    a, b : int
        Non-negative integers.

    Returns
    -------
    int
        gcd(a, b); gcd(0, b) == b.
    """
    if a == 0:
        return b
    if b == 0:
        return a

    shift = trailing_zeros(a | b)
    a >>= trailing_zeros(a)
    while b:
        b >>= trailing_zeros(b)
        if a > b:
            a, b = b, a
        b -= a
    return a << shift


def ilog(value: int, base: int) -> int:
    """Floor of log_base(value), exact for any integer size."""
    n = 0
    power = base
    while power <= value:
        n += 1
        power *= base
    return n


class Helpers:
    """
    Arithmetic for one backing width.

    Parameters
    ----------
    bits : int
        Backing width.
    num_primes : int, optional
        Table size. Defaults to the configured value.
    """

    ONE = 1

    def __init__(self, bits: int, num_primes: int = None):
        self.bits = bits
        self.max_value = (1 << bits) - 1
        self._num_primes = num_primes

    def __repr__(self) -> str:
        return f"Helpers(bits={self.bits})"

    @cached_property
    def primes(self) -> np.ndarray:
        return prime_table(self.bits, self._num_primes)

    @cached_property
    def prime_list(self) -> Tuple[int, ...]:
        return tuple(int(p) for p in self.primes)

    @property
    def num_primes(self) -> int:
        return len(self.prime_list)

    def get_prime(self, i: int) -> Optional[int]:
        """Prime at index i, or None if the index has no table entry."""
        if 0 <= i < len(self.prime_list):
            return self.prime_list[i]
        return None

    def div_exact(self, x: int, other: int) -> Optional[int]:
        """x // other if other divides x, else None."""
        quo, rem = divmod(x, other)
        if rem == 0:
            return quo
        return None

    def is_multiple(self, x: int, other: int) -> bool:
        return x % other == 0

    def checked_mul(self, x: int, y: int) -> Optional[int]:
        product = x * y
        if product > self.max_value:
            return None
        return product

    def checked_pow(self, x: int, n: int) -> Optional[int]:
        """x ** n, or None if it does not fit the width."""
        if n < 0:
            raise ValueError(f"count must be non-negative, got {n}")
        result = 1
        for _ in range(n):
            result *= x
            if result > self.max_value:
                return None
        return result

    def gcd(self, a: int, b: int) -> int:
        return binary_gcd(a, b)

    def lcm(self, a: int, b: int) -> Optional[int]:
        # lcm = a * b / gcd, ordered so the division happens first
        divided = self.div_exact(a, self.gcd(a, b))
        return self.checked_mul(b, divided)

    def count_chunk(self, chunk: int, start_index: int = 0) -> int:
        """
        Count the prime factors of chunk with multiplicity.

        Only table primes at or after `start_index` are counted. The prime 2
        is counted from the trailing zero bits; the rest by trial division.

        Parameters
        ----------
        chunk : int
            Value to factor (>= 1).
        start_index : int
            First table index that may still divide `chunk`.

        Returns
        -------
        int
            Total number of tabled prime factors.
        """
        count = 0
        if start_index == 0:
            zeros = trailing_zeros(chunk)
            count += zeros
            chunk >>= zeros
            start_index = 1

        for p in self.prime_list[start_index:]:
            if chunk == 1:
                break
            while chunk % p == 0:
                chunk //= p
                count += 1
        return count

    def find_largest_possible_prime(self, skip: int, value: int) -> int:
        """
        Binary search the table for value.

        Parameters
        ----------
        skip : int
            Number of leading table entries to ignore.
        value : int
            Value to look up.

        Returns
        -------
        int
            Table index of value if it is tabled, else the index it would be
            inserted at (num_primes when it exceeds every entry).
        """
        primes = self.prime_list
        if not primes or value > primes[-1]:
            return len(primes)
        return skip + int(np.searchsorted(self.primes[skip:], value, side='left'))


@lru_cache(maxsize=None)
def helpers_for(bits: int) -> Helpers:
    """Shared helpers instance for a width, using the configured table size."""
    return Helpers(bits)
