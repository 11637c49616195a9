"""
Prime table generation.

Responsibility: the ordered first-K primes for each backing width.
No bag arithmetic lives here.
"""

from functools import lru_cache

import numpy as np

from .config import get_config

WIDTHS = (8, 16, 32, 64, 128)


def table_dtype(bits: int) -> np.dtype:
    """
    Storage dtype for a width's prime table.

    The 128-bit table is stored as uint64; every tabled prime is small.
    """
    if bits not in WIDTHS:
        raise ValueError(f"unsupported width {bits}, expected one of {WIDTHS}")
    return np.dtype(np.uint64) if bits > 64 else np.dtype(f'uint{bits}')


def first_primes(k: int, limit: int = None) -> np.ndarray:
    """
    Return the k smallest primes, by trial division.

    Each candidate is tested against every prime found so far.

    Parameters
    ----------
    k : int
        Number of primes wanted.
    limit : int, optional
        Largest admissible candidate (inclusive). Generation stops early
        when the next prime would exceed it.

    Returns
    -------
    np.ndarray
        Ascending int64 array of at most k primes.
    """
    found = []
    candidate = 2
    while len(found) < k:
        if limit is not None and candidate > limit:
            break
        if all(candidate % p for p in found):
            found.append(candidate)
        candidate += 1
    return np.array(found, dtype=np.int64)


@lru_cache(maxsize=None)
def prime_table(bits: int, num_primes: int = None) -> np.ndarray:
    """
    Read-only prime table for a backing width.

    Parameters
    ----------
    bits : int
        Backing width, one of WIDTHS.
    num_primes : int, optional
        Table size K. Defaults to the configured ``num_primes``.

    Returns
    -------
    np.ndarray
        The K smallest primes representable in `bits` bits (fewer when the
        width cannot hold K primes), in the width's dtype.
    """
    dtype = table_dtype(bits)
    if num_primes is None:
        num_primes = get_config()['num_primes']

    primes = first_primes(num_primes, limit=(1 << bits) - 1).astype(dtype)
    primes.setflags(write=False)
    return primes
