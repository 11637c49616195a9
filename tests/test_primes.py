"""
Tests for prime table generation.

The tables must hold exactly the smallest primes, in order, and must never
contain a value that does not fit the backing width.
"""

import numpy as np
import pytest

from prime_bag.primes import WIDTHS, first_primes, prime_table, table_dtype


# Known small primes for testing
SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]


class TestFirstPrimes:
    """Test the trial-division sieve."""

    def test_matches_known_primes(self):
        """The first 15 primes are the known ones."""
        primes = first_primes(len(SMALL_PRIMES))
        assert list(primes) == SMALL_PRIMES

    def test_zero_primes(self):
        assert len(first_primes(0)) == 0

    def test_ascending_and_prime(self):
        """Every entry is prime and larger than the one before."""
        primes = first_primes(300)
        assert np.all(np.diff(primes) > 0)
        for p in primes:
            p = int(p)
            assert all(p % d for d in range(2, int(p ** 0.5) + 1)), f"{p} is not prime"

    def test_known_positions(self):
        """Spot check the 32nd, 54th, 128th and 256th primes."""
        primes = first_primes(256)
        assert primes[31] == 131
        assert primes[53] == 251
        assert primes[127] == 719
        assert primes[255] == 1619

    def test_limit_stops_early(self):
        """Only primes <= limit are produced."""
        primes = first_primes(100, limit=255)
        assert len(primes) == 54
        assert primes[-1] == 251


class TestPrimeTable:
    """Test the cached per-width tables."""

    def test_8_bit_table_holds_all_byte_primes(self):
        table = prime_table(8, 128)
        assert len(table) == 54
        assert table[0] == 2
        assert table[1] == 3
        assert table[53] == 251

    @pytest.mark.parametrize('bits', [16, 32, 64, 128])
    def test_wider_tables_hold_requested_count(self, bits):
        table = prime_table(bits, 128)
        assert len(table) == 128
        assert table[0] == 2
        assert table[127] == 719

    def test_extended_table(self):
        """A 256-entry table fits from 16 bits up."""
        table = prime_table(16, 256)
        assert len(table) == 256
        assert table[255] == 1619

    def test_small_table(self):
        table = prime_table(32, 32)
        assert len(table) == 32
        assert table[-1] == 131

    @pytest.mark.parametrize('bits', WIDTHS)
    def test_dtype(self, bits):
        assert prime_table(bits, 32).dtype == table_dtype(bits)

    def test_128_bit_table_is_stored_as_uint64(self):
        assert table_dtype(128) == np.uint64

    def test_unsupported_width(self):
        with pytest.raises(ValueError):
            table_dtype(12)

    def test_table_is_read_only(self):
        table = prime_table(16, 32)
        with pytest.raises(ValueError):
            table[0] = 4

    def test_table_is_cached(self):
        """Tables are built once per (width, size)."""
        assert prime_table(64, 64) is prime_table(64, 64)

    def test_default_size_comes_from_config(self):
        assert len(prime_table(16)) == 128


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
