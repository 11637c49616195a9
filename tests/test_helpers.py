"""
Tests for the width-bounded arithmetic helpers.
"""

import math

import numpy as np
import pytest

from prime_bag.helpers import Helpers, binary_gcd, helpers_for, ilog, trailing_zeros


class TestPureFunctions:
    """Test the width-independent functions."""

    def test_trailing_zeros(self):
        assert trailing_zeros(1) == 0
        assert trailing_zeros(2) == 1
        assert trailing_zeros(12) == 2
        assert trailing_zeros(1 << 127) == 127

    def test_binary_gcd_known_values(self):
        assert binary_gcd(12, 18) == 6
        assert binary_gcd(17, 5) == 1
        assert binary_gcd(0, 9) == 9
        assert binary_gcd(9, 0) == 9
        assert binary_gcd(1, 1) == 1

    def test_binary_gcd_matches_math_gcd(self):
        """Cross-check against math.gcd on random 128-bit values."""
        rng = np.random.default_rng(12345)
        for _ in range(500):
            a = int(rng.integers(1, 1 << 62)) << int(rng.integers(0, 64))
            b = int(rng.integers(1, 1 << 62)) * int(rng.integers(1, 1 << 40))
            assert binary_gcd(a, b) == math.gcd(a, b), f"gcd({a}, {b})"

    def test_ilog(self):
        assert ilog(1, 3) == 0
        assert ilog(2, 3) == 0
        assert ilog(3, 3) == 1
        assert ilog(45, 3) == 3
        assert ilog(495, 3) == 5
        assert ilog(1 << 127, 2) == 127


class TestHelpers:
    """Test Helpers on the 16-bit width."""

    @pytest.fixture
    def h16(self):
        return Helpers(16, num_primes=128)

    def test_bounds(self, h16):
        assert h16.max_value == 65535
        assert h16.num_primes == 128

    def test_get_prime(self, h16):
        assert h16.get_prime(0) == 2
        assert h16.get_prime(4) == 11
        assert h16.get_prime(127) == 719
        assert h16.get_prime(128) is None
        assert h16.get_prime(-1) is None

    def test_prime_list_holds_python_ints(self, h16):
        """Arithmetic must not wrap around in numpy dtypes."""
        assert all(type(p) is int for p in h16.prime_list)

    def test_div_exact(self, h16):
        assert h16.div_exact(45, 9) == 5
        assert h16.div_exact(45, 2) is None
        assert h16.div_exact(45, 45) == 1

    def test_is_multiple(self, h16):
        assert h16.is_multiple(45, 15)
        assert not h16.is_multiple(45, 7)

    def test_checked_mul(self, h16):
        assert h16.checked_mul(255, 257) == 65535
        assert h16.checked_mul(256, 256) is None

    def test_checked_pow(self, h16):
        assert h16.checked_pow(7, 0) == 1
        assert h16.checked_pow(2, 15) == 32768
        assert h16.checked_pow(2, 16) is None

    def test_checked_pow_negative(self, h16):
        with pytest.raises(ValueError):
            h16.checked_pow(3, -1)

    def test_gcd(self, h16):
        assert h16.gcd(735, 385) == 35

    def test_lcm(self, h16):
        assert h16.lcm(735, 385) == 8085
        assert h16.lcm(8085, 13) is None

    def test_count_chunk(self, h16):
        """Counts with multiplicity, from the requested index."""
        chunk = 2 ** 3 * 3 ** 2 * 5
        assert h16.count_chunk(chunk, 0) == 6
        assert h16.count_chunk(45, 1) == 3
        assert h16.count_chunk(1, 0) == 0

    def test_count_chunk_matches_trial_division(self, h16):
        """The trailing-zero shortcut must agree with plain trial division."""
        for chunk in range(1, 5000):
            expected = 0
            rest = chunk
            for p in h16.prime_list:
                while rest % p == 0:
                    rest //= p
                    expected += 1
            assert h16.count_chunk(chunk, 0) == expected, f"count_chunk({chunk})"

    def test_count_chunk_ignores_untabled_primes(self, h16):
        assert h16.count_chunk(2 * 1021, 0) == 1

    def test_find_largest_possible_prime(self, h16):
        assert h16.find_largest_possible_prime(0, 2) == 0
        assert h16.find_largest_possible_prime(0, 5) == 2
        assert h16.find_largest_possible_prime(0, 4) == 2
        assert h16.find_largest_possible_prime(1, 2) == 1
        assert h16.find_largest_possible_prime(0, 719) == 127
        assert h16.find_largest_possible_prime(0, 720) == 128
        assert h16.find_largest_possible_prime(0, 10 ** 30) == 128

    def test_find_largest_possible_prime_wide_values(self):
        """Values wider than the table dtype are past every entry."""
        h128 = Helpers(128, num_primes=128)
        assert h128.find_largest_possible_prime(1, (1 << 128) - 1) == 128
        assert h128.find_largest_possible_prime(1, 105) == 27


class TestHelpersPerWidth:
    """Test that each width gets its own bounds and table."""

    @pytest.mark.parametrize('bits', [8, 16, 32, 64, 128])
    def test_max_value(self, bits):
        assert helpers_for(bits).max_value == 2 ** bits - 1

    def test_shared_instance(self):
        assert helpers_for(32) is helpers_for(32)

    def test_8_bit_table_is_short(self):
        assert helpers_for(8).num_primes == 54
        assert helpers_for(8).get_prime(54) is None


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
