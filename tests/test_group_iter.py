"""
Tests for grouped iteration: (element, count) pairs.
"""

from collections import Counter

import numpy as np
import pytest

from prime_bag import PrimeBag8, PrimeBag16, PrimeBag32, PrimeBag64, PrimeBag128


class TestIterGroups:
    """Test group iteration on each width."""

    def test_inner(self):
        bag = PrimeBag8.from_inner(45)
        assert list(bag.iter_groups()) == [(1, 2), (2, 1)]

    @pytest.mark.parametrize('bag_type', [PrimeBag8, PrimeBag16])
    def test_iter_groups_small(self, bag_type):
        bag = bag_type.from_iter([1, 1, 2])
        assert list(bag.iter_groups()) == [(1, 2), (2, 1)]

    @pytest.mark.parametrize('bag_type', [PrimeBag32, PrimeBag64, PrimeBag128])
    def test_iter_groups_large(self, bag_type):
        bag = bag_type.from_iter([1, 1, 1, 3, 3, 4, 4, 4])
        assert list(bag.iter_groups()) == [(1, 3), (3, 2), (4, 3)]

    def test_empty(self):
        assert list(PrimeBag16().iter_groups()) == []

    def test_groups_with_index_zero(self):
        bag = PrimeBag16.from_iter([0, 0, 0, 5])
        assert list(bag.iter_groups()) == [(0, 3), (5, 1)]

    def test_exhausted_iterator_stays_exhausted(self):
        it = PrimeBag16.from_iter([2]).iter_groups()
        assert next(it) == (2, 1)
        with pytest.raises(StopIteration):
            next(it)
        with pytest.raises(StopIteration):
            next(it)

    def test_matches_counter(self):
        """Grouping agrees with counting the forward iteration."""
        rng = np.random.default_rng(12345)
        for _ in range(200):
            elements = [int(x) for x in rng.integers(0, 10, size=int(rng.integers(0, 10)))]
            bag = PrimeBag128.from_iter(elements)
            assert list(bag.iter_groups()) == sorted(Counter(elements).items())

    def test_untabled_factor_is_skipped(self):
        bag = PrimeBag32.from_inner(9 * 1021)
        assert list(bag.iter_groups()) == [(1, 2)]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
