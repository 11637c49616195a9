"""
Prime bags: multisets encoded as a product of primes in a fixed-width integer.

    >>> from prime_bag import PrimeBag16
    >>> bag = PrimeBag16.from_iter([1, 2, 2])
    >>> bag.insert_many(3, 3).count_instances(3)
    3
    >>> list(bag.iter_groups())
    [(1, 1), (2, 2)]
"""

from .bag import PrimeBag, PrimeBag8, PrimeBag16, PrimeBag32, PrimeBag64, PrimeBag128
from .element import INDEX_MAPPING, ElementMapping, PrimeBagElement
from .exceptions import CapacityExceeded, ConfigError, NotASuperset, NotPresent, PrimeBagError
from .group_iter import PrimeBagGroupIter
from .iter import PrimeBagIter, PrimeBagReverseIter

__version__ = '0.4.0'

__all__ = [
    'PrimeBag', 'PrimeBag8', 'PrimeBag16', 'PrimeBag32', 'PrimeBag64', 'PrimeBag128',
    'ElementMapping', 'PrimeBagElement', 'INDEX_MAPPING',
    'PrimeBagError', 'CapacityExceeded', 'NotPresent', 'NotASuperset', 'ConfigError',
    'PrimeBagIter', 'PrimeBagReverseIter', 'PrimeBagGroupIter',
]
