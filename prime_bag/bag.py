"""
Prime bags: multisets stored as a single bounded integer.

Each possible element is assigned a prime through its index. A bag is the
product of the primes of its elements, so

    insert / extend      ->  multiplication
    remove / difference  ->  exact division
    contains / superset  ->  divisibility
    intersection         ->  greatest common divisor
    union                ->  least common multiple

The backing width bounds the product. Bags are immutable values; every
operation returns a new bag. `try_*` methods return None on failure, their
counterparts without the prefix raise.
"""

from typing import Any, ClassVar, Iterable, Optional, Type, TypeVar

from .element import INDEX_MAPPING, ElementMapping
from .exceptions import CapacityExceeded, NotASuperset, NotPresent
from .group_iter import PrimeBagGroupIter
from .helpers import Helpers, helpers_for, trailing_zeros
from .iter import PrimeBagIter, PrimeBagReverseIter

BagT = TypeVar('BagT', bound='PrimeBag')


class PrimeBag:
    """
    A bag (multiset) of elements with a fixed maximum capacity.

    Use the width subclasses (PrimeBag8 .. PrimeBag128); larger widths hold
    more elements. Capacity also depends on which elements are stored: the
    element with index 0 costs one bit, higher indices cost more.

    Parameters
    ----------
    elements : iterable, optional
        Initial contents.
    mapping : ElementMapping, optional
        Conversion between elements and prime indices. Defaults to treating
        elements as the indices themselves.

    Raises
    ------
    CapacityExceeded
        If the elements do not fit.
    """

    __slots__ = ('_inner', '_mapping')

    bits: ClassVar[int] = 0
    helpers: ClassVar[Helpers]

    def __init_subclass__(cls, bits: int = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if bits is not None:
            cls.bits = bits
            cls.helpers = helpers_for(bits)

    def __init__(self, elements: Iterable[Any] = (), *, mapping: ElementMapping = INDEX_MAPPING):
        if not self.bits:
            raise TypeError("PrimeBag is abstract; use PrimeBag8 .. PrimeBag128")
        self._inner = 1
        self._mapping = mapping
        self._inner = self.extend(elements)._inner

    @classmethod
    def _new(cls: Type[BagT], inner: int, mapping: ElementMapping) -> BagT:
        bag = object.__new__(cls)
        bag._inner = inner
        bag._mapping = mapping
        return bag

    def _with(self: BagT, inner: int) -> BagT:
        return self._new(inner, self._mapping)

    # --- Construction and raw value -----------------------------------------

    @classmethod
    def empty(cls: Type[BagT], mapping: ElementMapping = INDEX_MAPPING) -> BagT:
        """The bag with no elements."""
        return cls._new(1, mapping)

    @classmethod
    def from_inner(cls: Type[BagT], inner: int, mapping: ElementMapping = INDEX_MAPPING) -> BagT:
        """
        Create a bag from its raw value.

        This is the serialization surface: `from_inner(bag.into_inner())`
        reproduces the bag exactly.

        Raises
        ------
        ValueError
            If `inner` is not in [1, 2**bits - 1].
        """
        inner = int(inner)
        if not 1 <= inner <= cls.helpers.max_value:
            raise ValueError(
                f"{cls.__name__} value must be in [1, {cls.helpers.max_value}], got {inner}")
        return cls._new(inner, mapping)

    def into_inner(self) -> int:
        """The raw value: the product of the primes of all elements."""
        return self._inner

    @classmethod
    def try_from_iter(cls: Type[BagT], elements: Iterable[Any],
                      mapping: ElementMapping = INDEX_MAPPING) -> Optional[BagT]:
        """Bag of `elements`, or None if they do not fit."""
        return cls.empty(mapping).try_extend(elements)

    @classmethod
    def from_iter(cls: Type[BagT], elements: Iterable[Any],
                  mapping: ElementMapping = INDEX_MAPPING) -> BagT:
        return cls.empty(mapping).extend(elements)

    def widen(self, target: Type[BagT]) -> BagT:
        """
        Convert to a bag of a wider (or the same) width.

        The raw value is unchanged, so the contents are unchanged.

        Raises
        ------
        TypeError
            If `target` is narrower than this bag.
        """
        if not target.bits or target.bits < self.bits:
            raise TypeError(f"cannot widen {type(self).__name__} to {target.__name__}")
        return target._new(self._inner, self._mapping)

    # --- Element queries ----------------------------------------------------

    def _prime_of(self, element: Any) -> Optional[int]:
        return self.helpers.get_prime(self._mapping.to_index(element))

    def contains(self, element: Any) -> bool:
        """Whether the bag holds at least one `element`."""
        prime = self._prime_of(element)
        if prime is None:
            return False
        return self.helpers.is_multiple(self._inner, prime)

    def contains_at_least(self, element: Any, n: int) -> bool:
        """Whether the bag holds `element` at least `n` times."""
        if n < 0:
            raise ValueError(f"count must be non-negative, got {n}")
        prime = self._prime_of(element)
        if prime is None:
            return False
        power = self.helpers.checked_pow(prime, n)
        if power is None:
            return False
        return self.helpers.is_multiple(self._inner, power)

    def count_instances(self, element: Any) -> int:
        """Number of copies of `element` in the bag."""
        index = self._mapping.to_index(element)
        if index == 0:
            return trailing_zeros(self._inner)

        prime = self.helpers.get_prime(index)
        if prime is None:
            return 0

        count = 0
        inner = self.helpers.div_exact(self._inner, prime)
        while inner is not None:
            count += 1
            inner = self.helpers.div_exact(inner, prime)
        return count

    def is_empty(self) -> bool:
        return self._inner == 1

    # --- Insertion and removal ----------------------------------------------

    def try_insert(self: BagT, element: Any) -> Optional[BagT]:
        """Bag with one more `element`, or None if it does not fit."""
        prime = self._prime_of(element)
        if prime is None:
            return None
        inner = self.helpers.checked_mul(self._inner, prime)
        if inner is None:
            return None
        return self._with(inner)

    def insert(self: BagT, element: Any) -> BagT:
        bag = self.try_insert(element)
        if bag is None:
            raise CapacityExceeded(f"{type(self).__name__} has no room for {element!r}")
        return bag

    def try_insert_many(self: BagT, element: Any, n: int) -> Optional[BagT]:
        """Bag with `n` more copies of `element`, or None if they do not fit."""
        if n < 0:
            raise ValueError(f"count must be non-negative, got {n}")
        prime = self._prime_of(element)
        if prime is None:
            return None
        power = self.helpers.checked_pow(prime, n)
        if power is None:
            return None
        inner = self.helpers.checked_mul(self._inner, power)
        if inner is None:
            return None
        return self._with(inner)

    def insert_many(self: BagT, element: Any, n: int) -> BagT:
        bag = self.try_insert_many(element, n)
        if bag is None:
            raise CapacityExceeded(
                f"{type(self).__name__} has no room for {n} x {element!r}")
        return bag

    def try_remove(self: BagT, element: Any) -> Optional[BagT]:
        """Bag with one copy of `element` removed, or None if it is absent."""
        prime = self._prime_of(element)
        if prime is None:
            return None
        inner = self.helpers.div_exact(self._inner, prime)
        if inner is None:
            return None
        return self._with(inner)

    def remove(self: BagT, element: Any) -> BagT:
        bag = self.try_remove(element)
        if bag is None:
            raise NotPresent(f"{element!r} is not in the bag")
        return bag

    def try_extend(self: BagT, elements: Iterable[Any]) -> Optional[BagT]:
        """
        Bag with all of `elements` added.

        All or nothing: returns None if any element does not fit.
        """
        helpers = self.helpers
        inner = self._inner
        for element in elements:
            prime = self._prime_of(element)
            if prime is None:
                return None
            inner = helpers.checked_mul(inner, prime)
            if inner is None:
                return None
        return self._with(inner)

    def extend(self: BagT, elements: Iterable[Any]) -> BagT:
        elements = list(elements)
        bag = self.try_extend(elements)
        if bag is None:
            raise CapacityExceeded(
                f"{type(self).__name__} has no room for {len(elements)} more elements")
        return bag

    # --- Bag algebra --------------------------------------------------------

    def _check_same_width(self, other: 'PrimeBag') -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"expected {type(self).__name__}, got {type(other).__name__}")

    def is_superset(self, other: 'PrimeBag') -> bool:
        """
        Whether every element of `other` occurs at least as often in this bag.

        True for equal bags.
        """
        self._check_same_width(other)
        return self.helpers.is_multiple(self._inner, other._inner)

    def is_subset(self, other: 'PrimeBag') -> bool:
        """
        Whether every element of this bag occurs at least as often in `other`.

        True for equal bags.
        """
        return other.is_superset(self)

    def try_sum(self: BagT, other: BagT) -> Optional[BagT]:
        """
        Bag holding the elements of both bags, counts added.

        Returns None if the result does not fit.
        """
        self._check_same_width(other)
        inner = self.helpers.checked_mul(self._inner, other._inner)
        if inner is None:
            return None
        return self._with(inner)

    def sum(self: BagT, other: BagT) -> BagT:
        bag = self.try_sum(other)
        if bag is None:
            raise CapacityExceeded(f"sum does not fit in {type(self).__name__}")
        return bag

    def try_union(self: BagT, other: BagT) -> Optional[BagT]:
        """
        Bag holding each element the larger number of times it occurs in either.

        Returns None if the result does not fit.
        """
        self._check_same_width(other)
        inner = self.helpers.lcm(self._inner, other._inner)
        if inner is None:
            return None
        return self._with(inner)

    def union(self: BagT, other: BagT) -> BagT:
        bag = self.try_union(other)
        if bag is None:
            raise CapacityExceeded(f"union does not fit in {type(self).__name__}")
        return bag

    def intersection(self: BagT, other: BagT) -> BagT:
        """Bag holding each element the smaller number of times it occurs in either."""
        self._check_same_width(other)
        return self._with(self.helpers.gcd(self._inner, other._inner))

    def try_difference(self: BagT, other: BagT) -> Optional[BagT]:
        """
        Bag holding the elements of this bag minus those of `other`.

        Returns None unless this bag is a superset of `other`.
        """
        self._check_same_width(other)
        inner = self.helpers.div_exact(self._inner, other._inner)
        if inner is None:
            return None
        return self._with(inner)

    def difference(self: BagT, other: BagT) -> BagT:
        bag = self.try_difference(other)
        if bag is None:
            raise NotASuperset(f"{self!r} is not a superset of {other!r}")
        return bag

    # --- Iteration ----------------------------------------------------------

    def __iter__(self) -> PrimeBagIter:
        return PrimeBagIter(self._inner, self.helpers, self._mapping)

    def __reversed__(self) -> PrimeBagReverseIter:
        return PrimeBagReverseIter(iter(self))

    def iter_groups(self) -> PrimeBagGroupIter:
        """Iterate over (element, count) pairs of the elements present."""
        return PrimeBagGroupIter(self._inner, self.helpers, self._mapping)

    def __len__(self) -> int:
        return iter(self).count()

    # --- Python protocol ----------------------------------------------------

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def __bool__(self) -> bool:
        return not self.is_empty()

    def __int__(self) -> int:
        return self._inner

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner == other._inner

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._inner))

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_inner({self._inner})"

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.is_subset(other)

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner != other._inner and self.is_subset(other)

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.is_superset(other)

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inner != other._inner and self.is_superset(other)

    def __and__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        return self.intersection(other)

    def __or__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        return self.union(other)

    def __add__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        return self.sum(other)

    def __sub__(self, other: object):
        if type(other) is not type(self):
            return NotImplemented
        return self.difference(other)


class PrimeBag8(PrimeBag, bits=8):
    __slots__ = ()


class PrimeBag16(PrimeBag, bits=16):
    __slots__ = ()


class PrimeBag32(PrimeBag, bits=32):
    __slots__ = ()


class PrimeBag64(PrimeBag, bits=64):
    __slots__ = ()


class PrimeBag128(PrimeBag, bits=128):
    __slots__ = ()
