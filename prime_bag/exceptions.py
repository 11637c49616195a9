"""
Error types.

Every error is a ValueError: each one means the requested bag would not be a
valid product of tabled primes within the backing width.
"""


class PrimeBagError(ValueError):
    """Base class for prime bag failures."""


class CapacityExceeded(PrimeBagError):
    """The result does not fit the backing width, or the index has no prime."""


class NotPresent(PrimeBagError):
    """The element to remove does not divide the bag."""


class NotASuperset(PrimeBagError):
    """The subtracted bag is not contained in the bag it is subtracted from."""


class ConfigError(ValueError):
    """Invalid configuration value."""
