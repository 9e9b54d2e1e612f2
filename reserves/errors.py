"""
reserves/errors.py

Error kinds raised while reading a pair and pricing its reserves.

Everything subclasses ReserveError. Kinds that have a builtin counterpart
(ConnectionError, ZeroDivisionError, OverflowError) subclass that as well.
"""


class ReserveError(Exception):
    """Base class for every error this package raises on purpose."""


class RpcConnectionError(ReserveError, ConnectionError):
    """The node could not be reached (refused, DNS failure, timeout)."""


class RpcError(ReserveError):
    """The node answered, but with an error payload or a reverted call."""


class AbiDecodeError(ReserveError):
    """The getReserves() return data did not decode into three integers."""


class EmptyReserveError(ReserveError, ZeroDivisionError):
    """reserve0 is zero, so no price can be derived."""


class DecimalOverflowError(ReserveError, OverflowError):
    """A reserve is negative or above the uint112 maximum."""
