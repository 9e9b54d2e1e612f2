"""
reserves/price.py

Turns raw getReserves() integers into human-readable amounts and a spot price.

Uniswap V2 pairs store reserves in base units:
  amount = raw / 10**decimals

and the spot price of token0 quoted in token1 is
  price = amount1 / amount0

Scaling by a power of ten is exact in Decimal, so the normalized reserves are
exact; only the final division is rounded (40 significant digits) before we
hand floats back.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext

from reserves.errors import DecimalOverflowError, EmptyReserveError

UINT112_MAX = 2 ** 112 - 1
UINT32_MAX = 2 ** 32 - 1

# ERC20 decimals() is a uint8.
MAX_DECIMALS = 255

PRICE_PRECISION = 40


@dataclass(frozen=True)
class RawReserves:
    reserve0: int
    reserve1: int
    block_timestamp_last: int


@dataclass(frozen=True)
class TokenDecimals:
    token0: int
    token1: int

    def __post_init__(self) -> None:
        for name, d in (("token0", self.token0), ("token1", self.token1)):
            if isinstance(d, bool) or not isinstance(d, int):
                raise ValueError(f"{name} decimals must be an int, got {d!r}")
            if d < 0 or d > MAX_DECIMALS:
                raise ValueError(f"{name} decimals out of range 0..{MAX_DECIMALS}: {d}")


@dataclass(frozen=True)
class ReserveValues:
    reserve0: float
    reserve1: float
    price: float

    @property
    def inverse_price(self) -> float:
        """Price of token1 quoted in token0."""
        if self.price == 0:
            raise EmptyReserveError("reserve1 is zero; inverse price is undefined")
        return 1.0 / self.price


def _check_reserve(name: str, raw: int) -> None:
    if raw < 0 or raw > UINT112_MAX:
        raise DecimalOverflowError(f"{name}={raw} is outside the uint112 range")


def normalize_reserve(raw: int, decimals: int) -> Decimal:
    """Exact raw / 10**decimals (a uint112 has at most 35 digits)."""
    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        return Decimal(int(raw)).scaleb(-int(decimals))


def compute_reserve_values(raw: RawReserves, decimals: TokenDecimals) -> ReserveValues:
    """
    Normalize both reserves and derive price = amount1 / amount0.

    Raises EmptyReserveError when reserve0 is zero and DecimalOverflowError
    when a reserve is not a valid uint112.
    """
    _check_reserve("reserve0", raw.reserve0)
    _check_reserve("reserve1", raw.reserve1)

    if raw.reserve0 == 0:
        raise EmptyReserveError("reserve0 is zero; pair has no liquidity to price against")

    amount0 = normalize_reserve(raw.reserve0, decimals.token0)
    amount1 = normalize_reserve(raw.reserve1, decimals.token1)

    with localcontext() as ctx:
        ctx.prec = PRICE_PRECISION
        price = amount1 / amount0

    # uint112 reserves and decimals in 0..255 keep every value between
    # 1e-290 and 1e290, so the float conversions are always finite.
    return ReserveValues(
        reserve0=float(amount0),
        reserve1=float(amount1),
        price=float(price),
    )
