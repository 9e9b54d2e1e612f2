"""
reserves/report.py

Renders one reserves read for humans (plain lines) or machines (JSON).
"""

import json
from datetime import datetime, timezone
from typing import Any

from reserves.price import RawReserves, ReserveValues


def ts_to_iso(ts: int) -> str:
    """blockTimestampLast (unix seconds) as UTC ISO time."""
    return datetime.fromtimestamp(int(ts), tz=timezone.utc).isoformat()


def _inverse(values: ReserveValues) -> float | None:
    return values.inverse_price if values.price else None


def format_report(
    values: ReserveValues,
    raw: RawReserves,
    token0_symbol: str,
    token1_symbol: str,
) -> list[str]:
    lines = [
        f"The reserve of {token0_symbol} in the pair is: {values.reserve0}",
        f"The reserve of {token1_symbol} in the pair is: {values.reserve1}",
        f"The price of {token0_symbol} in terms of {token1_symbol} is: {values.price}",
    ]
    inv = _inverse(values)
    if inv is not None:
        lines.append(f"The price of {token1_symbol} in terms of {token0_symbol} is: {inv}")
    lines.append(f"Reserves last updated at: {ts_to_iso(raw.block_timestamp_last)}")
    return lines


def to_dict(
    values: ReserveValues,
    raw: RawReserves,
    pair: str,
    token0_symbol: str,
    token1_symbol: str,
) -> dict[str, Any]:
    return {
        "pair": pair,
        "token0": token0_symbol,
        "token1": token1_symbol,
        # raw uint112s can exceed 2**53; keep them exact as strings
        "reserve0_raw": str(raw.reserve0),
        "reserve1_raw": str(raw.reserve1),
        "reserve0": values.reserve0,
        "reserve1": values.reserve1,
        "price": values.price,
        "inverse_price": _inverse(values),
        "block_timestamp_last": raw.block_timestamp_last,
        "block_timestamp_last_utc": ts_to_iso(raw.block_timestamp_last),
    }


def format_json(
    values: ReserveValues,
    raw: RawReserves,
    pair: str,
    token0_symbol: str,
    token1_symbol: str,
) -> str:
    return json.dumps(to_dict(values, raw, pair, token0_symbol, token1_symbol), indent=2)
