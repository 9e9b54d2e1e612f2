"""
reserves/fetch_price.py

One-shot spot price read for a Uniswap V2 pair:
1) read getReserves() from the pair (one eth_call)
2) normalize reserves by the configured token decimals
3) print reserve0, reserve1 and price = reserve1 / reserve0

On any error we log it, print no price and exit 1. Nothing is retried.

Usage:
  python -m reserves.fetch_price [--rpc-url URL] [--pair ADDRESS] [--block N|latest] [--json]
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from reserves.abi import load_artifact_abi
from reserves.config import load_config
from reserves.errors import ReserveError
from reserves.price import RawReserves, ReserveValues, TokenDecimals, compute_reserve_values
from reserves.reader import ChainReader
from reserves.report import format_json, format_report

logger = logging.getLogger("reserves.fetch_price")

BLOCK_TAGS = ("latest", "earliest", "pending", "safe", "finalized")


def parse_block(value: str) -> str | int:
    """argparse type for --block: a tag or a non-negative block number."""
    v = value.strip().lower()
    if v in BLOCK_TAGS:
        return v
    try:
        n = int(v, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a block number or tag: {value}")
    if n < 0:
        raise argparse.ArgumentTypeError(f"Block number must be >= 0: {value}")
    return n


def fetch_price(
    reader: ChainReader,
    decimals: TokenDecimals,
    block_identifier: str | int = "latest",
) -> tuple[RawReserves, ReserveValues]:
    """Read the pair once and price it."""
    raw = reader.get_reserves(block_identifier)
    return raw, compute_reserve_values(raw, decimals)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read a Uniswap V2 pair's reserves and print its spot price.")
    parser.add_argument("--rpc-url", dest="rpc_url", default=None, help="Node endpoint (defaults to <NETWORK>_RPC_URL).")
    parser.add_argument("--pair", dest="pair", default=None, help="Pair contract address (defaults to <NETWORK>_PAIR_ADDRESS).")
    parser.add_argument("--block", dest="block", type=parse_block, default="latest", help="Block number or tag (default: latest).")
    parser.add_argument("--json", dest="as_json", action="store_true", help="Print a JSON object instead of text.")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = load_config()
    except ValueError as e:
        logger.error("Bad configuration: %s", e)
        raise SystemExit(1)

    rpc_url = args.rpc_url or cfg.rpc_url
    if not rpc_url:
        logger.error("No RPC URL: pass --rpc-url or set %s_RPC_URL", cfg.network.upper())
        raise SystemExit(1)
    pair = args.pair or cfg.pair
    decimals = TokenDecimals(cfg.token0_decimals, cfg.token1_decimals)

    logger.info(
        "Reading %s/%s pair %s on %s (block=%s)",
        cfg.token0_symbol, cfg.token1_symbol, pair, cfg.network, args.block,
    )

    try:
        abi = load_artifact_abi(cfg.pair_abi_path) if cfg.pair_abi_path else None
        reader = ChainReader.from_rpc_url(rpc_url, pair, timeout_s=cfg.rpc_timeout_s, abi=abi)
        raw, values = fetch_price(reader, decimals, args.block)
    except (ReserveError, OSError, ValueError) as e:
        logger.error("No price: %s", e)
        raise SystemExit(1)

    if args.as_json:
        print(format_json(values, raw, reader.pair_addr, cfg.token0_symbol, cfg.token1_symbol))
    else:
        for line in format_report(values, raw, cfg.token0_symbol, cfg.token1_symbol):
            print(line)


if __name__ == "__main__":
    main(sys.argv[1:])
