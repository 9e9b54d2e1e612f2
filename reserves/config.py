"""
reserves/config.py

Loads configuration from the repo-root .env.

NETWORK selects mainnet vs a local fork node; network-prefixed variables
supply the RPC endpoint and pair address. Token decimals are deployment
constants: they must match the real token contracts, we do not read them
from chain.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from eth_utils import is_address

# Always load .env from repo root reliably (no find_dotenv() stack-frame issues)
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(dotenv_path=ENV_PATH)

# Uniswap V2 USDT/WETH pair: token0 = WETH (18 decimals), token1 = USDT (6 decimals).
DEFAULT_PAIR_ADDRESS = "0x0d4a11d5eeaac28ec3f61d100daf4d40471f1852"

NETWORKS = ("mainnet", "local")


def _opt(name: str) -> str | None:
    """Fetch an optional environment variable."""
    v = os.getenv(name)
    return v if v else None


def _network() -> str:
    network = (os.getenv("NETWORK") or "mainnet").lower().strip()
    if network not in NETWORKS:
        raise ValueError(f"Unsupported NETWORK={network}")
    return network


def _by_network_opt(network: str, suffix: str) -> str | None:
    """Resolve e.g. MAINNET_RPC_URL / LOCAL_RPC_URL, None if unset."""
    return _opt(f"{network.upper()}_{suffix}")


def _as_addr(x: str) -> str:
    """Validate an Ethereum address string (any checksum casing)."""
    if not is_address(x):
        raise ValueError(f"Not an address: {x}")
    return x


def _env_int(name: str, default: int) -> int:
    """Read an int env var with a default."""
    return int(os.getenv(name, str(default)))


def _env_float(name: str, default: float) -> float:
    """Read a float env var with a default."""
    return float(os.getenv(name, str(default)))


def _decimals(name: str, default: int) -> int:
    d = _env_int(name, default)
    if d < 0 or d > 255:
        raise ValueError(f"{name} must be in 0..255, got {d}")
    return d


@dataclass(frozen=True)
class ReservesConfig:
    # Network + RPC
    network: str
    # None when unset; --rpc-url can still supply it
    rpc_url: str | None
    rpc_timeout_s: float

    # Pair
    pair: str
    pair_abi_path: str | None

    # Token identity; decimals are injected into the price calculator
    token0_symbol: str
    token1_symbol: str
    token0_decimals: int
    token1_decimals: int


def load_config() -> ReservesConfig:
    network = _network()

    rpc_url = _by_network_opt(network, "RPC_URL")
    pair = _as_addr(_by_network_opt(network, "PAIR_ADDRESS") or DEFAULT_PAIR_ADDRESS)

    timeout = _env_float("RPC_TIMEOUT_S", 10.0)
    if timeout <= 0:
        raise ValueError(f"RPC_TIMEOUT_S must be positive, got {timeout}")

    return ReservesConfig(
        network=network,
        rpc_url=rpc_url,
        rpc_timeout_s=timeout,

        pair=pair,
        pair_abi_path=_opt("PAIR_ABI_PATH"),

        token0_symbol=os.getenv("TOKEN0_SYMBOL") or "ETH",
        token1_symbol=os.getenv("TOKEN1_SYMBOL") or "USDT",
        token0_decimals=_decimals("TOKEN0_DECIMALS", 18),
        token1_decimals=_decimals("TOKEN1_DECIMALS", 6),
    )
