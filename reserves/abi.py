"""
reserves/abi.py

ABI for the Uniswap V2 pair read we make.

The built-in ABI only knows getReserves(); that is all we call. If you want
to point at a different artifact (a fork with extra fields, a Hardhat build),
set PAIR_ABI_PATH and we load it here, but it still has to expose getReserves.
"""

import json
from pathlib import Path
from typing import Any

from eth_utils import encode_hex, function_signature_to_4byte_selector

GET_RESERVES = "getReserves"

# getReserves() -> (uint112 _reserve0, uint112 _reserve1, uint32 _blockTimestampLast)
UNISWAP_V2_PAIR_ABI: list[dict[str, Any]] = [
    {
        "constant": True,
        "inputs": [],
        "name": GET_RESERVES,
        "outputs": [
            {"internalType": "uint112", "name": "_reserve0", "type": "uint112"},
            {"internalType": "uint112", "name": "_reserve1", "type": "uint112"},
            {"internalType": "uint32", "name": "_blockTimestampLast", "type": "uint32"},
        ],
        "payable": False,
        "stateMutability": "view",
        "type": "function",
    }
]

# 0x0902f1ac
GET_RESERVES_SELECTOR = encode_hex(function_signature_to_4byte_selector("getReserves()"))


def has_get_reserves(abi: list[dict[str, Any]]) -> bool:
    """True if the ABI declares a getReserves function with three outputs."""
    for entry in abi:
        if entry.get("type") == "function" and entry.get("name") == GET_RESERVES:
            return len(entry.get("outputs") or []) == 3
    return False


def load_artifact_abi(artifact_path: str) -> list[dict[str, Any]]:
    """
    Load an ABI from a JSON file.

    Accepts either a Hardhat/Truffle artifact ({"abi": [...]}) or a bare ABI
    array, which is what block explorers hand out.
    """
    p = Path(artifact_path)
    if not p.exists():
        raise FileNotFoundError(f"Artifact not found: {artifact_path}")

    data = json.loads(p.read_text())
    abi = data.get("abi") if isinstance(data, dict) else data
    if not abi or not isinstance(abi, list):
        raise ValueError(f"No ABI in artifact: {artifact_path}")
    if not has_get_reserves(abi):
        raise ValueError(f"ABI in {artifact_path} has no getReserves() with three outputs")
    return abi
