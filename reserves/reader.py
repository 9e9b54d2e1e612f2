"""
reserves/reader.py

The on-chain read layer:
- Build a Web3 client for the configured RPC (explicitly, no module globals)
- Bind the pair contract with the getReserves ABI
- Call getReserves() once and return RawReserves

Every failure comes back as one of our typed errors:
- RpcConnectionError: node unreachable / timed out
- RpcError: reverted call or node error payload
- AbiDecodeError: return data that is not (uint112, uint112, uint32)

Nothing here retries. The caller decides whether to abort or read again.
"""

import logging
from collections.abc import Sequence
from typing import Any, Optional

import requests
from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3Exception

from reserves.abi import GET_RESERVES_SELECTOR, UNISWAP_V2_PAIR_ABI, has_get_reserves
from reserves.errors import AbiDecodeError, RpcConnectionError, RpcError
from reserves.price import UINT32_MAX, RawReserves

logger = logging.getLogger(__name__)


def make_web3(rpc_url: str, timeout_s: float = 10.0) -> Web3:
    """
    HTTP Web3 client with a bounded request timeout.

    web3 >= 7 retries failed requests with backoff unless told otherwise;
    exception_retry_configuration=None makes every call a single request.
    """
    return Web3(
        Web3.HTTPProvider(
            rpc_url,
            request_kwargs={"timeout": timeout_s},
            exception_retry_configuration=None,
        )
    )


def decode_reserves(result: Any) -> RawReserves:
    """
    Validate the decoded getReserves() tuple.

    web3 hands back a list [reserve0, reserve1, blockTimestampLast]. Anything
    shorter, longer or non-integer is an ABI mismatch; we never fill in zeros.
    """
    if isinstance(result, (str, bytes)) or not isinstance(result, Sequence):
        raise AbiDecodeError(f"getReserves() returned {type(result).__name__}, expected a 3-tuple")
    if len(result) != 3:
        raise AbiDecodeError(f"getReserves() returned {len(result)} values, expected 3")

    names = ("reserve0", "reserve1", "blockTimestampLast")
    for name, v in zip(names, result):
        if isinstance(v, bool) or not isinstance(v, int):
            raise AbiDecodeError(f"getReserves() field {name} is not an integer: {v!r}")

    r0, r1, ts = (int(v) for v in result)
    if ts < 0 or ts > UINT32_MAX:
        raise AbiDecodeError(f"blockTimestampLast out of uint32 range: {ts}")

    return RawReserves(reserve0=r0, reserve1=r1, block_timestamp_last=ts)


class ChainReader:
    def __init__(self, w3: Web3, pair_address: str, abi: Optional[list[dict[str, Any]]] = None):
        self.w3 = w3
        self.pair_addr = Web3.to_checksum_address(pair_address)

        abi = abi or UNISWAP_V2_PAIR_ABI
        if not has_get_reserves(abi):
            raise ValueError("Pair ABI has no getReserves() with three outputs")

        self.pair: Contract = self.w3.eth.contract(address=self.pair_addr, abi=abi)

    @classmethod
    def from_rpc_url(
        cls,
        rpc_url: str,
        pair_address: str,
        timeout_s: float = 10.0,
        abi: Optional[list[dict[str, Any]]] = None,
    ) -> "ChainReader":
        w3 = make_web3(rpc_url, timeout_s)
        if not w3.is_connected():
            raise RpcConnectionError(f"Could not connect to RPC: {rpc_url}")
        return cls(w3, pair_address, abi=abi)

    def get_reserves(self, block_identifier: str | int = "latest") -> RawReserves:
        """Call getReserves() on the pair at the given block."""
        logger.debug(
            "eth_call %s %s (selector %s) at block %s",
            self.pair_addr, "getReserves", GET_RESERVES_SELECTOR, block_identifier,
        )
        try:
            result = self.pair.functions.getReserves().call(block_identifier=block_identifier)
        except ContractLogicError as e:
            raise RpcError(f"getReserves() reverted on {self.pair_addr}: {e}") from e
        except (BadFunctionCallOutput, DecodingError) as e:
            # Empty return data usually means there is no pair contract at the address.
            raise AbiDecodeError(f"Could not decode getReserves() from {self.pair_addr}: {e}") from e
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise RpcConnectionError(f"RPC unreachable while reading {self.pair_addr}: {e}") from e
        except (Web3Exception, ValueError) as e:
            raise RpcError(f"RPC error while reading {self.pair_addr}: {e}") from e

        raw = decode_reserves(result)
        logger.debug("raw reserves %s", raw)
        return raw
