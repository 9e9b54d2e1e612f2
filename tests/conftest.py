from unittest.mock import MagicMock

import pytest

CONFIG_VARS = (
    "NETWORK",
    "MAINNET_RPC_URL",
    "MAINNET_PAIR_ADDRESS",
    "LOCAL_RPC_URL",
    "LOCAL_PAIR_ADDRESS",
    "TOKEN0_SYMBOL",
    "TOKEN1_SYMBOL",
    "TOKEN0_DECIMALS",
    "TOKEN1_DECIMALS",
    "RPC_TIMEOUT_S",
    "PAIR_ABI_PATH",
)

PAIR_ADDRESS = "0x0d4a11d5eeaac28ec3f61d100daf4d40471f1852"


@pytest.fixture
def clean_env(monkeypatch):
    """Remove any config that leaked in from the shell or a local .env."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mainnet_env(clean_env):
    clean_env.setenv("MAINNET_RPC_URL", "http://node.test:8545")
    return clean_env


@pytest.fixture
def mock_w3():
    """A Web3 double whose pair contract answers getReserves() with a canned value."""
    w3 = MagicMock()
    w3.is_connected.return_value = True
    return w3


def set_reserves_result(w3, result=None, side_effect=None):
    call = w3.eth.contract.return_value.functions.getReserves.return_value.call
    if side_effect is not None:
        call.side_effect = side_effect
    else:
        call.return_value = result
    return call
