import json

import pytest

from reserves.abi import GET_RESERVES_SELECTOR, UNISWAP_V2_PAIR_ABI, has_get_reserves, load_artifact_abi


def test_selector():
    assert GET_RESERVES_SELECTOR == "0x0902f1ac"


def test_builtin_abi_has_get_reserves():
    assert has_get_reserves(UNISWAP_V2_PAIR_ABI)


def test_load_hardhat_artifact(tmp_path):
    p = tmp_path / "IUniswapV2Pair.json"
    p.write_text(json.dumps({"contractName": "IUniswapV2Pair", "abi": UNISWAP_V2_PAIR_ABI}))

    assert load_artifact_abi(str(p)) == UNISWAP_V2_PAIR_ABI


def test_load_bare_abi_array(tmp_path):
    p = tmp_path / "pair.abi.json"
    p.write_text(json.dumps(UNISWAP_V2_PAIR_ABI))

    assert load_artifact_abi(str(p)) == UNISWAP_V2_PAIR_ABI


def test_missing_artifact(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_artifact_abi(str(tmp_path / "nope.json"))


def test_artifact_without_abi(tmp_path):
    p = tmp_path / "empty.json"
    p.write_text(json.dumps({"bytecode": "0x"}))

    with pytest.raises(ValueError):
        load_artifact_abi(str(p))


def test_artifact_with_two_output_get_reserves(tmp_path):
    abi = json.loads(json.dumps(UNISWAP_V2_PAIR_ABI))
    abi[0]["outputs"] = abi[0]["outputs"][:2]
    p = tmp_path / "broken.json"
    p.write_text(json.dumps({"abi": abi}))

    with pytest.raises(ValueError, match="getReserves"):
        load_artifact_abi(str(p))
