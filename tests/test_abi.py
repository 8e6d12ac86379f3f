import pytest
from eth_abi import decode

from multicall_balances.adapters.abi import ERC20, PRICE_FEED, ROUTER
from multicall_balances.errors import EncodingError

from .conftest import ACCOUNT, USDT, WBNB


def test_selectors():
    assert ERC20.selector("balanceOf") == bytes.fromhex("70a08231")
    assert ERC20.selector("decimals") == bytes.fromhex("313ce567")
    assert ERC20.selector("symbol") == bytes.fromhex("95d89b41")
    assert ERC20.selector("name") == bytes.fromhex("06fdde03")


def test_output_types_table():
    assert ERC20.output_type("balanceOf") == "uint256"
    assert ERC20.output_type("symbol") == "string"
    assert ERC20.output_type("decimals") == "uint8"
    assert PRICE_FEED.output_types("latestRoundData") == ["uint80", "int256", "uint256", "uint256", "uint80"]
    assert "Transfer" not in ERC20.methods


def test_encode_balance_of():
    data = ERC20.encode_call("balanceOf", (ACCOUNT,))
    assert data[:4] == bytes.fromhex("70a08231")
    assert decode(["address"], data[4:])[0].lower() == ACCOUNT.lower()


def test_encode_is_deterministic():
    args = (10 ** 18, [USDT, WBNB])
    assert ROUTER.encode_call("getAmountsOut", args) == ROUTER.encode_call("getAmountsOut", args)


def test_unknown_method():
    with pytest.raises(EncodingError):
        ERC20.encode_call("transfer", (ACCOUNT, 1))
    with pytest.raises(EncodingError):
        ERC20.output_type("allowance")


def test_wrong_arguments():
    with pytest.raises(EncodingError):
        ERC20.encode_call("balanceOf", ())
    with pytest.raises(EncodingError):
        ERC20.encode_call("balanceOf", ("definitely not an address",))
