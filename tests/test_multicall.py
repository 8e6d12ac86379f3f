import asyncio

import pytest
from eth_abi import encode

from multicall_balances.adapters.multicall import MULTICALL3, TRY_BLOCK_AND_AGGREGATE_SELECTOR, MulticallClient
from multicall_balances.errors import TransportError
from multicall_balances.ports import Call, CallResult
from multicall_balances.services.balances import build_call
from multicall_balances.adapters.abi import ERC20

from .conftest import ACCOUNT, USDC, USDT, uint256


def test_selector():
    assert TRY_BLOCK_AND_AGGREGATE_SELECTOR == bytes.fromhex("399542e9")


def test_results_are_aligned_with_calls(transport, erc20_token):
    erc20_token(USDT, "USDT", "Tether USD", 18, {ACCOUNT: 7})
    erc20_token(USDC, "USDC", "USD Coin", 18, {ACCOUNT: 9})
    calls = [
        build_call(USDC, ERC20, "balanceOf", (ACCOUNT,)),
        build_call(USDT, ERC20, "balanceOf", (ACCOUNT,)),
        build_call(USDC, ERC20, "decimals"),
    ]
    results = asyncio.run(MulticallClient(transport).try_block_and_aggregate(calls))
    assert results == [
        CallResult(True, uint256(9)),
        CallResult(True, uint256(7)),
        CallResult(True, encode(["uint8"], [18])),
    ]
    assert transport.rpc_calls == [("eth_call", MULTICALL3)]


def test_single_failure_does_not_abort_batch(transport, erc20_token):
    erc20_token(USDT, "USDT", "Tether USD", 18, {ACCOUNT: 7})
    calls = [
        build_call(USDT, ERC20, "balanceOf", (ACCOUNT,)),
        build_call(USDC, ERC20, "balanceOf", (ACCOUNT,)),  # nothing registered: reverts
    ]
    results = asyncio.run(MulticallClient(transport).try_block_and_aggregate(calls))
    assert len(results) == 2
    assert results[0] == CallResult(True, uint256(7))
    assert results[1].success is False


def test_empty_batch_skips_network(transport):
    assert asyncio.run(MulticallClient(transport).try_block_and_aggregate([])) == []
    assert transport.rpc_calls == []


def test_transport_failure_propagates(transport):
    transport.fail_with = TransportError("connection refused")
    with pytest.raises(TransportError):
        asyncio.run(MulticallClient(transport).try_block_and_aggregate([Call(USDT, b"\x00")]))


class GarbageTransport:
    async def call(self, to, data):
        return b"\x00\x01"


def test_malformed_response():
    with pytest.raises(TransportError):
        asyncio.run(MulticallClient(GarbageTransport()).try_block_and_aggregate([Call(USDT, b"\x00")]))
