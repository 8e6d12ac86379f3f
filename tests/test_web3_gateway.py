import asyncio

import pytest
from web3.exceptions import ContractLogicError

from multicall_balances.adapters.abi import ERC20
from multicall_balances.adapters.web3_gateway import Web3Transport
from multicall_balances.errors import CallRevertedError, TransportError

from .conftest import ACCOUNT, USDT

# nothing listens on port 1
UNREACHABLE = "http://127.0.0.1:1"


def test_unreachable_endpoint_is_a_transport_error():
    async def scenario():
        transport = Web3Transport(UNREACHABLE, request_timeout=2)
        try:
            with pytest.raises(TransportError):
                await transport.chain_id()
            with pytest.raises(TransportError):
                await transport.call(USDT, ERC20.encode_call("balanceOf", (ACCOUNT,)))
        finally:
            await transport.aclose()

    asyncio.run(scenario())


def test_contract_revert_is_not_a_transport_error(monkeypatch):
    transport = Web3Transport(UNREACHABLE, request_timeout=2)

    async def reverting_call(*args, **kwargs):
        raise ContractLogicError("execution reverted")

    monkeypatch.setattr(transport.w3.eth, "call", reverting_call)

    async def scenario():
        try:
            with pytest.raises(CallRevertedError):
                await transport.call(USDT, ERC20.encode_call("decimals"))
        finally:
            await transport.aclose()

    asyncio.run(scenario())


def test_empty_url_rejected():
    with pytest.raises(ValueError):
        Web3Transport("  ")
