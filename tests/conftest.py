from typing import Callable, Optional

import pytest
from web3 import Web3
from eth_abi import encode, decode

from multicall_balances.adapters.abi import ERC20, ContractInterface
from multicall_balances.adapters.multicall import MULTICALL3, TRY_BLOCK_AND_AGGREGATE_SELECTOR
from multicall_balances.errors import CallRevertedError

ACCOUNT = Web3.to_checksum_address("0xf977814e90da44bfa03b6295a0616a897441acec")
OTHER_ACCOUNT = Web3.to_checksum_address("0x8894e0a0c962cb723c1976a4421c95949be2d4e3")
USDT = Web3.to_checksum_address("0x55d398326f99059ff775485246999027b3197955")
USDC = Web3.to_checksum_address("0x8ac76a51cc950d9822d68b83fe1ad97b32cd580d")
WBNB = Web3.to_checksum_address("0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c")

# args (without selector) -> return data, or None to revert
Handler = Callable[[bytes], Optional[bytes]]


def uint256(value: int) -> bytes:
    return encode(["uint256"], [value])


def address_arg(args: bytes) -> str:
    return Web3.to_checksum_address(decode(["address"], args)[0])


class FakeTransport:
    """
    In-memory RpcTransport. Answers eth_call per (target, selector) and unpacks
    tryBlockAndAggregate payloads sent to Multicall3 the way the contract would.
    """

    def __init__(self, chain_id: int = 56) -> None:
        self._chain_id = chain_id
        self._handlers: dict[tuple[str, bytes], Handler] = {}
        self.rpc_calls: list[tuple] = []
        self.multicall_batches: list[int] = []
        self.fail_with: Optional[Exception] = None
        self.closed = False

    def on(self, target: str, method: str, handler: Handler, interface: ContractInterface = ERC20) -> None:
        self._handlers[(Web3.to_checksum_address(target), interface.selector(method))] = handler

    def returns(self, target: str, method: str, data: bytes, interface: ContractInterface = ERC20) -> None:
        self.on(target, method, lambda _args: data, interface)

    def _execute(self, target: str, data: bytes) -> Optional[bytes]:
        handler = self._handlers.get((Web3.to_checksum_address(target), bytes(data[:4])))
        if handler is None:
            return None
        return handler(bytes(data[4:]))

    async def call(self, to: str, data: bytes) -> bytes:
        self.rpc_calls.append(("eth_call", to))
        if self.fail_with is not None:
            raise self.fail_with
        if Web3.to_checksum_address(to) == MULTICALL3 and data[:4] == TRY_BLOCK_AND_AGGREGATE_SELECTOR:
            require_success, calls = decode(["bool", "(address,bytes)[]"], data[4:])
            assert require_success is False
            self.multicall_batches.append(len(calls))
            results = []
            for target, call_data in calls:
                ret = self._execute(target, call_data)
                results.append((ret is not None, ret or b""))
            return encode(["uint256", "bytes32", "(bool,bytes)[]"], [19_000_000, b"\x11" * 32, results])
        ret = self._execute(to, data)
        if ret is None:
            raise CallRevertedError("execution reverted")
        return ret

    async def chain_id(self) -> int:
        self.rpc_calls.append(("eth_chainId",))
        return self._chain_id

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def erc20_token(transport):
    """Register a well-behaved ERC20 on the fake chain."""

    def _register(address: str, symbol: str, name: str, decimals: int, balances: dict[str, int]):
        transport.returns(address, "symbol", encode(["string"], [symbol]))
        transport.returns(address, "name", encode(["string"], [name]))
        transport.returns(address, "decimals", encode(["uint8"], [decimals]))
        transport.on(address, "balanceOf", lambda args: uint256(balances.get(address_arg(args), 0)))

    return _register
