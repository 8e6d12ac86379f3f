# adapters/abi.py
from typing import Any, Sequence

from web3 import AsyncWeb3
from eth_abi import encode
from eth_abi.exceptions import EncodingError as AbiEncodingError

from ..errors import EncodingError

ERC20_ABI = [
    {"constant": True, "inputs": [], "name": "name", "outputs": [{"name": "", "type": "string"}], "type": "function"},
    {"constant": True, "inputs": [], "name": "symbol", "outputs": [{"name": "", "type": "string"}], "type": "function"},
    {"constant": True, "inputs": [], "name": "decimals", "outputs": [{"name": "", "type": "uint8"}],
     "type": "function"},
    {"constant": True, "inputs": [], "name": "totalSupply", "outputs": [{"name": "", "type": "uint256"}],
     "type": "function"},
    {"constant": True, "inputs": [{"name": "owner", "type": "address"}], "name": "balanceOf",
     "outputs": [{"name": "", "type": "uint256"}], "type": "function"},
    {"anonymous": False, "inputs": [
        {"indexed": True, "name": "from", "type": "address"},
        {"indexed": True, "name": "to", "type": "address"},
        {"indexed": False, "name": "value", "type": "uint256"}], "name": "Transfer", "type": "event"},
]

# Chainlink-style aggregator, answer is int256 with feed-specific decimals (8 for */USD feeds)
PRICE_FEED_ABI = [
    {"inputs": [], "name": "latestRoundData", "outputs": [
        {"name": "roundId", "type": "uint80"},
        {"name": "answer", "type": "int256"},
        {"name": "startedAt", "type": "uint256"},
        {"name": "updatedAt", "type": "uint256"},
        {"name": "answeredInRound", "type": "uint80"}],
     "stateMutability": "view", "type": "function"},
]

# UniswapV2-style router
ROUTER_ABI = [
    {"inputs": [{"name": "amountIn", "type": "uint256"}, {"name": "path", "type": "address[]"}],
     "name": "getAmountsOut", "outputs": [{"name": "amounts", "type": "uint256[]"}],
     "stateMutability": "view", "type": "function"},
]


class ContractInterface:
    """
    Read-only view over a static ABI: selectors, input types and output types per method name.
    Built once, never mutated afterwards.
    """

    def __init__(self, abi: list[dict]) -> None:
        self._inputs: dict[str, list[str]] = {}
        self._outputs: dict[str, list[str]] = {}
        self._selectors: dict[str, bytes] = {}
        for item in abi:
            if item.get("type") != "function":
                continue
            name = item["name"]
            inputs = [i["type"] for i in item.get("inputs", [])]
            self._inputs[name] = inputs
            self._outputs[name] = [o["type"] for o in item.get("outputs", [])]
            self._selectors[name] = bytes(AsyncWeb3.keccak(text=f"{name}({','.join(inputs)})")[:4])

    @property
    def methods(self) -> list[str]:
        return list(self._selectors)

    def selector(self, method: str) -> bytes:
        self._require(method)
        return self._selectors[method]

    def output_types(self, method: str) -> list[str]:
        self._require(method)
        return list(self._outputs[method])

    def output_type(self, method: str) -> str:
        # first output only, enough for the single-value ERC20 getters
        return self.output_types(method)[0]

    def encode_call(self, method: str, args: Sequence[Any] = ()) -> bytes:
        self._require(method)
        types = self._inputs[method]
        if len(args) != len(types):
            raise EncodingError(f"{method} expects {len(types)} argument(s), got {len(args)}")
        try:
            return self._selectors[method] + encode(types, list(args))
        except (AbiEncodingError, TypeError, ValueError) as e:
            raise EncodingError(f"cannot encode {method}{tuple(args)!r}: {e}") from e

    def _require(self, method: str) -> None:
        if method not in self._selectors:
            raise EncodingError(f"unknown method {method!r}")


ERC20 = ContractInterface(ERC20_ABI)
PRICE_FEED = ContractInterface(PRICE_FEED_ABI)
ROUTER = ContractInterface(ROUTER_ABI)
