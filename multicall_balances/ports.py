from typing import Protocol
from dataclasses import dataclass


@dataclass(frozen=True)
class Call:
    target: str
    call_data: bytes


@dataclass(frozen=True)
class CallResult:
    success: bool
    return_data: bytes


@dataclass(frozen=True)
class CallResultWithAddress:
    address: str
    success: bool
    return_data: bytes


@dataclass(frozen=True)
class CallContext:
    contract_address: str
    method_name: str


@dataclass(frozen=True)
class TokenMeta:
    symbol: str
    decimals: int
    name: str


@dataclass(frozen=True)
class TokenInfo:
    symbol: str
    decimals: int
    name: str
    balance: str
    wei_balance: str


class RpcTransport(Protocol):
    async def call(self, to: str, data: bytes) -> bytes: ...

    async def chain_id(self) -> int: ...

    async def aclose(self) -> None: ...
