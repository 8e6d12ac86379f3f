"""
Public entry points. Each call opens its own transport on `rpc_url` and closes it before
returning; nothing is shared between calls.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from .adapters.multicall import MULTICALL3, MulticallClient
from .adapters.web3_gateway import Web3Transport
from .ports import TokenInfo
from .services.balances import DEFAULT_CHUNK_SIZE, BalanceService
from .services.prices import PriceService

DEFAULT_TIMEOUT = 30.0


@asynccontextmanager
async def open_transport(rpc_url: str, request_timeout: float = DEFAULT_TIMEOUT) -> AsyncIterator[Web3Transport]:
    transport = Web3Transport(rpc_url, request_timeout=request_timeout)
    try:
        yield transport
    finally:
        await transport.aclose()


@asynccontextmanager
async def _balance_service(rpc_url: str, chunk_size: int, multicall_address: str,
                           request_timeout: float) -> AsyncIterator[BalanceService]:
    async with open_transport(rpc_url, request_timeout) as transport:
        yield BalanceService(MulticallClient(transport, multicall_address), chunk_size=chunk_size)


async def balances_for_tokens_of_account(
        account: str,
        tokens: List[str],
        rpc_url: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        multicall_address: str = MULTICALL3,
        request_timeout: float = DEFAULT_TIMEOUT,
) -> List[Optional[str]]:
    async with _balance_service(rpc_url, chunk_size, multicall_address, request_timeout) as service:
        return await service.balances_for_tokens_of_account(account, tokens)


async def balances_for_accounts_of_token(
        accounts: List[str],
        token: str,
        rpc_url: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        multicall_address: str = MULTICALL3,
        request_timeout: float = DEFAULT_TIMEOUT,
) -> List[Optional[str]]:
    async with _balance_service(rpc_url, chunk_size, multicall_address, request_timeout) as service:
        return await service.balances_for_accounts_of_token(accounts, token)


async def token_info_for_account(
        account: str,
        tokens: List[str],
        rpc_url: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        multicall_address: str = MULTICALL3,
        request_timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, TokenInfo]:
    async with _balance_service(rpc_url, chunk_size, multicall_address, request_timeout) as service:
        return await service.token_info_for_account(account, tokens)


async def native_price(rpc_url: str, request_timeout: float = DEFAULT_TIMEOUT) -> int:
    async with open_transport(rpc_url, request_timeout) as transport:
        return await PriceService(transport).native_price()


async def token_price(token: str, rpc_url: str, request_timeout: float = DEFAULT_TIMEOUT) -> int:
    async with open_transport(rpc_url, request_timeout) as transport:
        return await PriceService(transport).token_price(token)


async def tokens_price(tokens: List[str], rpc_url: str, request_timeout: float = DEFAULT_TIMEOUT) -> List[int]:
    async with open_transport(rpc_url, request_timeout) as transport:
        return await PriceService(transport).tokens_price(tokens)
