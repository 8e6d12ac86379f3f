# services/balances.py
from __future__ import annotations
import asyncio
import logging
from time import monotonic
from typing import List, Optional

from ..adapters.abi import ERC20, ContractInterface
from ..adapters.multicall import MulticallClient
from ..errors import DecodingError
from ..ports import Call, CallContext, CallResult, CallResultWithAddress, TokenInfo
from ..utils.batching import chunk, flatten
from ..utils.iohelpers import uniq
from ..utils.parsing import normalize_address, normalize_addresses
from .assembler import assemble_token_infos
from .decoder import META_METHODS, Typed, decode_meta_results, decode_result

log = logging.getLogger("balances")

DEFAULT_CHUNK_SIZE = 500


def build_call(target: str, interface: ContractInterface, method: str, args: tuple = ()) -> Call:
    return Call(target=target, call_data=interface.encode_call(method, args))


def build_meta_calls(
        contracts: List[str], interface: ContractInterface = ERC20
) -> tuple[List[Call], List[CallContext]]:
    """Three calls per contract (symbol, decimals, name) plus the context describing each one."""
    calls: List[Call] = []
    context: List[CallContext] = []
    for contract in contracts:
        for method in META_METHODS:
            calls.append(build_call(contract, interface, method))
            context.append(CallContext(contract_address=contract, method_name=method))
    return calls, context


def tag_with_address(results: List[CallResult], targets: List[str]) -> List[CallResultWithAddress]:
    return [
        CallResultWithAddress(address=addr, success=r.success, return_data=r.return_data)
        for addr, r in zip(targets, results)
    ]


def decode_balances(results: List[CallResultWithAddress]) -> List[Optional[str]]:
    """
    Reverted calls and empty return data (no code at the target) become None in place.
    Non-empty data that is not a uint256 raises DecodingError.
    """
    out: List[Optional[str]] = []
    for i, r in enumerate(results):
        if not r.success or not r.return_data:
            log.debug("balance #%d unavailable at %s (success=%s)", i, r.address, r.success)
            out.append(None)
            continue
        outcome = decode_result(CallResult(r.success, r.return_data), "uint256")
        if not isinstance(outcome, Typed):
            raise DecodingError("balanceOf", r.address, outcome.reason)
        out.append(str(outcome.value))
    return out


class BalanceService:
    """
    Batched ERC20 reads over one transport. Each chunk is one multicall round trip;
    chunks run concurrently and are stitched back together in input order.
    """

    def __init__(
            self,
            multicall: MulticallClient,
            chunk_size: int = DEFAULT_CHUNK_SIZE,
            interface: ContractInterface = ERC20,
    ) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._multicall = multicall
        self._chunk_size = int(chunk_size)
        self._erc20 = interface

    async def aggregate_chunked(self, calls: List[Call]) -> List[CallResult]:
        batches = chunk(calls, self._chunk_size)
        if not batches:
            return []
        start = monotonic()
        chunked_results = await asyncio.gather(
            *(self._multicall.try_block_and_aggregate(batch) for batch in batches)
        )
        log.debug("aggregated %d calls in %d chunk(s) in %.2fs", len(calls), len(batches), monotonic() - start)
        return flatten(chunked_results)

    async def raw_balances_of_tokens(self, account: str, tokens: List[str]) -> List[CallResultWithAddress]:
        calls = [build_call(token, self._erc20, "balanceOf", (account,)) for token in tokens]
        results = await self.aggregate_chunked(calls)
        return tag_with_address(results, tokens)

    async def balances_for_tokens_of_account(self, account: str, tokens: List[str]) -> List[Optional[str]]:
        account = normalize_address(account)
        tokens = normalize_addresses(tokens)
        raw = await self.raw_balances_of_tokens(account, tokens)
        return decode_balances(raw)

    async def balances_for_accounts_of_token(self, accounts: List[str], token: str) -> List[Optional[str]]:
        token = normalize_address(token)
        accounts = normalize_addresses(accounts)
        calls = [build_call(token, self._erc20, "balanceOf", (account,)) for account in accounts]
        results = await self.aggregate_chunked(calls)
        return decode_balances(tag_with_address(results, [token] * len(results)))

    async def token_info_for_account(self, account: str, tokens: List[str]) -> dict[str, TokenInfo]:
        account = normalize_address(account)
        tokens = uniq(normalize_addresses(tokens))
        if not tokens:
            return {}

        calls, context = build_meta_calls(tokens, self._erc20)
        raw, meta_results = await asyncio.gather(
            self.raw_balances_of_tokens(account, tokens),
            self.aggregate_chunked(calls),
        )
        balances_by_contract = {r.address: CallResult(r.success, r.return_data) for r in raw}
        meta_by_contract = decode_meta_results(meta_results, context, self._erc20)

        infos = assemble_token_infos(balances_by_contract, meta_by_contract)
        log.info("token info: %d tokens for %s", len(infos), account)
        return infos
