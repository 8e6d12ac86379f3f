# services/prices.py
import asyncio
import logging
from typing import List

from eth_abi import decode
from eth_abi.exceptions import DecodingError as AbiDecodingError

from ..adapters.abi import ERC20, PRICE_FEED, ROUTER
from ..chains import ChainConfig, get_chain
from ..errors import CallRevertedError, DecodingError
from ..ports import RpcTransport
from ..utils.parsing import normalize_address, normalize_addresses

log = logging.getLogger("prices")

# 8-decimal */USD feed answers are widened by this many places into 18-decimal fixed point
NATIVE_PRICE_SCALE = 10 ** 10
# assumes an 18-decimal native asset on every chain
NATIVE_UNIT = 10 ** 18


class PriceService:
    """
    Spot prices as 18-decimal fixed-point integers.

    native_price: <native>/USD from the chain's price feed.
    token_price: one whole token quoted against the wrapped native token on the chain's
    router, converted with native_price.
    """

    def __init__(self, transport: RpcTransport) -> None:
        self._transport = transport

    async def chain(self) -> ChainConfig:
        chain_id = await self._transport.chain_id()
        return get_chain(chain_id)

    async def _read(self, target: str, interface, method: str, args: tuple = ()):
        try:
            data = await self._transport.call(target, interface.encode_call(method, args))
        except CallRevertedError as e:
            raise DecodingError(method, target, str(e)) from e
        try:
            return decode(interface.output_types(method), data)
        except (AbiDecodingError, ValueError, OverflowError) as e:
            raise DecodingError(method, target, str(e)) from e

    async def _native_price(self, chain: ChainConfig) -> int:
        _, answer, _, updated_at, _ = await self._read(chain.price_feed_address, PRICE_FEED, "latestRoundData")
        log.debug("%s native price answer=%d updatedAt=%d", chain.name, answer, updated_at)
        return int(answer) * NATIVE_PRICE_SCALE

    async def _token_price(self, token: str, chain: ChainConfig, native_price: int) -> int:
        if token == chain.wrapped_native_address:
            return native_price
        (decimals,) = await self._read(token, ERC20, "decimals")
        path = [token, chain.wrapped_native_address]
        (amounts,) = await self._read(chain.router_address, ROUTER, "getAmountsOut", (10 ** int(decimals), path))
        if not amounts:
            raise DecodingError("getAmountsOut", chain.router_address, "empty amounts")
        quote = int(amounts[-1])
        return quote * native_price // NATIVE_UNIT

    async def native_price(self) -> int:
        return await self._native_price(await self.chain())

    async def token_price(self, token: str) -> int:
        token = normalize_address(token)
        chain = await self.chain()
        native = await self._native_price(chain)
        return await self._token_price(token, chain, native)

    async def tokens_price(self, tokens: List[str]) -> List[int]:
        tokens = normalize_addresses(tokens)
        chain = await self.chain()
        if not tokens:
            return []
        native = await self._native_price(chain)
        prices = await asyncio.gather(*(self._token_price(t, chain, native) for t in tokens))
        log.info("%s: priced %d tokens", chain.name, len(prices))
        return list(prices)
