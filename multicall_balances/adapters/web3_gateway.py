import asyncio
import logging

import aiohttp
from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError, Web3Exception
from web3.providers import AsyncHTTPProvider

from ..errors import CallRevertedError, TransportError
from ..ports import RpcTransport

log = logging.getLogger("web3_gateway")


class Web3Transport(RpcTransport):
    """
    Read-only JSON-RPC transport bound to a single endpoint.
    No retries here: network and RPC failures surface as TransportError,
    contract reverts as CallRevertedError.
    """

    def __init__(self, rpc_url: str, request_timeout: float = 30.0) -> None:
        rpc_url = (rpc_url or "").strip()
        if not rpc_url:
            raise ValueError("Web3Transport: empty RPC URL")

        self.rpc_url = rpc_url
        self._timeout = float(request_timeout)
        provider = AsyncHTTPProvider(
            rpc_url,
            request_kwargs={"timeout": self._timeout},
        )
        self.w3 = AsyncWeb3(provider)
        log.debug(f"Web3Transport: {rpc_url} (timeout={self._timeout:.1f}s)")

    async def call(self, to: str, data: bytes) -> bytes:
        try:
            res = await self.w3.eth.call({"to": to, "data": data})
        except ContractLogicError as e:
            raise CallRevertedError(f"eth_call to {to} reverted: {e}") from e
        except (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError, ValueError, OSError) as e:
            raise TransportError(f"eth_call to {to} failed: {e!r}") from e
        return bytes(res)

    async def chain_id(self) -> int:
        try:
            return int(await self.w3.eth.chain_id)
        except (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError, ValueError, OSError) as e:
            raise TransportError(f"eth_chainId failed: {e!r}") from e

    async def aclose(self) -> None:
        provider = self.w3.provider
        disconnect = getattr(provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()
        log.debug("Web3Transport: session closed")
