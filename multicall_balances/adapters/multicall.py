# adapters/multicall.py
import logging
from typing import List

from web3 import AsyncWeb3
from eth_abi import encode, decode
from eth_abi.exceptions import DecodingError as AbiDecodingError

from ..errors import TransportError
from ..ports import Call, CallResult, RpcTransport

log = logging.getLogger("multicall")

# Multicall3, same address on every supported chain
MULTICALL3 = "0xcA11bde05977b3631167028862bE2a173976CA11"
# method: tryBlockAndAggregate(bool requireSuccess, (address target, bytes callData)[] calls)
#   returns (uint256 blockNumber, bytes32 blockHash, (bool success, bytes returnData)[])
TRY_BLOCK_AND_AGGREGATE_SELECTOR = bytes(AsyncWeb3.keccak(text="tryBlockAndAggregate(bool,(address,bytes)[])")[:4])


def _encode_try_block_and_aggregate(calls: List[Call], require_success: bool = False) -> bytes:
    # types: (bool, (address, bytes)[])
    types = ["bool", "(address,bytes)[]"]
    values = [require_success, [(c.target, c.call_data) for c in calls]]
    return TRY_BLOCK_AND_AGGREGATE_SELECTOR + encode(types, values)


def _decode_try_block_and_aggregate_result(data: bytes) -> tuple[int, bytes, List[CallResult]]:
    block_number, block_hash, results = decode(["uint256", "bytes32", "(bool,bytes)[]"], data)
    return block_number, block_hash, [CallResult(success=ok, return_data=bytes(ret)) for ok, ret in results]


class MulticallClient:
    def __init__(self, transport: RpcTransport, address: str = MULTICALL3):
        self.transport = transport
        self.address = AsyncWeb3.to_checksum_address(address)

    async def try_block_and_aggregate(self, calls: List[Call]) -> List[CallResult]:
        """
        One eth_call for the whole batch. A reverting call does not abort the batch,
        it comes back as success=False at its own position.
        """
        if not calls:
            return []
        payload = _encode_try_block_and_aggregate(calls, require_success=False)
        res = await self.transport.call(self.address, payload)
        try:
            block_number, _, results = _decode_try_block_and_aggregate_result(res)
        except (AbiDecodingError, ValueError, OverflowError) as e:
            raise TransportError(f"malformed multicall response ({len(res)} bytes): {e}") from e
        if len(results) != len(calls):
            raise TransportError(f"multicall returned {len(results)} results for {len(calls)} calls")
        log.debug("multicall: %d calls at block %d", len(calls), block_number)
        return results
