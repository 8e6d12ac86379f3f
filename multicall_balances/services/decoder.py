# services/decoder.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Union

from eth_abi import decode
from eth_abi.exceptions import DecodingError as AbiDecodingError

from ..adapters.abi import ContractInterface
from ..errors import DecodingError
from ..ports import CallContext, CallResult, TokenMeta

log = logging.getLogger("decoder")

META_METHODS = ("symbol", "decimals", "name")


@dataclass(frozen=True)
class Typed:
    value: Any


@dataclass(frozen=True)
class Fallback:
    text: str


@dataclass(frozen=True)
class Failed:
    reason: str


DecodeOutcome = Union[Typed, Fallback, Failed]


def decode_typed(output_type: str, data: bytes) -> DecodeOutcome:
    try:
        return Typed(decode([output_type], data)[0])
    except (AbiDecodingError, ValueError, OverflowError) as e:
        return Failed(f"{output_type}: {e}")


def decode_bytes32_text(data: bytes) -> DecodeOutcome:
    """Non-standard tokens (MKR, SAI, ...) return bytes32 instead of string for symbol/name."""
    if len(data) != 32:
        return Failed(f"bytes32 fallback needs 32 bytes, got {len(data)}")
    try:
        return Fallback(data.rstrip(b"\x00").decode("utf-8"))
    except UnicodeDecodeError as e:
        return Failed(f"bytes32 fallback: {e}")


def decode_result(result: CallResult, output_type: str) -> DecodeOutcome:
    if not result.success:
        return Failed("call reverted")
    data = result.return_data
    if not data:
        return Failed("empty return data")
    outcome = decode_typed(output_type, data)
    if isinstance(outcome, Typed):
        return outcome
    if output_type != "string":
        return outcome
    return decode_bytes32_text(data)


def decode_meta_results(
        results: list[CallResult],
        context: list[CallContext],
        interface: ContractInterface,
) -> dict[str, TokenMeta]:
    """
    Fold (symbol, decimals, name) results back into one TokenMeta per contract.
    results[i] was produced by the call described by context[i].
    """
    if len(results) != len(context):
        raise ValueError(f"{len(results)} results for {len(context)} call contexts")

    fields: dict[str, dict[str, Any]] = {}
    for result, ctx in zip(results, context):
        outcome = decode_result(result, interface.output_type(ctx.method_name))
        if isinstance(outcome, Failed):
            raise DecodingError(ctx.method_name, ctx.contract_address, outcome.reason)
        if isinstance(outcome, Fallback):
            log.info("%s - %s decoded as bytes32: %r", ctx.method_name, ctx.contract_address, outcome.text)
            value = outcome.text
        else:
            value = outcome.value

        if ctx.method_name == "decimals":
            value = int(value)
        fields.setdefault(ctx.contract_address, {})[ctx.method_name] = value

    out: dict[str, TokenMeta] = {}
    for address, values in fields.items():
        missing = [m for m in META_METHODS if m not in values]
        if missing:
            raise DecodingError(",".join(missing), address, "no result for method")
        out[address] = TokenMeta(symbol=values["symbol"], decimals=values["decimals"], name=values["name"])
    return out
