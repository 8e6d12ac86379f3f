from ..errors import AssemblyError, DecodingError
from ..ports import CallResult, TokenInfo, TokenMeta
from ..utils.units import format_units
from .decoder import Failed, decode_result


def assemble_token_infos(
        balances_by_contract: dict[str, CallResult],
        meta_by_contract: dict[str, TokenMeta],
) -> dict[str, TokenInfo]:
    out: dict[str, TokenInfo] = {}
    for contract, meta in meta_by_contract.items():
        try:
            raw = balances_by_contract[contract]
        except KeyError:
            raise AssemblyError(f"no balance for {contract} (metadata and balances keyed differently)") from None

        outcome = decode_result(raw, "uint256")
        if isinstance(outcome, Failed):
            raise DecodingError("balanceOf", contract, outcome.reason)
        wei_balance = str(outcome.value)
        out[contract] = TokenInfo(
            symbol=meta.symbol,
            decimals=meta.decimals,
            name=meta.name,
            balance=format_units(wei_balance, meta.decimals),
            wei_balance=wei_balance,
        )
    return out
