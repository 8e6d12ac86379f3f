from .api import (
    balances_for_accounts_of_token,
    balances_for_tokens_of_account,
    native_price,
    token_info_for_account,
    token_price,
    tokens_price,
)
from .errors import (
    AssemblyError,
    CallRevertedError,
    DecodingError,
    EncodingError,
    MulticallBalancesError,
    TransportError,
    UnsupportedChainError,
    ValidationError,
)
from .ports import TokenInfo, TokenMeta

__all__ = [
    "balances_for_accounts_of_token",
    "balances_for_tokens_of_account",
    "native_price",
    "token_info_for_account",
    "token_price",
    "tokens_price",
    "AssemblyError",
    "CallRevertedError",
    "DecodingError",
    "EncodingError",
    "MulticallBalancesError",
    "TransportError",
    "UnsupportedChainError",
    "ValidationError",
    "TokenInfo",
    "TokenMeta",
]
