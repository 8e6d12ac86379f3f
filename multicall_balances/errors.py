class MulticallBalancesError(Exception):
    pass


class ValidationError(MulticallBalancesError):
    """Malformed address input, raised before any network call."""


class TransportError(MulticallBalancesError):
    """RPC or network failure; the whole batch is unusable."""


class CallRevertedError(MulticallBalancesError):
    """The node answered, but the contract call reverted."""


class EncodingError(MulticallBalancesError):
    """Unknown method or arguments the ABI codec rejects."""


class DecodingError(MulticallBalancesError):
    def __init__(self, method_name: str, contract_address: str, reason: str = "") -> None:
        self.method_name = method_name
        self.contract_address = contract_address
        self.reason = reason
        msg = f"cannot decode {method_name} of {contract_address}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class AssemblyError(MulticallBalancesError):
    """Balance and metadata maps are keyed inconsistently."""


class UnsupportedChainError(MulticallBalancesError):
    def __init__(self, chain_id: int) -> None:
        self.chain_id = chain_id
        super().__init__(f"chain id {chain_id} is not supported")
