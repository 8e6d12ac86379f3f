import re
from web3 import AsyncWeb3

from ..errors import ValidationError

ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")


def normalize_address(address: str) -> str:
    if not isinstance(address, str) or not AsyncWeb3.is_address(address):
        raise ValidationError(f"invalid address: {address!r}")
    return AsyncWeb3.to_checksum_address(address)


def normalize_addresses(addresses: list[str]) -> list[str]:
    return [normalize_address(a) for a in addresses]


def parse_addresses_from_text(text: str) -> list[str]:
    address = ADDRESS_RE.findall(text or "")
    return [AsyncWeb3.to_checksum_address(a) for a in address]
