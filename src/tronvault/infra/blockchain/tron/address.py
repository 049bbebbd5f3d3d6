"""TRON address codec: 41-prefixed hex <-> base58check, plus ABI (0x) addresses."""

from tronpy import keys as tron_keys

HEX_PREFIX = "41"


def to_base58(hex_address: str) -> str:
    """41-prefixed hex (as found in raw transactions) -> base58check ``T...``."""
    return tron_keys.to_base58check_address(hex_address)


def to_hex(address: str) -> str:
    """Base58check or hex address -> lowercase 41-prefixed hex."""
    return tron_keys.to_hex_address(address).lower()


def from_abi_address(abi_address: str) -> str:
    """ABI-decoded ``0x`` address -> lowercase 41-prefixed hex."""
    raw = abi_address[2:] if abi_address.startswith("0x") else abi_address
    return (HEX_PREFIX + raw).lower()


def is_base58_address(address: str) -> bool:
    try:
        return tron_keys.is_base58check_address(address)
    except (ValueError, TypeError):
        return False
