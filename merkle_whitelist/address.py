"""
Address normalization and canonical leaf encoding.

Every member is reduced to a lower-cased ``0x`` address before anything is
hashed, so ``0xABC...`` and ``0xabc...`` are the same member. The canonical
encoding is the 20 address bytes left-padded with zeros to 32 bytes, which
is what ``bytes32(uint256(uint160(addr)))`` produces on-chain.
"""

import base58
from eth_utils import is_hex_address

from .config import ADDRESS_SIZE, ENCODED_WIDTH, TRON_ADDRESS_LENGTH, TRON_ADDRESS_PREFIX
from .errors import InvalidIdentity


def is_tron_address(addr: str) -> bool:
    return addr.startswith("T") and len(addr) == TRON_ADDRESS_LENGTH


def tron_to_evm(tron_addr: str) -> str:
    """
    Convert a Tron Base58Check address (T...) to a lower-cased 0x address by
    stripping the leading 0x41 network byte.
    """
    try:
        decoded = base58.b58decode_check(tron_addr)
    except ValueError as exc:
        raise InvalidIdentity(tron_addr) from exc
    if len(decoded) != ADDRESS_SIZE + 1 or decoded[0] != TRON_ADDRESS_PREFIX:
        raise InvalidIdentity(tron_addr)
    return "0x" + decoded[1:].hex()


def normalize(addr: str) -> str:
    if not isinstance(addr, str):
        raise InvalidIdentity(addr)
    addr = addr.strip()
    if is_tron_address(addr):
        return tron_to_evm(addr)
    addr = addr.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    if not is_hex_address(addr):
        raise InvalidIdentity(addr)
    return addr


def canonical_encoding(addr: str) -> bytes:
    """Normalize ``addr`` and left-pad its 20 bytes to the 32 byte leaf input."""
    a = normalize(addr)
    b20 = bytes.fromhex(a[2:])
    return b"\x00" * (ENCODED_WIDTH - ADDRESS_SIZE) + b20
