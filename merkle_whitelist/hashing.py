"""
keccak256 leaf and pair hashing.

Pairs are hashed in sorted order so proofs carry no left/right flags; this
matches OpenZeppelin's ``MerkleProof.verify``.
"""

import logging

from eth_utils import decode_hex, keccak

from .config import DIGEST_SIZE, ENCODED_WIDTH
from .errors import HashFunctionUnavailable

logger = logging.getLogger(__name__)


def keccak256(data: bytes) -> bytes:
    try:
        return keccak(data)
    except ImportError as exc:
        # eth-hash picks its backend lazily, on first use
        logger.error("No keccak256 backend available: %s", exc)
        raise HashFunctionUnavailable(
            "keccak256 backend missing; install eth-hash[pycryptodome]"
        ) from exc


def hash_leaf(encoding: bytes) -> bytes:
    if len(encoding) != ENCODED_WIDTH:
        raise ValueError(
            f"Leaf encoding must be {ENCODED_WIDTH} bytes, got {len(encoding)}"
        )
    return keccak256(encoding)


def hash_pair(a: bytes, b: bytes) -> bytes:
    if a < b:
        return keccak256(a + b)
    else:
        return keccak256(b + a)


def to_digest(value):
    """
    Coerce a digest given as bytes or hex text (``0x`` optional) to bytes.

    Returns ``None`` for anything that is not exactly one digest wide.
    """
    if isinstance(value, str):
        try:
            value = decode_hex(value)
        except ValueError:
            return None
    if not isinstance(value, (bytes, bytearray)) or len(value) != DIGEST_SIZE:
        return None
    return bytes(value)
