"""
Merkle whitelist: sorted-pair keccak256 Merkle roots and proofs for address
allowlists, compatible with OpenZeppelin's MerkleProof.verify.
"""

from .errors import (
    ArtifactError,
    EmptyWhitelist,
    HashFunctionUnavailable,
    InvalidIdentity,
    NotAMember,
    OwnerLookupError,
    WhitelistError,
)
from .tree import MerkleTree, verify_sorted
from .whitelist import WhitelistResult, build_whitelist, get_proof, verify_proof

__version__ = "0.1.0"

__all__ = [
    "ArtifactError",
    "EmptyWhitelist",
    "HashFunctionUnavailable",
    "InvalidIdentity",
    "MerkleTree",
    "NotAMember",
    "OwnerLookupError",
    "WhitelistError",
    "WhitelistResult",
    "build_whitelist",
    "get_proof",
    "verify_proof",
    "verify_sorted",
]
