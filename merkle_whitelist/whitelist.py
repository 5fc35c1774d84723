"""
Whitelist build, proof lookup and verification.

These are the three entry points callers use; everything else in the
package is a building block for them.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .address import normalize
from .errors import EmptyWhitelist, InvalidIdentity, NotAMember
from .tree import MerkleTree, Proof, build_leaves, leaf_hash, verify_sorted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WhitelistResult:
    """
    Root of a built whitelist plus one proof per member.

    Attributes:
        root: 32 byte Merkle root
        tree: the tree the proofs were extracted from
        leaves: lower-cased 0x address -> leaf digest
        proofs: lower-cased 0x address -> sibling digests, leaf to root
    """
    root: bytes
    tree: MerkleTree
    leaves: Mapping[str, bytes]
    proofs: Mapping[str, Proof]

    @property
    def root_hex(self) -> str:
        return "0x" + self.root.hex()

    @property
    def members(self):
        return tuple(self.proofs)

    def __len__(self) -> int:
        return len(self.proofs)

    def __contains__(self, addr) -> bool:
        try:
            return normalize(addr) in self.proofs
        except InvalidIdentity:
            return False


def build_whitelist(addrs: Iterable[str]) -> WhitelistResult:
    """
    Build the Merkle tree over ``addrs`` and extract every member's proof.

    Case variants of one address collapse to a single leaf. Raises
    InvalidIdentity for a malformed address and EmptyWhitelist when no
    address is given.
    """
    leaves = build_leaves(addrs)
    if not leaves:
        raise EmptyWhitelist()
    tree = MerkleTree(leaves.values())
    proofs = {a: tree.get_proof(tree.index_of(lf)) for a, lf in sorted(leaves.items())}
    logger.info("Merkle root 0x%s over %d members", tree.root.hex(), len(proofs))
    return WhitelistResult(
        root=tree.root,
        tree=tree,
        leaves=MappingProxyType(dict(sorted(leaves.items()))),
        proofs=MappingProxyType(proofs),
    )


def get_proof(result: WhitelistResult, addr: str) -> Proof:
    try:
        a = normalize(addr)
    except InvalidIdentity as exc:
        raise NotAMember(addr) from exc
    try:
        return result.proofs[a]
    except KeyError:
        raise NotAMember(addr) from None


def verify_proof(addr: str, proof, root) -> bool:
    """
    Check that ``addr`` is committed to by ``root`` through ``proof``.

    Safe to call on untrusted input: an unparsable address, a tampered proof
    or a wrong root all give False.
    """
    try:
        lf = leaf_hash(addr)
    except InvalidIdentity:
        return False
    return verify_sorted(lf, proof, root)
