"""
Sorted-pair keccak256 Merkle tree over whitelisted addresses.

Construction rules, shared by the builder and the verifier:

- leaf = keccak256(12 zero bytes || 20 address bytes)
- leaves are deduplicated and sorted byte-wise, so the root does not depend
  on the order members were supplied in
- parent = keccak256(min(a, b) || max(a, b))
- an odd node at the end of a level is promoted unchanged and contributes
  no proof element on that level
"""

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from .address import canonical_encoding, normalize
from .errors import EmptyWhitelist, InvalidIdentity, NotAMember
from .hashing import hash_leaf, hash_pair, to_digest

logger = logging.getLogger(__name__)

Proof = Tuple[bytes, ...]


def leaf_hash(addr: str) -> bytes:
    return hash_leaf(canonical_encoding(addr))


def build_leaves(addrs: Iterable[str]) -> Dict[str, bytes]:
    """
    Map each distinct normalized address to its leaf digest.

    Raises InvalidIdentity on the first malformed address.
    """
    leaves: Dict[str, bytes] = {}
    for addr in addrs:
        a = normalize(addr)
        if a not in leaves:
            leaves[a] = leaf_hash(a)
    return leaves


class MerkleTree:
    def __init__(self, leaves: Iterable[bytes]):
        unique = set()
        for leaf in leaves:
            digest = to_digest(leaf)
            if digest is None:
                raise ValueError(f"Leaf is not a 32 byte digest: {leaf!r}")
            unique.add(digest)
        if not unique:
            raise EmptyWhitelist()
        self.leaves: Tuple[bytes, ...] = tuple(sorted(unique))
        self.tree = self._build_tree(self.leaves)
        self._positions = {leaf: i for i, leaf in enumerate(self.leaves)}
        logger.debug(
            "Built Merkle tree: %d leaves, depth %d", len(self.leaves), self.depth
        )

    @classmethod
    def from_members(cls, addrs: Iterable[str]) -> "MerkleTree":
        return cls(build_leaves(addrs).values())

    def _build_tree(self, leaves: Sequence[bytes]) -> Tuple[Tuple[bytes, ...], ...]:
        tree = [tuple(leaves)]
        current = tree[0]
        while len(current) > 1:
            nxt: List[bytes] = []
            for i in range(0, len(current), 2):
                if i + 1 < len(current):
                    nxt.append(hash_pair(current[i], current[i + 1]))
                else:
                    # Promote odd node
                    nxt.append(current[i])
            current = tuple(nxt)
            tree.append(current)
        return tuple(tree)

    @property
    def root(self) -> bytes:
        return self.tree[-1][0]

    @property
    def depth(self) -> int:
        return len(self.tree) - 1

    def __len__(self) -> int:
        return len(self.leaves)

    def __contains__(self, leaf) -> bool:
        return to_digest(leaf) in self._positions

    def index_of(self, leaf: bytes) -> int:
        try:
            return self._positions[to_digest(leaf)]
        except KeyError:
            raise NotAMember(leaf) from None

    def get_proof(self, index: int) -> Proof:
        if not 0 <= index < len(self.leaves):
            raise IndexError(f"Leaf index {index} out of range for {len(self.leaves)} leaves")
        proof: List[bytes] = []
        idx = index
        for level in self.tree[:-1]:
            sib = idx ^ 1
            if sib < len(level):
                proof.append(level[sib])
            idx //= 2
        return tuple(proof)

    def proof_for(self, addr: str) -> Proof:
        try:
            leaf = leaf_hash(addr)
        except InvalidIdentity as exc:
            raise NotAMember(addr) from exc
        if leaf not in self._positions:
            raise NotAMember(addr)
        return self.get_proof(self._positions[leaf])


def verify_sorted(leaf, proof, root) -> bool:
    """
    Recompute the root from ``leaf`` and its sibling ``proof``.

    Digests may be bytes or hex strings. Malformed input of any kind yields
    False; this never raises on a wrong proof.
    """
    h = to_digest(leaf)
    expected = to_digest(root)
    if h is None or expected is None or isinstance(proof, (str, bytes, bytearray)):
        return False
    try:
        siblings = list(proof)
    except TypeError:
        return False
    for p in siblings:
        sib = to_digest(p)
        if sib is None:
            return False
        h = hash_pair(h, sib)
    return h == expected
