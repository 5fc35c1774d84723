"""
Whitelist acquisition from ERC-721 token owners.

Enumerates ``ownerOf(tokenId)`` over JSON-RPC for each configured contract.
This is the only part of the package that talks to a network; the tree
itself only ever sees the resulting list of addresses.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from web3 import Web3

from .address import normalize
from .errors import InvalidIdentity, OwnerLookupError

logger = logging.getLogger(__name__)

OWNER_OF_ABI = [
    {
        "inputs": [{"internalType": "uint256", "name": "tokenId", "type": "uint256"}],
        "name": "ownerOf",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function",
    }
]


@dataclass(frozen=True)
class TokenContract:
    # Token ids queried are [first_token_id, total_supply)
    address: str
    total_supply: int
    first_token_id: int = 1

    @property
    def token_ids(self) -> range:
        return range(self.first_token_id, self.total_supply)


def connect(rpc_url: str) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url))


def fetch_owners(contract, token_ids: Iterable[int], skip_missing: bool = False) -> List[str]:
    """
    Call ``ownerOf`` for every id on a web3 contract object.

    A failing call (burned or unminted token, RPC error) raises
    OwnerLookupError, or is logged and skipped with ``skip_missing``.
    """
    owners: List[str] = []
    for token_id in token_ids:
        try:
            owner = contract.functions.ownerOf(token_id).call()
        except Exception as exc:
            if not skip_missing:
                raise OwnerLookupError(contract.address, token_id, exc) from exc
            logger.warning("Skipping token %d on %s: %s", token_id, contract.address, exc)
            continue
        owners.append(owner)
    logger.debug("Fetched %d owners from %s", len(owners), contract.address)
    return owners


def _dedupe_key(addr: str) -> str:
    try:
        return normalize(addr)
    except InvalidIdentity:
        return addr


def dedupe(addrs: Iterable[str]) -> List[str]:
    """Drop repeats of one address, whatever its spelling; first spelling wins."""
    seen = set()
    out: List[str] = []
    for addr in addrs:
        key = _dedupe_key(addr)
        if key not in seen:
            seen.add(key)
            out.append(addr)
    return out


def collect_whitelist(
    w3: Web3,
    contracts: Sequence[TokenContract],
    seed: Iterable[str] = (),
    skip_missing: bool = False,
) -> List[str]:
    """Seed addresses first, then every contract's current owners, deduplicated."""
    whitelist = list(seed)
    for token in contracts:
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(token.address), abi=OWNER_OF_ABI
        )
        logger.info("Enumerating owners of %s (%d tokens)", token.address, len(token.token_ids))
        whitelist.extend(fetch_owners(contract, token.token_ids, skip_missing=skip_missing))
    return dedupe(whitelist)
