"""
Root and proof artifacts.

root.json holds the root as a JSON string ("0x..."); proofs.json maps each
lower-cased address to its list of 0x-prefixed sibling digests. Both are
what off-chain claim UIs and contract deploy scripts read.
"""

import json
import logging
import os
from typing import Any, Dict, List, Sequence, Tuple

from eth_utils import to_checksum_address

from .address import normalize
from .config import PROOFS_FILENAME, ROOT_FILENAME
from .errors import ArtifactError
from .hashing import to_digest
from .whitelist import WhitelistResult

logger = logging.getLogger(__name__)


def root_artifact(result: WhitelistResult) -> str:
    return result.root_hex


def proofs_artifact(result: WhitelistResult) -> Dict[str, List[str]]:
    return {
        addr: ["0x" + p.hex() for p in proof]
        for addr, proof in result.proofs.items()
    }


def save_artifacts(
    result: WhitelistResult,
    out_dir: str = ".",
    root_file: str = ROOT_FILENAME,
    proofs_file: str = PROOFS_FILENAME,
) -> Tuple[str, str]:
    os.makedirs(out_dir, exist_ok=True)
    root_path = os.path.join(out_dir, root_file)
    proofs_path = os.path.join(out_dir, proofs_file)
    with open(root_path, "w") as f:
        json.dump(root_artifact(result), f)
    with open(proofs_path, "w") as f:
        json.dump(proofs_artifact(result), f, indent=2, sort_keys=True)
    logger.info("Saved %s and %s", root_path, proofs_path)
    return root_path, proofs_path


def _read_json(path: str) -> Any:
    try:
        with open(path) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ArtifactError(f"Cannot read {path}: {exc}") from exc


def parse_root(value: Any) -> bytes:
    root = to_digest(value)
    if root is None:
        raise ArtifactError(f"Not a 32 byte hex root: {value!r}")
    return root


def parse_proofs(doc: Any) -> Dict[str, Tuple[bytes, ...]]:
    if not isinstance(doc, dict):
        raise ArtifactError("Proofs document must be a JSON object")
    proofs: Dict[str, Tuple[bytes, ...]] = {}
    for addr, siblings in doc.items():
        if not isinstance(siblings, list):
            raise ArtifactError(f"Proof for {addr} must be a list")
        digests = tuple(to_digest(s) for s in siblings)
        if any(d is None for d in digests):
            raise ArtifactError(f"Proof for {addr} has a malformed digest")
        proofs[addr.lower()] = digests
    return proofs


def load_root(path: str) -> bytes:
    return parse_root(_read_json(path))


def load_proofs(path: str) -> Dict[str, Tuple[bytes, ...]]:
    return parse_proofs(_read_json(path))


def load_artifacts(root_path: str, proofs_path: str) -> Tuple[bytes, Dict[str, Tuple[bytes, ...]]]:
    return load_root(root_path), load_proofs(proofs_path)


def solidity_proof_lines(addr: str, proof: Sequence[bytes]) -> List[str]:
    """Render ``proof`` as the bytes32[] assignments used in Solidity tests."""
    name = to_checksum_address(normalize(addr)).replace("0x", "").upper()
    lines = [f"PROOF_{name} = new bytes32[]({len(proof)});"]
    for i, p in enumerate(proof):
        lines.append(f"PROOF_{name}[{i}] = 0x{p.hex()};")
    return lines
