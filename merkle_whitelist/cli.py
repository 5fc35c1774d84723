"""
Command-line entry point.

Usage:
    python -m merkle_whitelist generate 0xf39F... 0x7099... [--out ./out] [--solidity]
    python -m merkle_whitelist generate --file whitelist.txt --out ./out
    python -m merkle_whitelist generate --file whitelist.txt --save
    python -m merkle_whitelist generate --contract 0xABC...:500 --rpc-url URL
    python -m merkle_whitelist verify 0xf39F... --root 0x... --proofs ./out/proofs.json

Environment Variables:
    INFURA_KEY              Infura project key, used when no RPC url is given
    WHITELIST_RPC_URL       JSON-RPC endpoint for owner enumeration
    WHITELIST_OUTPUT_DIR    Default directory for root.json / proofs.json
    WHITELIST_LOG_LEVEL     Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from typing import List, Sequence

from eth_utils import to_checksum_address

from .address import normalize
from .artifacts import load_proofs, load_root, parse_root, proofs_artifact, save_artifacts, solidity_proof_lines
from .config import load_config
from .errors import InvalidIdentity, WhitelistError
from .owners import TokenContract, collect_whitelist, connect
from .tree import leaf_hash
from .whitelist import build_whitelist, get_proof, verify_proof

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_contract(value: str) -> TokenContract:
    try:
        address, supply = value.rsplit(":", 1)
        return TokenContract(address=address, total_supply=int(supply))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ADDRESS:TOTAL_SUPPLY, got {value!r}") from None


def read_address_file(path: str) -> List[str]:
    """Addresses separated by commas, whitespace or newlines, in any mix."""
    with open(path) as f:
        content = f.read()
    return [a for a in re.split(r"[,\s]+", content) if a]


def create_parser() -> argparse.ArgumentParser:
    config = load_config()
    parser = argparse.ArgumentParser(
        prog="merkle-whitelist",
        description="Build Merkle whitelist roots and proofs for address allowlists.",
    )
    parser.add_argument("--log-level", default=config.log_level, help="Log level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Build the root and every member's proof")
    gen.add_argument("addresses", nargs="*", help="Whitelisted addresses (0x or Tron base58)")
    gen.add_argument("--file", help="Read addresses from a file")
    gen.add_argument(
        "--contract", action="append", type=parse_contract, default=[],
        metavar="ADDRESS:SUPPLY", help="Add current owners of an ERC-721 contract",
    )
    gen.add_argument("--rpc-url", default=config.rpc_url, help="JSON-RPC endpoint for --contract")
    gen.add_argument("--skip-missing", action="store_true", help="Skip tokens whose ownerOf call fails")
    gen.add_argument("--out", default=None, help="Write root.json and proofs.json to this directory")
    gen.add_argument(
        "--save", action="store_true",
        help=f"Write root.json and proofs.json to WHITELIST_OUTPUT_DIR (currently {config.output_dir!r})",
    )
    gen.add_argument("--solidity", action="store_true", help="Print proofs as Solidity bytes32[] fixtures")
    gen.add_argument("--json", action="store_true", help="Print {root, proofs} as JSON")
    gen.set_defaults(func=generate_cmd, output_dir=config.output_dir)

    ver = sub.add_parser("verify", help="Check one address against a published root")
    ver.add_argument("address")
    ver.add_argument("--root", required=True, help="Root as hex, or path to root.json")
    ver.add_argument("--proofs", required=True, help="Path to proofs.json")
    ver.set_defaults(func=verify_cmd)
    return parser


def generate_cmd(args: argparse.Namespace) -> int:
    whitelist = list(args.addresses)
    if args.file:
        whitelist.extend(read_address_file(args.file))
    if args.contract:
        if not args.rpc_url:
            logger.error("--contract needs --rpc-url, WHITELIST_RPC_URL or INFURA_KEY")
            return EXIT_RUNTIME_ERROR
        whitelist = collect_whitelist(
            connect(args.rpc_url), args.contract, seed=whitelist, skip_missing=args.skip_missing
        )

    result = build_whitelist(whitelist)

    if args.json:
        print(json.dumps({"root": result.root_hex, "proofs": proofs_artifact(result)}, indent=2))
    else:
        print(f"Merkle Root: {result.root_hex}")
        for addr in result.members:
            pf = get_proof(result, addr)
            ok = verify_proof(addr, pf, result.root)
            print(f"\nAddress {to_checksum_address(addr)} is whitelisted: {ok}")
            print("Proof:", "[" + ", ".join("0x" + p.hex() for p in pf) + "]")
            if args.solidity:
                print("\n// Solidity")
                print("\n".join(solidity_proof_lines(addr, pf)))

    out_dir = args.out or (args.output_dir if args.save else None)
    if out_dir:
        save_artifacts(result, out_dir)
    return EXIT_SUCCESS


def _load_root(value: str) -> bytes:
    if value.endswith(".json"):
        return load_root(value)
    return parse_root(value)


def verify_cmd(args: argparse.Namespace) -> int:
    root = _load_root(args.root)
    proofs = load_proofs(args.proofs)
    try:
        key = normalize(args.address)
    except InvalidIdentity:
        key = None
    proof = proofs.get(key)
    if proof is None:
        print(f"Address {args.address} is NOT in the whitelist.")
        return EXIT_VERIFICATION_FAILED
    ok = verify_proof(args.address, proof, root)
    print(f"Leaf: 0x{leaf_hash(key).hex()}")
    print(f"Address {args.address} is whitelisted: {ok}")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED


def main(argv: Sequence[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        return args.func(args)
    except WhitelistError as exc:
        logger.error("%s", exc)
        return EXIT_RUNTIME_ERROR
    except OSError as exc:
        logger.error("I/O error: %s", exc)
        return EXIT_RUNTIME_ERROR
