"""
Runtime configuration.

Encoding constants shared by the tree builder and the verifier, default
artifact names, and the environment-driven settings used by the CLI and the
owner fetcher. A ``.env`` file in the working directory is loaded on import.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# --- ENCODING ---

ADDRESS_SIZE = 20   # EVM address bytes
ENCODED_WIDTH = 32  # left-padded leaf input, bytes32 in Solidity
DIGEST_SIZE = 32    # keccak256 output

TRON_ADDRESS_PREFIX = 0x41
TRON_ADDRESS_LENGTH = 34

# --- ARTIFACTS ---

ROOT_FILENAME = "root.json"
PROOFS_FILENAME = "proofs.json"

INFURA_MAINNET_URL = "https://mainnet.infura.io/v3/{key}"


@dataclass
class RuntimeConfig:
    """Settings read from the environment."""
    rpc_url: Optional[str] = None
    output_dir: str = "."
    log_level: str = "INFO"


def load_config() -> RuntimeConfig:
    """
    Build a RuntimeConfig from environment variables.

    ``WHITELIST_RPC_URL`` wins over ``INFURA_KEY``; with neither set the RPC
    url stays ``None`` and owner enumeration is unavailable.
    """
    rpc_url = os.getenv("WHITELIST_RPC_URL")
    if not rpc_url:
        infura_key = os.getenv("INFURA_KEY")
        if infura_key:
            rpc_url = INFURA_MAINNET_URL.format(key=infura_key)
    return RuntimeConfig(
        rpc_url=rpc_url,
        output_dir=os.getenv("WHITELIST_OUTPUT_DIR", "."),
        log_level=os.getenv("WHITELIST_LOG_LEVEL", "INFO"),
    )
