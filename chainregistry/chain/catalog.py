"""Catalog records (chainid.network format) and the local developer chains."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from chainregistry.models.schema import ChainRecord, NativeCurrency, ResolvedChain

LOCAL_RPC_URL = "http://localhost:8545"

_LOCAL_ETH = NativeCurrency(name="localETH", symbol="localETH", decimals=18)

# Only present outside production. They take precedence over catalog entries with the same id.
LOCAL_CHAINS: tuple[ResolvedChain, ...] = (
    ResolvedChain(
        chain_id=1337,
        name="Ganache Localhost",
        short_name="Ganache",
        network="testnet",
        network_id=1337,
        native_currency=_LOCAL_ETH,
        info_url="localhost",
        supported=True,
        rpc=(LOCAL_RPC_URL,),
    ),
    ResolvedChain(
        chain_id=31337,
        name="Hardhat Network Localhost",
        short_name="Hardhat Network",
        network="testnet",
        network_id=31337,
        native_currency=_LOCAL_ETH,
        info_url="localhost",
        supported=True,
        rpc=(LOCAL_RPC_URL,),
    ),
)

LOCAL_CHAIN_IDS = frozenset(c.chain_id for c in LOCAL_CHAINS)


def parse_catalog(raw: Iterable[dict[str, Any]]) -> list[ChainRecord]:
    """Validate raw catalog entries, keeping catalog order."""
    return [ChainRecord.model_validate(entry) for entry in raw]


def load_catalog(path: Path) -> list[ChainRecord]:
    """Read a chains.json file (a JSON array of chain objects)."""
    if not path.exists():
        raise FileNotFoundError(f"Chain catalog not found: {path}")
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"Chain catalog must be a JSON array: {path}")
    return parse_catalog(raw)
