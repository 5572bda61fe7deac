"""Chain registry: catalog + extension table -> immutable, sorted, queryable chains."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from chainregistry.chain.catalog import LOCAL_CHAIN_IDS, LOCAL_CHAINS, load_catalog
from chainregistry.chain.extensions import load_extension_table, resolve_extensions
from chainregistry.config import Settings, get_settings
from chainregistry.errors import (
    CorruptCatalogError,
    OrphanedExtensionError,
    UnknownChainError,
    UnsupportedChainError,
)
from chainregistry.models.schema import ChainOverride, ChainRecord, ResolvedChain

logger = logging.getLogger(__name__)

# Ethereum mainnet and its testnets, listed first and in this order
PRIMARY_CHAIN_IDS: tuple[int, ...] = (1, 5, 11155111, 3, 4, 42)

# Accepted by check_sourcify_chain_id for chain-agnostic lookups
ANY_CHAIN_ID = "0"


def build_chains_map(
    catalog: Iterable[ChainRecord],
    extensions: Mapping[str, ChainOverride],
    production: bool,
) -> dict[str, ResolvedChain]:
    """Merge catalog records with their overrides.

    Only chains with an extension entry are kept. Outside production the local
    developer chains are seeded first and shadow catalog entries with the same id.
    """
    chains: dict[str, ResolvedChain] = {}
    if not production:
        for chain in LOCAL_CHAINS:
            chains[str(chain.chain_id)] = chain

    seen: set[int] = set()
    for record in catalog:
        chain_id = record.chain_id
        if not production and chain_id in LOCAL_CHAIN_IDS:
            logger.debug(f"Catalog chain {chain_id} shadowed by local chain")
            continue
        if chain_id in seen:
            raise CorruptCatalogError(chain_id)
        seen.add(chain_id)

        override = extensions.get(str(chain_id))
        if override is None:
            continue
        chains[str(chain_id)] = ResolvedChain.merge(record, override)

    return chains


def validate_extensions(
    chains: Mapping[str, ResolvedChain],
    extensions: Mapping[str, ChainOverride],
) -> None:
    """Every extension entry must have ended up in the registry. Reports all orphans at once."""
    missing = [chain_id for chain_id in extensions if chain_id not in chains]
    if missing:
        raise OrphanedExtensionError(missing)


def _sort_key(chain: ResolvedChain) -> str:
    return chain.name or chain.title or ""


def get_sorted_chains_array(chains: Mapping[str, ResolvedChain]) -> list[ResolvedChain]:
    """Primary chains first (long-form title as name), others alphabetically by name."""
    primary = []
    for chain_id in PRIMARY_CHAIN_IDS:
        chain = chains.get(str(chain_id))
        if chain is None:
            continue
        primary.append(chain.model_copy(update={"name": chain.title or chain.name}))

    others = sorted(
        (c for c in chains.values() if c.chain_id not in PRIMARY_CHAIN_IDS),
        key=_sort_key,
    )
    return primary + others


@dataclass(frozen=True)
class ChainRegistry:
    """Read-only views over the resolved chains. Safe to share between requests."""

    sourcify_chains_map: Mapping[str, ResolvedChain]
    sourcify_chains_array: tuple[ResolvedChain, ...]
    supported_chains_map: Mapping[str, ResolvedChain]
    supported_chains_array: tuple[ResolvedChain, ...]

    @classmethod
    def build(
        cls,
        catalog: Iterable[ChainRecord],
        extensions: Mapping[str, ChainOverride],
        production: bool,
    ) -> ChainRegistry:
        chains = build_chains_map(catalog, extensions, production)
        validate_extensions(chains, extensions)
        return cls.from_chains(chains)

    @classmethod
    def from_chains(cls, chains: Mapping[str, ResolvedChain]) -> ChainRegistry:
        ordered = tuple(get_sorted_chains_array(chains))
        supported = tuple(c for c in ordered if c.supported)
        registry = cls(
            sourcify_chains_map=MappingProxyType({str(c.chain_id): c for c in ordered}),
            sourcify_chains_array=ordered,
            supported_chains_map=MappingProxyType({str(c.chain_id): c for c in supported}),
            supported_chains_array=supported,
        )
        logger.info(f"Chain registry built: {len(ordered)} chains, {len(supported)} supported")
        return registry

    def __len__(self) -> int:
        return len(self.sourcify_chains_map)

    def __contains__(self, chain_id: object) -> bool:
        return str(chain_id) in self.sourcify_chains_map

    def get_chain(self, chain_id: str | int) -> ResolvedChain | None:
        return self.sourcify_chains_map.get(str(chain_id))

    def get_supported_chain(self, chain_id: str | int) -> ResolvedChain | None:
        return self.supported_chains_map.get(str(chain_id))

    def check_supported_chain_id(self, chain_id: str | int) -> bool:
        """Raise UnsupportedChainError unless the chain accepts new verifications.

        A chain can be known but no longer supported, e.g. Ropsten.
        """
        chain = self.get_chain(chain_id)
        if chain is None or not chain.supported:
            raise UnsupportedChainError(str(chain_id))
        return True

    def check_sourcify_chain_id(self, chain_id: str | int) -> bool:
        """Raise UnknownChainError unless the chain is in the registry (or is "0")."""
        chain_id = str(chain_id)
        if chain_id != ANY_CHAIN_ID and chain_id not in self.sourcify_chains_map:
            raise UnknownChainError(chain_id)
        return True


def load_registry(settings: Settings | None = None) -> ChainRegistry:
    """Build the registry from the configured catalog file and extension table."""
    settings = settings or get_settings()
    catalog = load_catalog(settings.catalog_path)
    table = load_extension_table(settings.extensions_path)
    extensions = resolve_extensions(table, settings.credential_lookup())
    return ChainRegistry.build(catalog, extensions, production=settings.is_production)


@lru_cache
def get_registry() -> ChainRegistry:
    """Process-wide registry, built on first use."""
    return load_registry()
