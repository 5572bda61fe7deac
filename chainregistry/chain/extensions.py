"""Extension table: per-chain service settings layered over the catalog.

The table itself is data (``data/extensions.json``). Entries may use a few
declarative builder fields instead of literal values:

- ``etherscanCreatorTxApi: true`` sets ``contractFetchAddress`` to the
  Etherscan-family getcontractcreation endpoint for that chain.
- ``blockscoutRegexPrefix: "/etc/mainnet"`` sets ``txRegex`` to both
  Blockscout patterns for that explorer path.
- ``alchemyRpc: {subName, family, useOwnNode}`` sets ``rpc`` to the
  self-hosted node and/or Alchemy URLs.

Literal ``rpc`` entries may carry an ``{INFURA_API_KEY}`` placeholder.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from chainregistry.chain.explorers import generate_etherscan_creator_tx_api, get_blockscout_regex
from chainregistry.chain.rpc import (
    INFURA_KEY_PLACEHOLDER,
    ProviderFamily,
    build_alchemy_and_custom_rpc_urls,
    replace_infura_api_key,
)
from chainregistry.config import CredentialLookup
from chainregistry.models.schema import ChainOverride, RpcDescriptor

logger = logging.getLogger(__name__)


class AlchemyRpc(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    sub_name: str = Field(alias="subName")
    family: ProviderFamily
    use_own_node: bool = Field(default=False, alias="useOwnNode")


class ExtensionEntry(BaseModel):
    """One raw entry of the extension table, before credentials are applied."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    supported: bool
    contract_fetch_address: str | None = Field(default=None, alias="contractFetchAddress")
    tx_regex: tuple[str, ...] | None = Field(default=None, alias="txRegex")
    rpc: tuple[str, ...] | None = None
    graphql_fetch_address: str | None = Field(default=None, alias="graphQLFetchAddress")
    etherscan_creator_tx_api: bool = Field(default=False, alias="etherscanCreatorTxApi")
    blockscout_regex_prefix: str | None = Field(default=None, alias="blockscoutRegexPrefix")
    alchemy_rpc: AlchemyRpc | None = Field(default=None, alias="alchemyRpc")

    @model_validator(mode="after")
    def _one_source_per_field(self) -> ExtensionEntry:
        conflicts = [
            (self.contract_fetch_address is not None and self.etherscan_creator_tx_api,
             "contractFetchAddress", "etherscanCreatorTxApi"),
            (self.tx_regex is not None and self.blockscout_regex_prefix is not None,
             "txRegex", "blockscoutRegexPrefix"),
            (self.rpc is not None and self.alchemy_rpc is not None, "rpc", "alchemyRpc"),
        ]
        for clash, literal, builder in conflicts:
            if clash:
                raise ValueError(f"{literal} and {builder} are mutually exclusive")
        return self

    def resolve(self, chain_id: str, lookup: CredentialLookup) -> ChainOverride:
        contract_fetch_address = self.contract_fetch_address
        if self.etherscan_creator_tx_api:
            contract_fetch_address = generate_etherscan_creator_tx_api(chain_id, lookup)

        tx_regex = self.tx_regex
        if self.blockscout_regex_prefix is not None:
            tx_regex = tuple(get_blockscout_regex(self.blockscout_regex_prefix))

        rpc: list[RpcDescriptor] | None = None
        if self.rpc:
            rpc = [
                replace_infura_api_key(url, lookup) if INFURA_KEY_PLACEHOLDER in url else url
                for url in self.rpc
            ]
        elif self.alchemy_rpc:
            rpc = build_alchemy_and_custom_rpc_urls(
                self.alchemy_rpc.sub_name,
                self.alchemy_rpc.family,
                lookup,
                use_own_node=self.alchemy_rpc.use_own_node,
            )

        return ChainOverride(
            supported=self.supported,
            contract_fetch_address=contract_fetch_address,
            tx_regex=tx_regex,
            rpc=rpc,
            graphql_fetch_address=self.graphql_fetch_address,
        )


def parse_extension_table(raw: dict[str, dict]) -> dict[str, ExtensionEntry]:
    table: dict[str, ExtensionEntry] = {}
    for chain_id, entry in raw.items():
        if not chain_id.isdigit():
            raise ValueError(f"Extension table keys must be decimal chain ids, got '{chain_id}'")
        table[chain_id] = ExtensionEntry.model_validate(entry)
    return table


def load_extension_table(path: Path) -> dict[str, ExtensionEntry]:
    if not path.exists():
        raise FileNotFoundError(f"Extension table not found: {path}")
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"Extension table must be a JSON object keyed by chain id: {path}")
    return parse_extension_table(raw)


def resolve_extensions(
    table: dict[str, ExtensionEntry],
    lookup: CredentialLookup,
) -> dict[str, ChainOverride]:
    """Apply credentials to every entry, keeping table order."""
    overrides = {chain_id: entry.resolve(chain_id, lookup) for chain_id, entry in table.items()}
    logger.debug(f"Resolved {len(overrides)} chain extensions")
    return overrides
