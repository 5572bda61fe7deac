"""Pydantic v2 models for catalog records, extension overrides and resolved chains."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def freeze(value: Any) -> Any:
    """Read-only copy of JSON-like data: lists become tuples, dicts become mapping proxies."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


class NativeCurrency(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    symbol: str
    decimals: int = 18


class Explorer(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    url: str
    standard: str | None = None


class RpcEndpoint(BaseModel):
    """RPC URL that must be called with extra request headers."""

    model_config = ConfigDict(frozen=True)

    url: str
    # (name, value) pairs so the shared registry can't be edited through them
    headers: tuple[tuple[str, str], ...] = ()

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_as_pairs(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value

    @property
    def header_dict(self) -> dict[str, str]:
        """Fresh dict for passing to an HTTP client."""
        return dict(self.headers)


# Bare URL or URL + headers. Position in a list is priority, first is preferred.
RpcDescriptor = Union[str, RpcEndpoint]


class ChainRecord(BaseModel):
    """One entry of the canonical chain catalog (chainid.network chains.json).

    Catalog keys without a declared field (status, slip44, features, icon, ens,
    parent, redFlags, ...) are kept as read-only extras.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    chain_id: int = Field(alias="chainId")
    name: str | None = None
    title: str | None = None
    short_name: str | None = Field(default=None, alias="shortName")
    chain: str | None = None
    network: str | None = None
    network_id: int | None = Field(default=None, alias="networkId")
    native_currency: NativeCurrency | None = Field(default=None, alias="nativeCurrency")
    info_url: str | None = Field(default=None, alias="infoURL")
    faucets: tuple[str, ...] = ()
    explorers: tuple[Explorer, ...] = ()
    rpc: tuple[RpcDescriptor, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def _freeze_extras(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        known = set(cls.model_fields)
        known.update(f.alias for f in cls.model_fields.values() if f.alias)
        return {k: v if k in known else freeze(v) for k, v in data.items()}


class ChainOverride(BaseModel):
    """Service-specific settings for one chain, keyed by chain id in the extension table."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    supported: bool = False
    contract_fetch_address: str | None = Field(default=None, alias="contractFetchAddress")
    tx_regex: tuple[str, ...] | None = Field(default=None, alias="txRegex")
    rpc: tuple[RpcDescriptor, ...] | None = None
    graphql_fetch_address: str | None = Field(default=None, alias="graphQLFetchAddress")


class ResolvedChain(ChainRecord):
    """A catalog record merged with its override. Built once, never mutated."""

    supported: bool = False
    contract_fetch_address: str | None = Field(default=None, alias="contractFetchAddress")
    tx_regex: tuple[str, ...] | None = Field(default=None, alias="txRegex")
    graphql_fetch_address: str | None = Field(default=None, alias="graphQLFetchAddress")

    @classmethod
    def merge(cls, record: ChainRecord, override: ChainOverride) -> ResolvedChain:
        """Override fields win. rpc is replaced wholesale, and only by a non-empty list."""
        fields = dict(record)
        fields.update(override.model_dump(exclude={"rpc"}))
        fields["rpc"] = override.rpc if override.rpc else record.rpc
        return cls.model_validate(fields)

    @property
    def rpc_urls(self) -> list[str]:
        return [r.url if isinstance(r, RpcEndpoint) else r for r in self.rpc]

    def to_public_dict(self, include_rpc: bool = False) -> dict[str, Any]:
        """camelCase dump for listings. Header values (access secrets) are never included."""
        extras = self.model_extra or {}
        data = self.model_dump(by_alias=True, exclude_none=True, exclude={"rpc", *extras})
        data.update((k, thaw(v)) for k, v in extras.items())
        if include_rpc:
            data["rpc"] = self.rpc_urls
        return data
