"""Errors raised while building the registry and while answering chain checks."""

from __future__ import annotations


class ChainRegistryError(Exception):
    """Fatal configuration problem found while building the registry at startup."""


class CorruptCatalogError(ChainRegistryError):
    def __init__(self, chain_id: int):
        self.chain_id = chain_id
        super().__init__(
            f"Corrupt chains file (chains.json): multiple chains have the same chainId: {chain_id}"
        )


class OrphanedExtensionError(ChainRegistryError):
    def __init__(self, chain_ids: list[str]):
        self.chain_ids = tuple(chain_ids)
        super().__init__(
            "Some of the chains in the extension table are not in the catalog: "
            + ",".join(self.chain_ids)
        )


class ValidationError(ValueError):
    """Request-time error meant to be shown to the user."""


class UnsupportedChainError(ValidationError):
    def __init__(self, chain_id: str):
        self.chain_id = chain_id
        super().__init__(f"Chain {chain_id} not supported for verification!")


class UnknownChainError(LookupError):
    def __init__(self, chain_id: str):
        self.chain_id = chain_id
        super().__init__(f"Chain {chain_id} is not a Sourcify chain!")
