"""Block explorer templates for finding a contract's creation transaction."""

from __future__ import annotations

import logging

from chainregistry.config import CredentialLookup

logger = logging.getLogger(__name__)

# Patterns stay strings so they can be returned as-is in chain listings
ETHERSCAN_REGEX = ["at txn.*href=.*/tx/(0x.{64})"]
BLOCKSCOUT_REGEX_OLD = 'transaction_hash_link" href="${BLOCKSCOUT_PREFIX}/tx/(.*?)"'
BLOCKSCOUT_REGEX_NEW = "at txn.*href.*/tx/(0x.{64}?)"

ETHERSCAN_API_SUFFIX = (
    "/api?module=contract&action=getcontractcreation&contractaddresses=${ADDRESS}&apikey="
)

# Etherscan-family explorers with the getcontractcreation endpoint: chain_id -> (api url, key variable)
ETHERSCAN_APIS: dict[str, tuple[str, str]] = {
    "1": ("https://api.etherscan.io", "ETHERSCAN_API_KEY"),
    "5": ("https://api-goerli.etherscan.io", "ETHERSCAN_API_KEY"),
    "17000": ("https://api-holesky.etherscan.io", "ETHERSCAN_API_KEY"),
    "11155111": ("https://api-sepolia.etherscan.io", "ETHERSCAN_API_KEY"),
    "56": ("https://api.bscscan.com", "BSCSCAN_API_KEY"),
    "137": ("https://api.polygonscan.com", "POLYGONSCAN_API_KEY"),
    "43114": ("https://api.snowtrace.io", "SNOWTRACE_API_KEY"),
    "10": ("https://api-optimistic.etherscan.io", "OPTIMISMSCAN_API_KEY"),
    "42161": ("https://api.arbiscan.io", "ARBISCAN_API_KEY"),
    "421613": ("https://api-goerli.arbiscan.io", "ARBISCAN_API_KEY"),
    "1284": ("https://api-moonbeam.moonscan.io", "MOONSCAN_MOONBEAM_API_KEY"),
    "1285": ("https://api-moonriver.moonscan.io", "MOONSCAN_MOONRIVER_API_KEY"),
    "8453": ("https://api.basescan.org", "BASESCAN_API_KEY"),
    "84531": ("https://api-goerli.basescan.org", "BASESCAN_API_KEY"),
    "1116": ("https://openapi.coredao.org", "COREDAO_API_KEY"),
}


def get_blockscout_regex(blockscout_prefix: str = "") -> list[str]:
    """Both Blockscout page layouts, old first. Consumers try them in order."""
    old = BLOCKSCOUT_REGEX_OLD.replace("${BLOCKSCOUT_PREFIX}", blockscout_prefix)
    return [old, BLOCKSCOUT_REGEX_NEW]


def generate_etherscan_creator_tx_api(chain_id: str, lookup: CredentialLookup) -> str:
    if chain_id not in ETHERSCAN_APIS:
        raise ValueError(f"No Etherscan API configured for chain_id={chain_id}")
    api_url, key_variable = ETHERSCAN_APIS[chain_id]
    api_key = lookup(key_variable)
    if not api_key:
        logger.warning(f"Environment variable {key_variable} not set for chain {chain_id}!")
    return api_url + ETHERSCAN_API_SUFFIX + (api_key or "")
