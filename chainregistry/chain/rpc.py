"""RPC endpoint lists: self-hosted node first, then Alchemy. Infura key substitution."""

from __future__ import annotations

import logging
from typing import Literal

from chainregistry.config import CredentialLookup
from chainregistry.models.schema import RpcDescriptor, RpcEndpoint

logger = logging.getLogger(__name__)

ProviderFamily = Literal["eth", "polygon", "arb", "opt"]

ALCHEMY_DOMAIN = "g.alchemy.com"
INFURA_KEY_PLACEHOLDER = "{INFURA_API_KEY}"

# Families with their own Alchemy app key; the rest share ALCHEMY_API_KEY
ALCHEMY_FAMILY_KEYS: dict[str, str] = {
    "opt": "ALCHEMY_API_KEY_OPTIMISM",
    "arb": "ALCHEMY_API_KEY_ARBITRUM",
}


def node_url_variable(sub_name: str) -> str:
    return f"NODE_URL_{sub_name.upper()}"


def custom_node_endpoint(url: str, lookup: CredentialLookup) -> RpcEndpoint:
    """Self-hosted nodes sit behind Cloudflare Access and need its client headers."""
    return RpcEndpoint(
        url=url,
        headers={
            "Content-Type": "application/json",
            "CF-Access-Client-Id": lookup("CF_ACCESS_CLIENT_ID") or "",
            "CF-Access-Client-Secret": lookup("CF_ACCESS_CLIENT_SECRET") or "",
        },
    )


def alchemy_api_key(family: str, lookup: CredentialLookup) -> str | None:
    family_key = ALCHEMY_FAMILY_KEYS.get(family)
    if family_key:
        key = lookup(family_key)
        if key:
            return key
    return lookup("ALCHEMY_API_KEY")


def alchemy_url(sub_name: str, family: str, api_key: str) -> str:
    return f"https://{family}-{sub_name}.{ALCHEMY_DOMAIN}/v2/{api_key}"


def build_alchemy_and_custom_rpc_urls(
    sub_name: str,
    family: ProviderFamily,
    lookup: CredentialLookup,
    use_own_node: bool = False,
) -> list[RpcDescriptor] | None:
    """Build the RPC list for a provider-backed chain.

    Args:
        sub_name: Network part of the provider host, e.g. "mainnet", "goerli".
        family: Provider family, e.g. "eth", "arb". Selects the API key and host prefix.
        lookup: Credential lookup.
        use_own_node: Prefer the self-hosted node from NODE_URL_<SUB_NAME>.

    Returns None when nothing could be built, which means "keep the catalog default".
    Missing credentials are logged and never raise.
    """
    rpc_urls: list[RpcDescriptor] = []

    if use_own_node:
        variable = node_url_variable(sub_name)
        url = lookup(variable)
        if url:
            rpc_urls.append(custom_node_endpoint(url, lookup))
        else:
            logger.warning(f"Environment variable {variable} not set!")

    api_key = alchemy_api_key(family, lookup)
    if not api_key:
        logger.warning(f"Environment variable ALCHEMY_API_KEY not set for {family} {sub_name}!")
    else:
        rpc_urls.append(alchemy_url(sub_name, family, api_key))

    return rpc_urls or None


def replace_infura_api_key(infura_url: str, lookup: CredentialLookup) -> str:
    """https://palm-mainnet.infura.io/v3/{INFURA_API_KEY} -> .../v3/<key>"""
    return infura_url.replace(INFURA_KEY_PLACEHOLDER, lookup("INFURA_API_KEY") or "")
