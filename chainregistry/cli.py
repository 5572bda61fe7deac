"""Click CLI: chains, check, validate."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from chainregistry.config import get_settings

catalog_option = click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="chains.json catalog (defaults to CATALOG_PATH)",
)
extensions_option = click.option(
    "--extensions",
    "extensions_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Extension table JSON (defaults to the bundled table)",
)


def _load(catalog_path: Path | None, extensions_path: Path | None):
    from chainregistry.chain.registry import load_registry

    settings = get_settings()
    updates = {}
    if catalog_path is not None:
        updates["catalog_path"] = catalog_path
    if extensions_path is not None:
        updates["extensions_path"] = extensions_path
    if updates:
        settings = settings.model_copy(update=updates)
    return load_registry(settings)


@click.group()
@click.version_option(version="1.0.0")
@click.option("--log-level", default=None, help="Logging level (defaults to LOG_LEVEL)")
def cli(log_level: str | None):
    """Chain registry - supported networks for contract verification."""
    level = (log_level or get_settings().log_level).upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


@cli.command()
@catalog_option
@extensions_option
@click.option("--supported", "supported_only", is_flag=True, help="Only chains accepting verifications")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON array")
@click.option("--show-rpc", is_flag=True, help="Include RPC URLs in JSON output")
def chains(catalog_path, extensions_path, supported_only: bool, as_json: bool, show_rpc: bool):
    """List chains in display order."""
    registry = _load(catalog_path, extensions_path)
    items = registry.supported_chains_array if supported_only else registry.sourcify_chains_array

    if as_json:
        click.echo(json.dumps([c.to_public_dict(include_rpc=show_rpc) for c in items], indent=2))
        return

    for chain in items:
        status = "supported" if chain.supported else "unsupported"
        click.echo(f"{chain.chain_id}\t{chain.name or chain.title or ''}\t{status}")


@cli.command()
@click.argument("chain_id")
@catalog_option
@extensions_option
@click.option("--any", "any_chain", is_flag=True, help="Accept known but unsupported chains")
def check(chain_id: str, catalog_path, extensions_path, any_chain: bool):
    """Check whether CHAIN_ID is supported for verification."""
    from chainregistry.errors import UnknownChainError, ValidationError

    registry = _load(catalog_path, extensions_path)
    try:
        if any_chain:
            registry.check_sourcify_chain_id(chain_id)
        else:
            registry.check_supported_chain_id(chain_id)
    except (ValidationError, UnknownChainError) as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    click.echo("OK")


@cli.command()
@catalog_option
@extensions_option
def validate(catalog_path, extensions_path):
    """Build the registry and report configuration errors."""
    from chainregistry.errors import ChainRegistryError

    try:
        registry = _load(catalog_path, extensions_path)
    except (ChainRegistryError, FileNotFoundError, ValueError) as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)

    click.echo(
        f"{len(registry)} chains, {len(registry.supported_chains_map)} supported for verification."
    )


if __name__ == "__main__":
    cli()
