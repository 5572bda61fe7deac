import pytest

from chainregistry.chain.registry import (
    ChainRegistry,
    build_chains_map,
    get_sorted_chains_array,
    validate_extensions,
)
from chainregistry.errors import CorruptCatalogError, OrphanedExtensionError
from chainregistry.models.schema import ChainOverride, RpcEndpoint


def test_single_chain_production(record):
    registry = ChainRegistry.build([record(1, "Mainnet")], {"1": ChainOverride(supported=True)}, production=True)

    assert list(registry.sourcify_chains_map) == ["1"]
    chain = registry.get_chain("1")
    assert chain.supported is True
    assert chain.chain_id == 1
    assert chain.rpc == ("https://rpc.chain1.example",)


def test_orphaned_extensions_reported_together(record):
    extensions = {
        "1": ChainOverride(supported=True),
        "2": ChainOverride(supported=True),
        "3": ChainOverride(supported=False),
    }
    with pytest.raises(OrphanedExtensionError) as exc_info:
        ChainRegistry.build([record(1)], extensions, production=True)

    assert exc_info.value.chain_ids == ("2", "3")
    assert "2,3" in str(exc_info.value)


def test_catalog_chains_without_extension_are_left_out(catalog, extensions):
    chains = build_chains_map(catalog, extensions, production=True)
    assert set(chains) == {"1", "5", "10", "42220"}
    assert "137" not in chains


def test_every_extension_key_is_in_registry(catalog, extensions):
    registry = ChainRegistry.build(catalog, extensions, production=True)
    for chain_id in extensions:
        assert chain_id in registry


def test_duplicate_catalog_id_is_corrupt(record):
    catalog = [record(10, "A"), record(10, "B")]
    with pytest.raises(CorruptCatalogError) as exc_info:
        build_chains_map(catalog, {"10": ChainOverride(supported=True)}, production=True)
    assert exc_info.value.chain_id == 10


def test_duplicate_catalog_id_without_extension_is_corrupt(record):
    with pytest.raises(CorruptCatalogError):
        build_chains_map([record(7), record(7)], {}, production=True)


def test_local_chains_only_outside_production(catalog, extensions):
    dev = build_chains_map(catalog, extensions, production=False)
    assert "1337" in dev and "31337" in dev
    # the catalog's 1337 entry is shadowed, not reported as a duplicate
    assert dev["1337"].name == "Ganache Localhost"
    assert dev["1337"].rpc == ("http://localhost:8545",)
    assert dev["1337"].supported is True

    prod = build_chains_map(catalog, extensions, production=True)
    assert "1337" not in prod and "31337" not in prod


def test_local_chain_duplicates_in_catalog_are_tolerated_in_development(record):
    catalog = [record(1337), record(1337)]
    chains = build_chains_map(catalog, {}, production=False)
    assert chains["1337"].name == "Ganache Localhost"

    with pytest.raises(CorruptCatalogError):
        build_chains_map(catalog, {}, production=True)


def test_override_rpc_replaces_catalog_rpc(record):
    endpoint = RpcEndpoint(url="https://own", headers={"Content-Type": "application/json"})
    chains = build_chains_map(
        [record(1), record(2)],
        {
            "1": ChainOverride(supported=True, rpc=[endpoint, "https://provider"]),
            "2": ChainOverride(supported=True, rpc=[]),
        },
        production=True,
    )
    assert chains["1"].rpc == (endpoint, "https://provider")
    assert chains["1"].rpc_urls == ["https://own", "https://provider"]
    # empty override keeps the catalog default
    assert chains["2"].rpc == ("https://rpc.chain2.example",)


def test_override_fields_merged(record):
    override = ChainOverride(
        supported=False,
        contract_fetch_address="https://scan/${ADDRESS}",
        tx_regex=["x", "y"],
        graphql_fetch_address="https://indexer/graphql",
    )
    chain = build_chains_map([record(421611, "Arbitrum Rinkeby")], {"421611": override}, True)["421611"]

    assert chain.name == "Arbitrum Rinkeby"
    assert chain.native_currency.symbol == "ETH"
    assert chain.supported is False
    assert chain.contract_fetch_address == "https://scan/${ADDRESS}"
    assert chain.tx_regex == ("x", "y")
    assert chain.graphql_fetch_address == "https://indexer/graphql"


def test_validate_extensions_passes_when_complete(catalog, extensions):
    chains = build_chains_map(catalog, extensions, production=True)
    validate_extensions(chains, extensions)


def test_supported_views(catalog, extensions):
    registry = ChainRegistry.build(catalog, extensions, production=True)

    assert set(registry.supported_chains_map) == {"1", "5", "42220"}
    assert [c.chain_id for c in registry.supported_chains_array] == [1, 5, 42220]
    assert registry.get_supported_chain("10") is None
    assert registry.get_chain(10).supported is False


def test_views_are_read_only(catalog, extensions):
    registry = ChainRegistry.build(catalog, extensions, production=True)
    with pytest.raises(TypeError):
        registry.sourcify_chains_map["999"] = registry.get_chain("1")
    with pytest.raises(Exception):
        registry.get_chain("1").supported = False


def test_sorting_primary_first_then_alphabetical(record):
    chains = {
        str(c.chain_id): c
        for c in build_chains_map(
            [
                record(42220, "Celo Mainnet"),
                record(3, "Ropsten", title="Ethereum Testnet Ropsten"),
                record(1, "Ethereum Mainnet"),
                record(10, "OP Mainnet"),
                record(5, "Goerli", title="Ethereum Testnet Goerli"),
                record(100, "Gnosis"),
                record(11155111, "Sepolia", title="Ethereum Testnet Sepolia"),
                record(7, "avalanche"),
            ],
            {k: ChainOverride(supported=True) for k in ["42220", "3", "1", "10", "5", "100", "11155111", "7"]},
            production=True,
        ).values()
    }

    ordered = get_sorted_chains_array(chains)
    assert [c.chain_id for c in ordered] == [1, 5, 11155111, 3, 42220, 100, 10, 7]
    assert [c.name for c in ordered[:4]] == [
        "Ethereum Mainnet",
        "Ethereum Testnet Goerli",
        "Ethereum Testnet Sepolia",
        "Ethereum Testnet Ropsten",
    ]
    # the input map is not modified
    assert chains["5"].name == "Goerli"


def test_sorting_is_deterministic(catalog, extensions):
    chains = build_chains_map(catalog, extensions, production=False)
    first = get_sorted_chains_array(chains)
    for _ in range(3):
        assert get_sorted_chains_array(chains) == first


def test_sort_falls_back_to_title(record):
    chains = build_chains_map(
        [record(20, "", title="Zeta"), record(21, "Alpha"), record(22, "", title="Beta")],
        {k: ChainOverride(supported=True) for k in ["20", "21", "22"]},
        production=True,
    )
    assert [c.chain_id for c in get_sorted_chains_array(chains)] == [21, 22, 20]


def test_registry_map_matches_array(catalog, extensions):
    registry = ChainRegistry.build(catalog, extensions, production=True)
    assert registry.get_chain("5").name == "Ethereum Testnet Goerli"
    assert registry.sourcify_chains_array[1] is registry.sourcify_chains_map["5"]
    assert len(registry) == 4


def test_rpc_headers_cannot_be_changed(record):
    endpoint = RpcEndpoint(url="https://own", headers={"CF-Access-Client-Secret": "s"})
    registry = ChainRegistry.build(
        [record(1)], {"1": ChainOverride(supported=True, rpc=[endpoint])}, production=True
    )
    node = registry.get_chain("1").rpc[0]

    with pytest.raises(TypeError):
        node.headers[0] = ("CF-Access-Client-Secret", "tampered")
    node.header_dict["CF-Access-Client-Secret"] = "tampered"
    assert registry.get_chain("1").rpc[0].header_dict == {"CF-Access-Client-Secret": "s"}
    # frozen models with a header-bearing endpoint stay hashable
    assert hash(registry.get_chain("1")) == hash(registry.get_chain("1"))


def test_extra_catalog_fields_survive_merge(record):
    catalog = [
        record(
            1,
            "Ethereum Mainnet",
            status="active",
            slip44=60,
            features=[{"name": "EIP155"}, {"name": "EIP1559"}],
            icon="ethereum",
            ens={"registry": "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"},
        )
    ]
    registry = ChainRegistry.build(catalog, {"1": ChainOverride(supported=True)}, production=True)
    chain = registry.get_chain("1")

    assert chain.model_extra["slip44"] == 60
    public = chain.to_public_dict()
    assert public["status"] == "active"
    assert public["slip44"] == 60
    assert public["features"] == [{"name": "EIP155"}, {"name": "EIP1559"}]
    assert public["ens"] == {"registry": "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"}
    assert public["supported"] is True

    # extras are stored read-only
    with pytest.raises(TypeError):
        chain.model_extra["features"][0]["name"] = "changed"
    with pytest.raises(TypeError):
        chain.model_extra["ens"]["registry"] = "0x0"
