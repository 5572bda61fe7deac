import pytest

from chainregistry.models.schema import ChainOverride, ChainRecord


def make_record(chain_id: int, name: str | None = None, **kwargs) -> ChainRecord:
    data = {
        "chainId": chain_id,
        "name": name if name is not None else f"Chain {chain_id}",
        "shortName": f"c{chain_id}",
        "chain": "ETH",
        "networkId": chain_id,
        "nativeCurrency": {"name": "Ether", "symbol": "ETH", "decimals": 18},
        "infoURL": "https://example.org",
        "rpc": [f"https://rpc.chain{chain_id}.example"],
        "faucets": [],
    }
    data.update(kwargs)
    return ChainRecord.model_validate(data)


@pytest.fixture
def record():
    return make_record


@pytest.fixture
def no_credentials():
    return {}.get


@pytest.fixture
def catalog():
    return [
        make_record(1, "Ethereum Mainnet", title=None),
        make_record(5, "Goerli", title="Ethereum Testnet Goerli"),
        make_record(10, "OP Mainnet"),
        make_record(137, "Polygon Mainnet"),
        make_record(1337, "Geth Testnet"),
        make_record(42220, "Celo Mainnet"),
    ]


@pytest.fixture
def extensions():
    return {
        "1": ChainOverride(supported=True, rpc=["https://eth.example/own"]),
        "5": ChainOverride(supported=True),
        "10": ChainOverride(supported=False, contract_fetch_address="https://explorer/${ADDRESS}"),
        "42220": ChainOverride(supported=True, tx_regex=["a", "b"]),
    }
