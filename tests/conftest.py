"""Shared pytest fixtures for receiver-deployer tests."""

import itertools
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from receiver_deployer.config import load_config
from receiver_deployer.types import DeployerConfig

TEST_PRIVATE_KEY = "0x" + "11" * 32
AVALANCHE_SENDER = "0x1234567890123456789012345678901234567890"
CELO_RELAYER = "0x306B68267Deb7c5DfCDa3619E22E9Ca39C374f84"

_addresses = itertools.count(1)

RECEIVER_EVENTS_ABI = [
    {
        "type": "event",
        "name": "GameTransactionProcessed",
        "inputs": [
            {"name": "player", "type": "address", "indexed": True},
            {"name": "action", "type": "string", "indexed": False},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
        "anonymous": False,
    },
    {
        "type": "event",
        "name": "MessageReceived",
        "inputs": [{"name": "message", "type": "string", "indexed": False}],
        "anonymous": False,
    },
    {
        "type": "event",
        "name": "SourceChainLogged",
        "inputs": [{"name": "sourceChain", "type": "uint16", "indexed": False}],
        "anonymous": False,
    },
]


class FakeEvent:
    """Stand-in for a web3 contract event: returns canned logs by block range."""

    def __init__(self, name: str, logs: List[Dict[str, Any]], queries: List[tuple]):
        self._name = name
        self._logs = logs
        self._queries = queries

    def __call__(self) -> "FakeEvent":
        return self

    def get_logs(self, from_block: int, to_block: int) -> List[Dict[str, Any]]:
        self._queries.append((self._name, from_block, to_block))
        return [log for log in self._logs if from_block <= log["blockNumber"] <= to_block]


class FakeEvents:
    def __init__(self, logs: List[Dict[str, Any]], queries: List[tuple]):
        self._logs = logs
        self._queries = queries

    def __getattr__(self, name: str) -> FakeEvent:
        return FakeEvent(name, [log for log in self._logs if log["event"] == name], self._queries)


class FakeEth:
    def __init__(self, block_number: int = 100):
        self.block_number = block_number


class FakeWeb3:
    def __init__(self, block_number: int = 100):
        self.eth = FakeEth(block_number)


class FakeContract:
    """Deployed contract handle with an in-memory event log."""

    def __init__(
        self,
        address: str,
        block_number: int = 100,
        abi: Optional[List[Dict[str, Any]]] = None,
    ):
        self.address = address
        self.abi = RECEIVER_EVENTS_ABI if abi is None else abi
        self.w3 = FakeWeb3(block_number)
        self.logs: List[Dict[str, Any]] = []
        self.queries: List[tuple] = []  # (event, from_block, to_block) per get_logs
        self.events = FakeEvents(self.logs, self.queries)

    def emit(self, event: str, block: int, log_index: int = 0, **args: Any) -> None:
        self.logs.append(
            {"event": event, "args": args, "blockNumber": block, "logIndex": log_index}
        )


class FakeClient:
    """Records deploy/transact calls instead of talking to a node."""

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        receipt_timeout: float,
        transact_error: Optional[Exception] = None,
    ):
        self.rpc_url = rpc_url
        self.private_key = private_key
        self.receipt_timeout = receipt_timeout
        self.address = "0x" + "ab" * 20
        self.transact_error = transact_error
        self.deployments: List[Dict[str, Any]] = []
        self.transactions: List[Dict[str, Any]] = []

    def deploy(self, artifact, *args):
        n = next(_addresses)
        contract = FakeContract(f"0x{n:040x}", abi=artifact.abi)
        self.deployments.append({"artifact": artifact, "args": args, "contract": contract})
        return contract, f"0x{n:064x}"

    def transact(self, contract, function_name, *args):
        if self.transact_error is not None:
            raise self.transact_error
        self.transactions.append(
            {"contract": contract, "function": function_name, "args": args}
        )
        return "0x" + "cd" * 32


class FakeClientFactory:
    """Callable with ChainClient's signature that keeps every client it made."""

    def __init__(self, **client_kwargs: Any):
        self.client_kwargs = client_kwargs
        self.created: List[FakeClient] = []

    def __call__(self, rpc_url: str, private_key: str, receipt_timeout: float) -> FakeClient:
        client = FakeClient(rpc_url, private_key, receipt_timeout, **self.client_kwargs)
        self.created.append(client)
        return client


@pytest.fixture
def chains_data() -> Dict[str, Any]:
    """Return a chains.json payload with Avalanche Fuji and Celo Testnet."""
    return {
        "chains": [
            {
                "description": "Avalanche testnet fuji",
                "chainId": 6,
                "rpc": "https://api.avax-test.network/ext/bc/C/rpc",
                "tokenBridge": "0x61E44E506Ca5659E6c0bba9b678586fA2d729756",
                "wormholeRelayer": "0xA3cF45939bD6260bcFe3D66bc73d60f19e49a8BB",
                "wormhole": "0x7bbcE28e64B3F8b84d876Ab298393c38ad7aac4C",
            },
            {
                "description": "Celo Testnet",
                "chainId": 14,
                "rpc": "https://alfajores-forno.celo-testnet.org",
                "tokenBridge": "0x05ca6037eC51F8b712eD2E6Fa72219FEaE74E153",
                "wormholeRelayer": CELO_RELAYER,
                "wormhole": "0x88505117CA88e7dd2eC6EA1E13f0948db2D50D56",
            },
        ]
    }


@pytest.fixture
def artifact_data() -> Dict[str, Any]:
    """Return a minimal Foundry-style MessageReceiver artifact."""
    return {
        "abi": [
            {
                "type": "constructor",
                "inputs": [{"name": "_wormholeRelayer", "type": "address"}],
                "stateMutability": "nonpayable",
            },
            {
                "type": "function",
                "name": "setRegisteredSender",
                "inputs": [
                    {"name": "sourceChain", "type": "uint16"},
                    {"name": "sourceAddress", "type": "bytes32"},
                ],
                "outputs": [],
                "stateMutability": "nonpayable",
            },
            *RECEIVER_EVENTS_ABI,
        ],
        "bytecode": {"object": "0x608060405234801561001057600080fd5b50", "linkReferences": {}},
    }


@pytest.fixture
def existing_records() -> Dict[str, Any]:
    """Return a record holding the Avalanche sender from an earlier run."""
    return {
        "avalanche": {
            "MessageSender": AVALANCHE_SENDER,
            "deployedAt": "2024-05-01T10:00:00.000Z",
        }
    }


@pytest.fixture
def project_root(
    tmp_path: Path,
    chains_data: Dict[str, Any],
    artifact_data: Dict[str, Any],
    existing_records: Dict[str, Any],
) -> Path:
    """Create deploy-config/ and out/ under a temporary project root."""
    config_dir = tmp_path / "deploy-config"
    config_dir.mkdir()
    with open(config_dir / "chains.json", "w") as f:
        json.dump(chains_data, f, indent=2)
    with open(config_dir / "deployedContracts.json", "w") as f:
        json.dump(existing_records, f, indent=2)

    artifact_dir = tmp_path / "out" / "MessageReceiver.sol"
    artifact_dir.mkdir(parents=True)
    with open(artifact_dir / "MessageReceiver.json", "w") as f:
        json.dump(artifact_data, f, indent=2)

    return tmp_path


@pytest.fixture
def records_path(project_root: Path) -> Path:
    return project_root / "deploy-config" / "deployedContracts.json"


@pytest.fixture
def config(project_root: Path) -> DeployerConfig:
    """Return a configuration pointing at the temporary project."""
    return load_config(env={"PRIVATE_KEY": TEST_PRIVATE_KEY}, root=project_root)


@pytest.fixture
def client_factory() -> FakeClientFactory:
    return FakeClientFactory()
