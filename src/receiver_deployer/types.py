"""Data types and dataclasses for receiver-deployer."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .constants import (
    CONTRACT_NAME,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    SOURCE_CHAIN_ID,
    SOURCE_CONTRACT_NAME,
    SOURCE_NETWORK,
    TARGET_CHAIN_DESCRIPTION,
    TARGET_NETWORK,
)

if TYPE_CHECKING:
    from .listeners import EventSubscription


@dataclass(frozen=True)
class ChainConfig:
    """One entry of chains.json."""

    description: str  # e.g., "Celo Testnet"
    rpc: str  # RPC endpoint URL
    wormhole_relayer: str  # Relay contract address
    chain_id: Optional[int] = None  # Wormhole chain id, if listed


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract interface and creation bytecode."""

    abi: List[Dict[str, Any]]
    bytecode: str


@dataclass
class DeployerConfig:
    """Everything a deployment run needs, resolved up front."""

    # Required fields
    private_key: str = field(repr=False)
    chains_path: Path
    artifact_path: Path
    records_path: Path

    # Deployment target
    chain_description: str = TARGET_CHAIN_DESCRIPTION
    network: str = TARGET_NETWORK
    contract_name: str = CONTRACT_NAME

    # Sender registered on the new receiver
    source_network: str = SOURCE_NETWORK
    source_contract_name: str = SOURCE_CONTRACT_NAME
    source_chain_id: int = SOURCE_CHAIN_ID

    # Timing
    poll_interval: float = DEFAULT_POLL_INTERVAL
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT


@dataclass
class DeploymentResult:
    """Outcome of a successful deployment run."""

    network: str
    contract_address: str
    deploy_tx_hash: str
    register_tx_hash: str
    deployed_at: str  # ISO-8601 UTC
    records: Dict[str, Any]  # Record as written to disk
    subscription: Optional["EventSubscription"] = None
