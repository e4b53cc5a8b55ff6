"""
receiver-deployer: deploy a Wormhole MessageReceiver and register its sender
"""

from importlib.metadata import PackageNotFoundError, version

from .config import load_config
from .deployer import deploy_receiver
from .exceptions import (
    ChainNotFoundError,
    DeployerError,
    EventNotFoundError,
    MissingCredentialError,
    MissingDependencyError,
    RpcError,
    TransactionFailedError,
)
from .listeners import EventSubscription, attach_listeners
from .types import ChainConfig, ContractArtifact, DeployerConfig, DeploymentResult

try:
    __version__ = version("receiver-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "deploy_receiver",
    "load_config",
    "attach_listeners",
    "EventSubscription",
    "ChainConfig",
    "ContractArtifact",
    "DeployerConfig",
    "DeploymentResult",
    "DeployerError",
    "EventNotFoundError",
    "MissingCredentialError",
    "ChainNotFoundError",
    "MissingDependencyError",
    "TransactionFailedError",
    "RpcError",
]
