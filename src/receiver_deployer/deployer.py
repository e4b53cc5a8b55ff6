"""Deployment workflow for receiver-deployer."""

import logging
from typing import Any, Callable, Optional

from .artifacts import load_artifact
from .chains import find_chain, load_chains
from .client import ChainClient, pad_address
from .constants import REGISTER_SENDER_FUNCTION
from .listeners import attach_listeners
from .records import (
    load_records,
    record_deployment,
    require_contract,
    save_records,
    utc_timestamp,
)
from .types import DeployerConfig, DeploymentResult

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, str, float], Any]


def deploy_receiver(
    config: DeployerConfig,
    client_factory: Optional[ClientFactory] = None,
    attach: bool = True,
) -> DeploymentResult:
    """
    Deploy the receiver contract, register the source sender and record it.

    Steps run strictly in order and nothing is retried or rolled back: a
    failure after the deployment transaction leaves the contract on chain
    while the record file is left untouched.

    Args:
        config: Run configuration (see load_config())
        client_factory: Called as client_factory(rpc_url, private_key,
                        receipt_timeout); defaults to ChainClient
        attach: Whether to subscribe to the contract's events at the end

    Returns:
        DeploymentResult, with an open subscription if attach is True

    Raises:
        ChainNotFoundError: If no chain matches config.chain_description
        MissingDependencyError: If the source sender was never recorded
        TransactionFailedError: If a transaction reverted
        EventNotFoundError: If attach is True and the ABI lacks a listened-for
                            event (raised after the record is written)
        OSError, json.JSONDecodeError: On unreadable or malformed input files
    """
    # Select the target chain
    chains = load_chains(config.chains_path)
    chain = find_chain(chains, config.chain_description)

    # Connect and bind the signer
    if client_factory is None:
        client_factory = ChainClient
    client = client_factory(chain.rpc, config.private_key, config.receipt_timeout)
    logger.info("Deployer account: %s", client.address)

    artifact = load_artifact(config.artifact_path)

    logger.info("Deploying %s contract...", config.contract_name)
    contract, deploy_tx_hash = client.deploy(artifact, chain.wormhole_relayer)
    logger.info("%s deployed to: %s", config.contract_name, contract.address)

    # The sender must have been deployed and recorded by an earlier run
    records = load_records(config.records_path)
    sender_address = require_contract(
        records, config.source_network, config.source_contract_name
    )

    logger.info(
        "Registering %s %s address...", config.source_network, config.source_contract_name
    )
    register_tx_hash = client.transact(
        contract,
        REGISTER_SENDER_FUNCTION,
        config.source_chain_id,
        pad_address(sender_address),
    )
    logger.info(
        "Registered %s (%s) for %s chain (%d)",
        config.source_contract_name,
        sender_address,
        config.source_network,
        config.source_chain_id,
    )

    deployed_at = utc_timestamp()
    records = record_deployment(
        records, config.network, config.contract_name, contract.address, deployed_at
    )
    save_records(records, config.records_path)
    logger.info("Deployment details updated in %s.", config.records_path.name)

    subscription = None
    if attach:
        subscription = attach_listeners(
            contract, config.poll_interval, contract_name=config.contract_name
        )

    return DeploymentResult(
        network=config.network,
        contract_address=contract.address,
        deploy_tx_hash=deploy_tx_hash,
        register_tx_hash=register_tx_hash,
        deployed_at=deployed_at,
        records=records,
        subscription=subscription,
    )
