"""Chain client for receiver-deployer.

Thin wrapper over web3: one HTTP connection, one local signer, and the two
kinds of transaction the deployment needs (contract creation and a contract
function call). Signing, ABI encoding and transport are left to web3.
"""

import logging
from typing import Any, Dict, List, Tuple

from web3 import Web3
from web3.contract import Contract
from web3.middleware import ExtraDataToPOAMiddleware

from .constants import DEFAULT_RECEIPT_TIMEOUT, DEFAULT_RPC_TIMEOUT
from .exceptions import TransactionFailedError
from .rpc import fetch_chain_id
from .types import ContractArtifact

logger = logging.getLogger(__name__)


def pad_address(address: str) -> bytes:
    """
    Left-pad a 20-byte address to 32 bytes (Wormhole universal address).

    Args:
        address: Hex address, with 0x prefix

    Returns:
        32 bytes: 12 zero bytes followed by the address bytes

    Raises:
        ValueError: If address is not a valid hex address, or is mixed-case
                    with a wrong EIP-55 checksum
    """
    if not Web3.is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    digits = address[2:]
    mixed_case = digits != digits.lower() and digits != digits.upper()
    if mixed_case and not Web3.is_checksum_address(address):
        raise ValueError(f"Bad address checksum: {address!r}")
    return Web3.to_bytes(hexstr=address).rjust(32, b"\x00")


class ChainClient:
    """Network connection plus signing identity for one chain."""

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ):
        """
        Connect to a node and bind a signer to it.

        Args:
            rpc_url: RPC endpoint URL
            private_key: Hex private key of the deployer account
            receipt_timeout: Seconds to wait for each transaction receipt

        Raises:
            RpcError: If the endpoint does not answer eth_chainId
            ValueError: If the private key is malformed
        """
        self.chain_id = fetch_chain_id(rpc_url)

        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": DEFAULT_RPC_TIMEOUT}))
        # Some testnets carry oversized extraData in block headers
        self.w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

        self.account = self.w3.eth.account.from_key(private_key)
        self.receipt_timeout = receipt_timeout
        logger.info("Connected to chain %d at %s", self.chain_id, rpc_url)

    @property
    def address(self) -> str:
        """Checksummed address of the signing account."""
        return self.account.address

    def contract_at(self, address: str, abi: List[Dict[str, Any]]) -> Contract:
        """Get a contract handle bound to this client's connection."""
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def deploy(self, artifact: ContractArtifact, *args: Any) -> Tuple[Contract, str]:
        """
        Deploy a contract and wait until it is mined.

        Args:
            artifact: Compiled contract
            *args: Constructor arguments

        Returns:
            Tuple of (contract handle at the new address, transaction hash)

        Raises:
            TransactionFailedError: If the creation reverted or produced no address
        """
        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        tx = factory.constructor(*args).build_transaction(self._tx_params())
        receipt = self._send(tx)

        contract_address = receipt.get("contractAddress")
        if not contract_address:
            raise TransactionFailedError(
                f"Deployment transaction {Web3.to_hex(receipt['transactionHash'])} "
                "did not create a contract"
            )

        return self.contract_at(contract_address, artifact.abi), Web3.to_hex(
            receipt["transactionHash"]
        )

    def transact(self, contract: Contract, function_name: str, *args: Any) -> str:
        """
        Call a state-changing contract function and wait until it is mined.

        Args:
            contract: Contract handle
            function_name: Name of the function in the contract ABI
            *args: Function arguments

        Returns:
            Transaction hash

        Raises:
            TransactionFailedError: If the transaction reverted
        """
        function = getattr(contract.functions, function_name)
        tx = function(*args).build_transaction(self._tx_params())
        receipt = self._send(tx)
        return Web3.to_hex(receipt["transactionHash"])

    def _tx_params(self) -> Dict[str, Any]:
        # Gas and fee fields are filled in by build_transaction
        return {
            "from": self.account.address,
            "nonce": self.w3.eth.get_transaction_count(self.account.address, "pending"),
            "chainId": self.chain_id,
        }

    def _send(self, tx: Dict[str, Any]) -> Any:
        signed = self.account.sign_transaction(tx)
        tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        logger.debug("Sent transaction %s", Web3.to_hex(tx_hash))

        receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        if receipt["status"] != 1:
            raise TransactionFailedError(f"Transaction {Web3.to_hex(tx_hash)} reverted")
        return receipt
