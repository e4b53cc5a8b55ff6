"""Raw JSON-RPC helpers for receiver-deployer."""

import logging

import requests

from .constants import DEFAULT_RPC_TIMEOUT
from .exceptions import RpcError

logger = logging.getLogger(__name__)


def fetch_chain_id(rpc_url: str, timeout: float = DEFAULT_RPC_TIMEOUT) -> int:
    """
    Ask a node for its EVM chain id.

    Used as a reachability check before the web3 client is built, so a bad
    endpoint fails with a clear message instead of deep inside a transaction.

    Args:
        rpc_url: RPC endpoint URL
        timeout: Request timeout in seconds

    Returns:
        Chain id reported by eth_chainId

    Raises:
        RpcError: On HTTP errors, JSON-RPC errors, malformed responses
                  or network errors
    """
    try:
        response = requests.post(
            rpc_url,
            json={
                "jsonrpc": "2.0",
                "method": "eth_chainId",
                "params": [],
                "id": 1,
            },
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise RpcError(f"Network error during RPC call to {rpc_url}: {e}") from e

    # Check for HTTP errors
    if response.status_code != 200:
        raise RpcError(f"RPC request to {rpc_url} failed with status {response.status_code}")

    try:
        result = response.json()
    except ValueError as e:
        raise RpcError(f"RPC endpoint {rpc_url} returned invalid JSON") from e

    # Check for RPC errors
    if "error" in result:
        raise RpcError(f"RPC error: {result['error']}")

    try:
        chain_id = int(result["result"], 16)
    except (KeyError, TypeError, ValueError) as e:
        raise RpcError(f"Unexpected eth_chainId response: {result}") from e

    logger.debug("Node at %s reports chain id %d", rpc_url, chain_id)
    return chain_id
