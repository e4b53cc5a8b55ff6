"""Chain configuration loading for receiver-deployer."""

import json
from pathlib import Path
from typing import List

from .exceptions import ChainNotFoundError
from .types import ChainConfig


def load_chains(path: Path) -> List[ChainConfig]:
    """
    Load the chain descriptors from chains.json.

    Args:
        path: Path to chains.json

    Returns:
        Chain descriptors in file order

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        KeyError: If the "chains" list or a required field is missing
    """
    with open(path) as f:
        data = json.load(f)

    return [
        ChainConfig(
            description=entry["description"],
            rpc=entry["rpc"],
            wormhole_relayer=entry["wormholeRelayer"],
            chain_id=entry.get("chainId"),
        )
        for entry in data["chains"]
    ]


def find_chain(chains: List[ChainConfig], description: str) -> ChainConfig:
    """
    Select the first chain whose description contains the given text.

    Args:
        chains: Chain descriptors from load_chains()
        description: Substring to look for, e.g. "Celo Testnet"

    Returns:
        Matching ChainConfig

    Raises:
        ChainNotFoundError: If no description contains the text
    """
    for chain in chains:
        if description in chain.description:
            return chain

    raise ChainNotFoundError(f"{description} configuration not found in chains.json.")
