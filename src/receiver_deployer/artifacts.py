"""Compiled contract artifact loading for receiver-deployer."""

import json
from pathlib import Path

from .types import ContractArtifact


def load_artifact(path: Path) -> ContractArtifact:
    """
    Load ABI and creation bytecode from a build-output JSON file.

    Only the top-level "abi" and "bytecode" keys are required. Foundry writes
    bytecode as {"object": "0x...", ...}; that form is unwrapped.

    Args:
        path: Path to the artifact, e.g. out/MessageReceiver.sol/MessageReceiver.json

    Returns:
        ContractArtifact

    Raises:
        json.JSONDecodeError: If the file is not valid JSON
        KeyError: If "abi" or "bytecode" is missing
    """
    with open(path) as f:
        data = json.load(f)

    bytecode = data["bytecode"]
    if isinstance(bytecode, dict):
        bytecode = bytecode["object"]

    return ContractArtifact(abi=data["abi"], bytecode=bytecode)
