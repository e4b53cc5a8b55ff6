"""Deployment record management for receiver-deployer.

The record is a JSON object keyed by network name, for example::

    {
      "avalanche": {"MessageSender": "0x...", "deployedAt": "2024-05-01T10:00:00.000Z"},
      "celo": {"MessageReceiver": "0x...", "deployedAt": "2024-05-01T10:05:00.000Z"}
    }
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import DEPLOYED_AT_FIELD
from .exceptions import MissingDependencyError


def load_records(records_path: Path) -> Dict[str, Any]:
    """
    Load the deployment record or return an empty one.

    Args:
        records_path: Path to deployedContracts.json

    Returns:
        Dictionary mapping network -> contract name / deployedAt fields
        Empty dict if the file doesn't exist

    Raises:
        json.JSONDecodeError: If the file exists but is not valid JSON
        OSError: For any read error other than a missing file
    """
    try:
        with open(records_path) as f:
            return json.load(f)
    except FileNotFoundError:
        return {}


def save_records(records: Dict[str, Any], records_path: Path) -> None:
    """
    Overwrite the deployment record on disk.

    Args:
        records: Deployment record dictionary
        records_path: Path to deployedContracts.json

    Creates parent directories if they don't exist.
    """
    records_path.parent.mkdir(parents=True, exist_ok=True)
    with open(records_path, "w") as f:
        json.dump(records, f, indent=2)


def require_contract(records: Dict[str, Any], network: str, contract_name: str) -> str:
    """
    Get the address of a contract that must already have been deployed.

    Args:
        records: Deployment record dictionary
        network: Network name, e.g. "avalanche"
        contract_name: Contract field in the network entry, e.g. "MessageSender"

    Returns:
        Recorded contract address

    Raises:
        MissingDependencyError: If the network entry or the field is absent
    """
    entry = records.get(network)
    if not isinstance(entry, dict) or not entry.get(contract_name):
        raise MissingDependencyError(
            f"{network.capitalize()} {contract_name} address not found in deployedContracts.json."
        )
    return entry[contract_name]


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """
    Format a UTC time as ISO-8601 with millisecond precision and a Z suffix.

    Args:
        now: Time to format (defaults to the current time)

    Returns:
        Timestamp such as "2024-05-01T10:05:00.123Z"
    """
    if now is None:
        now = datetime.now(timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def record_deployment(
    records: Dict[str, Any],
    network: str,
    contract_name: str,
    address: str,
    deployed_at: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Merge a deployment into the record.

    The entry for `network` is replaced as a whole; all other networks are
    kept as they are. The input dict is not modified.

    Args:
        records: Deployment record dictionary
        network: Network the contract was deployed to
        contract_name: Contract name used as the address field
        address: Deployed contract address
        deployed_at: ISO-8601 timestamp (defaults to now)

    Returns:
        Updated copy of the record
    """
    updated = dict(records)
    updated[network] = {
        contract_name: address,
        DEPLOYED_AT_FIELD: deployed_at if deployed_at is not None else utc_timestamp(),
    }
    return updated
