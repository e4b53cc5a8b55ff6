"""Path management utilities for receiver-deployer."""

from pathlib import Path
from typing import Optional, Union

from .constants import CONTRACT_NAME


def get_default_root() -> Path:
    """
    Get default project root (current working directory).

    Returns:
        Absolute path of the current working directory
    """
    return Path.cwd()


def get_default_paths(root: Optional[Union[Path, str]] = None) -> tuple[Path, Path, Path]:
    """
    Get input/output file paths for a deployment run.

    Args:
        root: Project root (defaults to the current working directory)

    Returns:
        Tuple of (chains_path, artifact_path, records_path)
    """
    if root is None:
        root = get_default_root()
    else:
        root = Path(root).absolute()

    chains_path = root / "deploy-config" / "chains.json"
    artifact_path = root / "out" / f"{CONTRACT_NAME}.sol" / f"{CONTRACT_NAME}.json"
    records_path = root / "deploy-config" / "deployedContracts.json"

    return (chains_path, artifact_path, records_path)
