"""Run configuration for receiver-deployer."""

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv

from .constants import PRIVATE_KEY_ENV
from .exceptions import MissingCredentialError
from .paths import get_default_paths, get_default_root
from .types import DeployerConfig

logger = logging.getLogger(__name__)


def load_config(
    env: Optional[Mapping[str, str]] = None,
    root: Optional[Union[Path, str]] = None,
    **overrides: Any,
) -> DeployerConfig:
    """
    Build the configuration for a deployment run.

    The credential is checked before anything else so a missing key fails
    before any input file is read.

    Args:
        env: Environment mapping to read from. If None, a .env file found from
             the working directory is loaded and os.environ is used.
        root: Project root for the default file locations
              (defaults to the current working directory)
        **overrides: Any DeployerConfig field, e.g. records_path or
                     poll_interval. None values are ignored. Relative path
                     overrides are resolved under root.

    Returns:
        DeployerConfig

    Raises:
        MissingCredentialError: If PRIVATE_KEY is unset or empty
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    private_key = env.get(PRIVATE_KEY_ENV, "").strip()
    if not private_key:
        raise MissingCredentialError(
            f"{PRIVATE_KEY_ENV} is not set in the environment variables."
        )

    root = get_default_root() if root is None else Path(root).absolute()
    chains_path, artifact_path, records_path = get_default_paths(root)
    values: dict[str, Any] = {
        "private_key": private_key,
        "chains_path": chains_path,
        "artifact_path": artifact_path,
        "records_path": records_path,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    # Path overrides may arrive as strings; relative ones are taken under root
    for key in ("chains_path", "artifact_path", "records_path"):
        values[key] = root / values[key]

    config = DeployerConfig(**values)
    logger.debug("Loaded configuration: %s", config)
    return config
