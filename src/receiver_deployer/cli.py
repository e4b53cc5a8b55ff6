"""Command-line entry point for receiver-deployer."""

import argparse
import logging
import sys
from typing import List, Optional

from .config import load_config
from .constants import DEFAULT_POLL_INTERVAL
from .deployer import deploy_receiver

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="receiver-deployer",
        description="Deploy MessageReceiver to Celo Testnet and register the Avalanche MessageSender.",
    )
    parser.add_argument("--root", help="Project root holding deploy-config/ and out/ (default: cwd)")
    parser.add_argument("--chains", dest="chains_path", help="Path to chains.json (relative to --root)")
    parser.add_argument("--artifact", dest="artifact_path", help="Path to the compiled contract JSON (relative to --root)")
    parser.add_argument("--records", dest="records_path", help="Path to deployedContracts.json (relative to --root)")
    parser.add_argument(
        "--no-listen",
        dest="listen",
        action="store_false",
        help="Exit after the deployment record is written instead of watching events",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help="Seconds between event polls (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run a deployment.

    Returns:
        0 on success (including an interrupted listener), 1 on any error
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stdout,
    )

    try:
        config = load_config(
            root=args.root,
            chains_path=args.chains_path,
            artifact_path=args.artifact_path,
            records_path=args.records_path,
            poll_interval=args.poll_interval,
        )
        result = deploy_receiver(config, attach=args.listen)

        if result.subscription is not None:
            with result.subscription as subscription:
                try:
                    subscription.run()
                except KeyboardInterrupt:
                    logger.info("Interrupted.")
    except Exception as e:
        logger.error("Error during deployment: %s", e, exc_info=True)
        return 1

    return 0
