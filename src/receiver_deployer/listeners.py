"""Contract event listeners for receiver-deployer."""

import logging
import threading
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from web3.exceptions import Web3Exception

from .constants import (
    CONTRACT_NAME,
    DEFAULT_POLL_INTERVAL,
    GAME_TRANSACTION_PROCESSED,
    MAX_BLOCK_RANGE,
    MESSAGE_RECEIVED,
    SOURCE_CHAIN_LOGGED,
)
from .exceptions import EventNotFoundError

logger = logging.getLogger(__name__)

EventHandler = Callable[[Mapping[str, Any]], None]


def log_game_transaction(event: Mapping[str, Any]) -> None:
    args = event["args"]
    logger.info(
        "Game Transaction - Player: %s, Action: %s, Value: %s",
        args.get("player"),
        args.get("action"),
        args.get("value"),
    )


def log_message_received(event: Mapping[str, Any]) -> None:
    logger.info("Message Received: %s", event["args"].get("message"))


def log_source_chain(event: Mapping[str, Any]) -> None:
    logger.info("Source Chain Logged: %s", event["args"].get("sourceChain"))


def default_handlers() -> Dict[str, EventHandler]:
    """Logging callbacks for the three MessageReceiver events."""
    return {
        GAME_TRANSACTION_PROCESSED: log_game_transaction,
        MESSAGE_RECEIVED: log_message_received,
        SOURCE_CHAIN_LOGGED: log_source_chain,
    }


class EventSubscription:
    """
    Polls a contract for events and dispatches them to handlers.

    Nothing runs in the background: call poll() for a single pass or run()
    to block until close() is called (from a handler, another thread or a
    signal handler).
    """

    def __init__(
        self,
        contract: Any,
        handlers: Dict[str, EventHandler],
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        from_block: Optional[int] = None,
        max_block_range: int = MAX_BLOCK_RANGE,
    ):
        """
        Create a subscription.

        Args:
            contract: web3 contract handle
            handlers: Maps event name -> callback taking the decoded event
            poll_interval: Seconds between polls in run()
            from_block: First block to scan (defaults to the block after
                        the current head)
            max_block_range: Most blocks covered by one get_logs request

        Raises:
            EventNotFoundError: If a handler names an event missing from the ABI
        """
        abi_events = {item.get("name") for item in contract.abi if item.get("type") == "event"}
        missing = sorted(set(handlers) - abi_events)
        if missing:
            raise EventNotFoundError(
                f"Events {', '.join(missing)} not found in contract ABI"
            )

        self._contract = contract
        self._handlers = dict(handlers)
        self._poll_interval = poll_interval
        self._max_block_range = max_block_range
        self._closed = threading.Event()

        if from_block is None:
            from_block = contract.w3.eth.block_number + 1
        self._next_block = from_block

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def next_block(self) -> int:
        """First block the next poll will scan."""
        return self._next_block

    def poll(self) -> int:
        """
        Fetch events mined since the last poll and dispatch them in chain order.

        Blocks are scanned in chunks of at most max_block_range; each chunk
        that completes advances next_block, so a failure part way through
        resumes from the first unscanned chunk.

        Returns:
            Number of events dispatched
        """
        if self.closed:
            return 0

        latest = self._contract.w3.eth.block_number
        dispatched = 0
        while self._next_block <= latest and not self.closed:
            to_block = min(latest, self._next_block + self._max_block_range - 1)
            dispatched += self._scan(self._next_block, to_block)
            self._next_block = to_block + 1
        return dispatched

    def _scan(self, from_block: int, to_block: int) -> int:
        events = []
        for event_name in self._handlers:
            event = getattr(self._contract.events, event_name)
            events.extend(event().get_logs(from_block=from_block, to_block=to_block))

        events.sort(key=lambda e: (e["blockNumber"], e["logIndex"]))
        for event in events:
            self._handlers[event["event"]](event)
        return len(events)

    def run(self) -> None:
        """Poll until close() is called. Transient node errors are logged and retried."""
        while not self.closed:
            try:
                self.poll()
            except (requests.RequestException, Web3Exception) as e:
                logger.warning("Event poll failed, retrying: %s", e)
            self._closed.wait(self._poll_interval)

    def close(self) -> None:
        """Stop the subscription. Safe to call more than once."""
        if not self.closed:
            self._closed.set()
            logger.info("Event listeners closed.")

    def __enter__(self) -> "EventSubscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def attach_listeners(
    contract: Any,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    handlers: Optional[Dict[str, EventHandler]] = None,
    contract_name: str = CONTRACT_NAME,
) -> EventSubscription:
    """
    Subscribe to the receiver's events.

    Args:
        contract: web3 contract handle of the deployed receiver
        poll_interval: Seconds between polls
        handlers: Event name -> callback (defaults to default_handlers())
        contract_name: Name used in the log line

    Returns:
        Open EventSubscription

    Raises:
        EventNotFoundError: If the contract ABI lacks a handled event
    """
    if handlers is None:
        handlers = default_handlers()

    subscription = EventSubscription(contract, handlers, poll_interval)
    logger.info("Event listeners set up for %s contract.", contract_name)
    return subscription
