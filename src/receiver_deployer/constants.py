"""Configuration constants for receiver-deployer."""

# Environment variable holding the deployer's private key
PRIVATE_KEY_ENV = "PRIVATE_KEY"

# Target chain: selected from chains.json by description substring
TARGET_CHAIN_DESCRIPTION = "Celo Testnet"
TARGET_NETWORK = "celo"
CONTRACT_NAME = "MessageReceiver"

# Source chain whose MessageSender gets registered on the receiver.
# Chain ids are Wormhole chain ids, not EVM chain ids (6 = Avalanche).
SOURCE_NETWORK = "avalanche"
SOURCE_CONTRACT_NAME = "MessageSender"
SOURCE_CHAIN_ID = 6

# Contract function called after deployment
REGISTER_SENDER_FUNCTION = "setRegisteredSender"

# Events emitted by MessageReceiver
GAME_TRANSACTION_PROCESSED = "GameTransactionProcessed"
MESSAGE_RECEIVED = "MessageReceived"
SOURCE_CHAIN_LOGGED = "SourceChainLogged"
RECEIVER_EVENTS = (GAME_TRANSACTION_PROCESSED, MESSAGE_RECEIVED, SOURCE_CHAIN_LOGGED)

# Record field holding the deployment time
DEPLOYED_AT_FIELD = "deployedAt"

DEFAULT_POLL_INTERVAL = 2.0  # seconds between event polls
DEFAULT_RECEIPT_TIMEOUT = 120.0  # seconds to wait for a transaction receipt
DEFAULT_RPC_TIMEOUT = 30  # seconds, raw JSON-RPC requests
MAX_BLOCK_RANGE = 1000  # blocks per eth_getLogs request; public RPCs cap the range
