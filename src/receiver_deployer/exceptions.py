"""Custom exception classes for receiver-deployer."""


class DeployerError(Exception):
    """Base exception for deployment-related errors."""

    pass


class MissingCredentialError(DeployerError, ValueError):
    """Raised when the signing credential is not set in the environment."""

    pass


class ChainNotFoundError(DeployerError, LookupError):
    """Raised when no chain configuration matches the requested description."""

    pass


class MissingDependencyError(DeployerError, KeyError):
    """Raised when a required prior deployment is absent from the record."""

    def __str__(self) -> str:
        # KeyError repr()s its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class TransactionFailedError(DeployerError, RuntimeError):
    """Raised when a confirmed transaction reverted or created no contract."""

    pass


class RpcError(DeployerError, RuntimeError):
    """Raised when a raw JSON-RPC request to the node fails."""

    pass


class EventNotFoundError(DeployerError, ValueError):
    """Raised when a listened-for event is not in the contract ABI."""

    pass
