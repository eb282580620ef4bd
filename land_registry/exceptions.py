"""Custom exception hierarchy for land-registry."""


class LandRegistryError(Exception):
    """Base exception for all land-registry errors."""


class UnauthorizedError(LandRegistryError):
    """Raised when the caller lacks the role or ownership an operation needs."""


class RecordNotFoundError(LandRegistryError):
    """Raised when no record exists for a key, or the stored value is empty."""


class RecordAlreadyExistsError(LandRegistryError):
    """Raised when creating a record under a key that is already taken."""


class ConflictingStateError(LandRegistryError):
    """Raised when a record is in an invalid state for the transfer operation."""


class InvalidArgumentError(LandRegistryError):
    """Raised when an argument cannot be parsed or is out of range."""


class ConfigurationError(LandRegistryError):
    """Raised when configuration is invalid or missing."""


class LedgerError(LandRegistryError):
    """Base exception for failures raised by the ledger itself."""


class StoreUnavailableError(LedgerError):
    """Raised when the ledger cannot be reached or has been closed."""


class CommitConflictError(LedgerError):
    """Raised when a unit of work read state that changed before it committed."""


class CorruptRecordError(LedgerError):
    """Raised when a value read back from the ledger cannot be decoded as a record."""
