"""Key-value ledger interface and the in-memory implementation."""

from land_registry.ledger.base import (
    KeyModification,
    KeyValueLedger,
    LedgerTransaction,
    QueryResult,
    ResultsIterator,
)
from land_registry.ledger.memory import InMemoryLedger

__all__ = [
    "InMemoryLedger",
    "KeyModification",
    "KeyValueLedger",
    "LedgerTransaction",
    "QueryResult",
    "ResultsIterator",
]
