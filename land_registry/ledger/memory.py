"""Thread-safe in-memory ledger.

Implements :class:`KeyValueLedger` with multi-version concurrency control:
every key carries a version counter, a unit of work remembers the version
of each key it read, and commit fails if any of those versions moved.
Used for tests, local runs and sample-data generation.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Mapping

import orjson

from land_registry.exceptions import CommitConflictError, InvalidArgumentError, StoreUnavailableError
from land_registry.ledger.base import (
    KeyModification,
    KeyValueLedger,
    LedgerTransaction,
    QueryResult,
    ResultsIterator,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Version:
    value: bytes
    version: int


class _MemoryTransaction(LedgerTransaction):
    """Buffered unit of work against an :class:`InMemoryLedger`."""

    def __init__(self, ledger: "InMemoryLedger", tx_id: str, timestamp: datetime) -> None:
        self._ledger = ledger
        self.tx_id = tx_id
        self.timestamp = timestamp
        self.read_set: dict[str, int] = {}
        self.write_set: dict[str, bytes] = {}

    def get_state(self, key: str) -> bytes:
        if key in self.write_set:
            return self.write_set[key]
        value, version = self._ledger._read_versioned(key)
        self.read_set.setdefault(key, version)
        return value

    def put_state(self, key: str, value: bytes) -> None:
        if not key:
            raise InvalidArgumentError("Ledger key must not be empty")
        if not value:
            raise InvalidArgumentError(f"Refusing to write an empty value to {key}")
        self.write_set[key] = bytes(value)


class InMemoryLedger(KeyValueLedger):
    """In-memory ledger with per-key history and optimistic commit checks."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._state: dict[str, _Version] = {}
        self._history: dict[str, list[KeyModification]] = {}
        self._committed_tx_ids: set[str] = set()
        self._open_iterators = 0
        self._closed = False

    @property
    def open_iterators(self) -> int:
        """Number of history/query cursors handed out and not yet closed."""
        with self._lock:
            return self._open_iterators

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreUnavailableError("Ledger is closed")

    def _read_versioned(self, key: str) -> tuple[bytes, int]:
        with self._lock:
            self._ensure_open()
            current = self._state.get(key)
            if current is None:
                return b"", 0
            return current.value, current.version

    @contextmanager
    def transaction(self, tx_id: str, timestamp: datetime) -> Iterator[LedgerTransaction]:
        self._ensure_open()
        tx = _MemoryTransaction(self, tx_id, timestamp)
        yield tx
        self._commit(tx)

    def _commit(self, tx: _MemoryTransaction) -> None:
        if not tx.write_set:
            return
        with self._lock:
            self._ensure_open()
            if tx.tx_id in self._committed_tx_ids:
                raise CommitConflictError(f"Transaction {tx.tx_id} was already committed")
            for key, seen in tx.read_set.items():
                current = self._state.get(key)
                current_version = current.version if current else 0
                if current_version != seen:
                    raise CommitConflictError(
                        f"Transaction {tx.tx_id} read {key} at version {seen}, "
                        f"now at version {current_version}"
                    )
            for key, value in tx.write_set.items():
                previous = self._state.get(key)
                version = previous.version + 1 if previous else 1
                self._state[key] = _Version(value=value, version=version)
                self._history.setdefault(key, []).append(
                    KeyModification(
                        tx_id=tx.tx_id,
                        timestamp=tx.timestamp,
                        is_delete=False,
                        value=value,
                    )
                )
            self._committed_tx_ids.add(tx.tx_id)
        logger.debug("Committed %s (%d key(s))", tx.tx_id, len(tx.write_set))

    def get_state(self, key: str) -> bytes:
        return self._read_versioned(key)[0]

    def get_history_for_key(self, key: str) -> ResultsIterator[KeyModification]:
        with self._lock:
            self._ensure_open()
            versions = list(self._history.get(key, []))
            return self._cursor(versions)

    def get_query_result(self, selector: Mapping[str, object]) -> ResultsIterator[QueryResult]:
        if not selector:
            raise InvalidArgumentError("Query selector must not be empty")
        with self._lock:
            self._ensure_open()
            snapshot = sorted((key, current.value) for key, current in self._state.items())
            hits = [
                QueryResult(key=key, value=value)
                for key, value in snapshot
                if _matches(value, selector)
            ]
            logger.debug("Selector %s matched %d of %d key(s)", dict(selector), len(hits), len(snapshot))
            return self._cursor(hits)

    def _cursor(self, items: list) -> ResultsIterator:
        self._open_iterators += 1
        return ResultsIterator(items, on_close=self._release_cursor)

    def _release_cursor(self) -> None:
        with self._lock:
            self._open_iterators -= 1

    def keys(self) -> list[str]:
        """Committed keys in sorted order."""
        with self._lock:
            return sorted(self._state)

    def close(self) -> None:
        with self._lock:
            self._closed = True


def _matches(value: bytes, selector: Mapping[str, object]) -> bool:
    try:
        document = orjson.loads(value)
    except orjson.JSONDecodeError:
        return False
    if not isinstance(document, dict):
        return False
    return all(field in document and document[field] == expected for field, expected in selector.items())
