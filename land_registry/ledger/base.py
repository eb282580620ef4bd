"""Key-value ledger interface the registry core is written against.

The ledger is the source of truth for record state. Each key keeps its
full version history; current state is the latest committed version.
Durability, replication and ordering are the ledger's concern, not the
core's.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, ContextManager, Generic, Iterable, Iterator, Mapping, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeyModification:
    """One committed version of a key."""

    tx_id: str
    timestamp: datetime
    is_delete: bool
    value: bytes


@dataclass(frozen=True)
class QueryResult:
    """One hit of a selector query."""

    key: str
    value: bytes


class ResultsIterator(Generic[T]):
    """Closeable, single-pass cursor over ledger results.

    Use it as a context manager so the underlying handle is released on
    every exit path::

        with ledger.get_history_for_key("LAND0001") as versions:
            for version in versions:
                ...

    ``close()`` is idempotent. A closed iterator yields nothing further.
    """

    def __init__(self, items: Iterable[T], on_close: Callable[[], None] | None = None) -> None:
        self._items: Iterator[T] = iter(items)
        self._on_close = on_close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> "ResultsIterator[T]":
        return self

    def __next__(self) -> T:
        if self._closed:
            raise StopIteration
        return next(self._items)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._on_close is not None:
            self._on_close()

    def __enter__(self) -> "ResultsIterator[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class LedgerTransaction(ABC):
    """Unit of work opened by :meth:`KeyValueLedger.transaction`.

    Reads see committed state plus this unit's own buffered writes.
    Writes become visible only when the unit commits.
    """

    tx_id: str
    timestamp: datetime

    @abstractmethod
    def get_state(self, key: str) -> bytes:
        """Return the current value of ``key``, or ``b""`` if absent."""

    @abstractmethod
    def put_state(self, key: str, value: bytes) -> None:
        """Buffer a write of ``value`` under ``key``."""


class KeyValueLedger(ABC):
    """Committed-ordered key-value store with history and selector queries."""

    @abstractmethod
    def transaction(self, tx_id: str, timestamp: datetime) -> ContextManager[LedgerTransaction]:
        """Open one atomic read-modify-write unit.

        The unit commits when the ``with`` block exits cleanly and is
        discarded if the block raises.

        Raises
        ------
        CommitConflictError
            If a key read inside the unit changed before commit.
        StoreUnavailableError
            If the ledger cannot accept the unit.
        """

    @abstractmethod
    def get_state(self, key: str) -> bytes:
        """Committed value of ``key``, or ``b""`` if absent."""

    @abstractmethod
    def get_history_for_key(self, key: str) -> ResultsIterator[KeyModification]:
        """All committed versions of ``key``, oldest first."""

    @abstractmethod
    def get_query_result(self, selector: Mapping[str, object]) -> ResultsIterator[QueryResult]:
        """Current values whose JSON fields equal every entry of ``selector``."""

    def close(self) -> None:
        """Release ledger resources. Default is a no-op."""
