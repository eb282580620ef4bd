"""Caller and transaction context supplied to every operation.

Identity is verified upstream; the core only reads the opaque strings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Protocol


class CallerContext(Protocol):
    """Read-only view of the verified caller."""

    @property
    def client_id(self) -> str:
        """Unique identity string of the caller."""
        ...

    @property
    def organization_id(self) -> str:
        """Organizational membership id of the caller."""
        ...

    def attribute(self, name: str) -> str | None:
        """Return a custom attribute, or None if the caller has none by that name."""
        ...


@dataclass(frozen=True)
class CallerIdentity:
    """Plain :class:`CallerContext` built from already-verified values."""

    client_id: str
    organization_id: str
    attributes: Mapping[str, str] = field(default_factory=dict)

    def attribute(self, name: str) -> str | None:
        return self.attributes.get(name)


@dataclass(frozen=True)
class TransactionContext:
    """Per-invocation context: who is calling, under which tx id, at what time.

    ``timestamp`` is the transaction timestamp assigned by the invoking
    layer. Operations use it instead of reading the clock so that replays
    produce identical records.
    """

    caller: CallerContext
    tx_id: str
    timestamp: datetime
