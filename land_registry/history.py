"""Per-key audit trail read from the ledger's version history."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from land_registry.context import TransactionContext
from land_registry.ledger import KeyModification, KeyValueLedger
from land_registry.serialization import decode_json, format_timestamp


@dataclass(frozen=True)
class HistoryRecord:
    """One committed version of a land record."""

    tx_id: str
    timestamp: datetime
    is_delete: bool
    value: dict[str, Any] | None  # None for a delete

    def to_dict(self) -> dict[str, Any]:
        return {
            "txId": self.tx_id,
            "timestamp": format_timestamp(self.timestamp),
            "isDelete": self.is_delete,
            "value": self.value,
        }


class HistoryReader:
    """Reshapes raw ledger versions into an ordered audit list."""

    def __init__(self, ledger: KeyValueLedger) -> None:
        self.ledger = ledger

    def get_history(self, tx: TransactionContext, land_id: str) -> list[HistoryRecord]:
        """Return every committed version of ``land_id``, oldest first.

        An unknown key has no versions and yields an empty list.
        """
        with self.ledger.get_history_for_key(land_id) as versions:
            return [_to_history_record(version) for version in versions]


def _to_history_record(version: KeyModification) -> HistoryRecord:
    value = None
    if not version.is_delete and version.value:
        value = decode_json(version.value)
    return HistoryRecord(
        tx_id=version.tx_id,
        timestamp=version.timestamp,
        is_delete=version.is_delete,
        value=value,
    )
