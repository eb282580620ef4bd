"""Named-operation boundary of the registry.

The invoking transport passes an operation name and positional string
arguments; every operation answers with a JSON string. Errors propagate
as :class:`LandRegistryError` subclasses for the transport to map.
"""

import logging
from typing import Any, Callable

from land_registry.config import RegistryConfig
from land_registry.context import TransactionContext
from land_registry.exceptions import InvalidArgumentError
from land_registry.history import HistoryReader
from land_registry.ledger import KeyValueLedger
from land_registry.query import QueryService
from land_registry.serialization import encode_canonical
from land_registry.store import RecordStore

logger = logging.getLogger(__name__)


def to_json(payload: Any) -> str:
    return encode_canonical(payload).decode("utf-8")


class LandContract:
    """Dispatches named operations to the record store and its read views."""

    # Operation name -> (method name, number of positional arguments)
    OPERATIONS: dict[str, tuple[str, int]] = {
        "InitLedger": ("init_ledger", 0),
        "CreateLand": ("create_land", 19),
        "ReadLand": ("read_land", 1),
        "InitiateTransfer": ("initiate_transfer", 4),
        "ApproveTransfer": ("approve_transfer", 1),
        "GetHistory": ("get_history", 1),
        "QueryLandsByOwner": ("query_lands_by_owner", 1),
        "QueryLandsByLocation": ("query_lands_by_location", 1),
        "GetAllLands": ("get_all_lands", 0),
    }

    def __init__(
        self,
        store: RecordStore,
        history: HistoryReader,
        queries: QueryService,
    ) -> None:
        self.store = store
        self.history = history
        self.queries = queries

    @classmethod
    def from_ledger(cls, ledger: KeyValueLedger, config: RegistryConfig | None = None) -> "LandContract":
        """Wire the store, history reader and query service over one ledger."""
        config = config or RegistryConfig()
        return cls(
            store=RecordStore(ledger, config.authorization),
            history=HistoryReader(ledger),
            queries=QueryService(ledger),
        )

    def invoke(self, tx: TransactionContext, fn: str, *args: str) -> str:
        """Run operation ``fn`` with positional ``args``.

        Raises
        ------
        InvalidArgumentError
            If ``fn`` is unknown or the argument count is wrong.
        """
        try:
            method_name, arity = self.OPERATIONS[fn]
        except KeyError:
            raise InvalidArgumentError(f"Unknown operation: {fn}") from None
        if len(args) != arity:
            raise InvalidArgumentError(f"{fn} expects {arity} argument(s), got {len(args)}")
        method: Callable[..., str] = getattr(self, method_name)
        logger.debug("Invoking %s as %s (tx %s)", fn, tx.caller.client_id, tx.tx_id)
        return method(tx, *args)

    def init_ledger(self, tx: TransactionContext) -> str:
        written = self.store.init_ledger(tx)
        return to_json(written)

    def create_land(self, tx: TransactionContext, *fields: str) -> str:
        return to_json(self.store.create_land(tx, *fields).to_dict())

    def read_land(self, tx: TransactionContext, land_id: str) -> str:
        return to_json(self.store.read_land(tx, land_id).to_dict())

    def initiate_transfer(
        self,
        tx: TransactionContext,
        land_id: str,
        proposed_buyer: str,
        price: str,
        agreement_hash: str,
    ) -> str:
        record = self.store.initiate_transfer(tx, land_id, proposed_buyer, price, agreement_hash)
        return to_json(record.to_dict())

    def approve_transfer(self, tx: TransactionContext, land_id: str) -> str:
        return to_json(self.store.approve_transfer(tx, land_id).to_dict())

    def get_history(self, tx: TransactionContext, land_id: str) -> str:
        return to_json([entry.to_dict() for entry in self.history.get_history(tx, land_id)])

    def query_lands_by_owner(self, tx: TransactionContext, owner: str) -> str:
        return to_json([r.to_dict() for r in self.queries.query_by_owner(tx, owner)])

    def query_lands_by_location(self, tx: TransactionContext, location: str) -> str:
        return to_json([r.to_dict() for r in self.queries.query_by_location(tx, location)])

    def get_all_lands(self, tx: TransactionContext) -> str:
        return to_json([r.to_dict() for r in self.queries.query_all(tx)])
