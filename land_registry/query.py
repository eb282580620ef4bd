"""Secondary-attribute queries over land records."""

import logging
from typing import Any

from land_registry.context import TransactionContext
from land_registry.ledger import KeyValueLedger
from land_registry.models import DOC_TYPE_LAND, LandRecord
from land_registry.serialization import decode_json

logger = logging.getLogger(__name__)


class QueryService:
    """Equality queries against the ledger's selector index.

    Results come back in whatever order the ledger returns them.
    """

    def __init__(self, ledger: KeyValueLedger) -> None:
        self.ledger = ledger

    def query_by_owner(self, tx: TransactionContext, owner: str) -> list[LandRecord]:
        """Lands whose current owner is ``owner``."""
        return self._run({"owner": owner})

    def query_by_location(self, tx: TransactionContext, location: str) -> list[LandRecord]:
        """Lands whose location string equals ``location`` exactly."""
        return self._run({"location": location})

    def query_all(self, tx: TransactionContext) -> list[LandRecord]:
        """Every land record on the ledger."""
        return self._run({})

    def _run(self, fields: dict[str, Any]) -> list[LandRecord]:
        selector = {"docType": DOC_TYPE_LAND, **fields}
        with self.ledger.get_query_result(selector) as results:
            records = [LandRecord.from_dict(decode_json(hit.value)) for hit in results]
        logger.debug("Query %s returned %d record(s)", selector, len(records))
        return records
