"""Land record store: creation, reads and the two-phase transfer workflow.

Every mutating operation runs inside one ledger unit of work: one read of
the current record, full validation, then one write. A failed check
raises before anything is written, and the ledger rejects the commit if
another unit changed the record in between.
"""

import logging

from land_registry.auth import is_owner, is_registrar
from land_registry.config import AuthorizationConfig
from land_registry.context import TransactionContext
from land_registry.exceptions import (
    ConflictingStateError,
    InvalidArgumentError,
    RecordAlreadyExistsError,
    RecordNotFoundError,
    UnauthorizedError,
)
from land_registry.ledger import KeyValueLedger, LedgerTransaction
from land_registry.models import (
    Boundary,
    Coordinates,
    CurrentStatus,
    HistoryAction,
    HistoryEntry,
    LandRecord,
    LegalStatus,
    PendingTransfer,
    PreviousOwner,
)
from land_registry.serialization import decode_json, encode_canonical, format_timestamp, parse_number
from land_registry.store.bootstrap import default_bootstrap_records

logger = logging.getLogger(__name__)


class RecordStore:
    """Validates and applies state transitions on land records.

    Parameters
    ----------
    ledger : KeyValueLedger
        Backing store. The store never caches records between calls.
    authorization : AuthorizationConfig | None
        Registrar organization and role; defaults to ``Org1MSP`` / ``gov``.
    """

    def __init__(
        self,
        ledger: KeyValueLedger,
        authorization: AuthorizationConfig | None = None,
    ) -> None:
        self.ledger = ledger
        self.authorization = authorization or AuthorizationConfig()

    # Bootstrap
    def init_ledger(
        self,
        tx: TransactionContext,
        records: list[LandRecord] | None = None,
    ) -> list[str]:
        """Seed the ledger with bootstrap records, skipping keys already present.

        ``records`` defaults to the deployment seed parcel (``LAND0001``).

        Returns
        -------
        list[str]
            Land ids that were written.
        """
        if records is None:
            records = default_bootstrap_records(tx)
        written = []
        with self.ledger.transaction(tx.tx_id, tx.timestamp) as unit:
            for record in records:
                if unit.get_state(record.land_id):
                    logger.warning(
                        "Bootstrap skipped %s: already on the ledger",
                        record.land_id,
                        extra=_log_fields(tx, record.land_id),
                    )
                    continue
                record.check_invariants()
                self._put(unit, record)
                written.append(record.land_id)
        for land_id in written:
            logger.info("Land record %s initialized", land_id, extra=_log_fields(tx, land_id))
        return written

    # Registrar
    def create_land(
        self,
        tx: TransactionContext,
        land_id: str,
        title_number: str,
        land_type: str,
        ownership_type: str,
        owner: str,
        owner_name: str,
        area: str | float,
        unit: str,
        survey_number: str,
        mutation_number: str,
        location: str,
        lat: str | float,
        long: str | float,
        north: str,
        south: str,
        east: str,
        west: str,
        market_value: str | float,
        doc_hash: str,
    ) -> LandRecord:
        """Register a new parcel. Registrar only.

        Numeric arguments arrive as strings from the transport and are
        parsed here.

        Raises
        ------
        UnauthorizedError
            If the caller is not the registrar.
        RecordAlreadyExistsError
            If ``land_id`` is already on the ledger.
        InvalidArgumentError
            If a numeric field does not parse, ``area`` is not positive or
            ``market_value`` is negative.
        """
        self._require_registrar(tx, "create land records")
        if not land_id:
            raise InvalidArgumentError("landId must not be empty")

        with self.ledger.transaction(tx.tx_id, tx.timestamp) as ledger_unit:
            if ledger_unit.get_state(land_id):
                raise RecordAlreadyExistsError(f"Land {land_id} already exists")

            parsed_area = parse_number("area", area)
            if parsed_area <= 0:
                raise InvalidArgumentError(f"area must be positive, got {area!r}")
            parsed_value = parse_number("marketValue", market_value)
            if parsed_value < 0:
                raise InvalidArgumentError(f"marketValue must not be negative, got {market_value!r}")
            coordinates = Coordinates(lat=parse_number("lat", lat), long=parse_number("long", long))

            record = LandRecord(
                land_id=land_id,
                title_number=title_number,
                land_type=land_type,
                ownership_type=ownership_type,
                owner=owner,
                owner_name=owner_name,
                area=parsed_area,
                unit=unit,
                survey_number=survey_number,
                mutation_number=mutation_number,
                location=location,
                coordinates=coordinates,
                boundary=Boundary(north=north, south=south, east=east, west=west),
                market_value=parsed_value,
                registration_date=tx.timestamp,
                doc_hash=doc_hash,
                last_updated=tx.timestamp,
                history=[
                    HistoryEntry(
                        tx_id=tx.tx_id,
                        action=HistoryAction.CREATED,
                        by=tx.caller.client_id,
                        timestamp=tx.timestamp,
                    )
                ],
            )
            self._put(ledger_unit, record)

        logger.info("Land record %s created by registrar", land_id, extra=_log_fields(tx, land_id))
        return record

    # Public
    def read_land(self, tx: TransactionContext, land_id: str) -> LandRecord:
        """Return the current record. Open to every caller.

        Raises
        ------
        RecordNotFoundError
            If nothing (or an empty value) is stored under ``land_id``.
        CorruptRecordError
            If the stored value is not a well-formed land record.
        """
        raw = self.ledger.get_state(land_id)
        if not raw:
            raise RecordNotFoundError(f"Land {land_id} not found")
        return LandRecord.from_dict(decode_json(raw))

    # Owner
    def initiate_transfer(
        self,
        tx: TransactionContext,
        land_id: str,
        proposed_buyer: str,
        price: str | float,
        agreement_hash: str,
    ) -> LandRecord:
        """Open a transfer to ``proposed_buyer``. Current owner only.

        Raises
        ------
        RecordNotFoundError
            If the record does not exist.
        UnauthorizedError
            If the caller is not the current owner.
        ConflictingStateError
            If a transfer is already pending.
        InvalidArgumentError
            If ``price`` is not a non-negative number.
        """
        caller = tx.caller.client_id
        with self.ledger.transaction(tx.tx_id, tx.timestamp) as unit:
            record = self._get(unit, land_id)
            if not is_owner(tx.caller, record):
                logger.warning(
                    "Rejected transfer of %s: %s is not the owner",
                    land_id,
                    caller,
                    extra=_log_fields(tx, land_id),
                )
                raise UnauthorizedError("Only the current owner can initiate a transfer")
            if record.is_pending_transfer:
                raise ConflictingStateError(f"Transfer already initiated for land {land_id}")

            parsed_price = parse_number("price", price)
            if parsed_price < 0:
                raise InvalidArgumentError(f"price must not be negative, got {price!r}")

            record.pending_transfer = PendingTransfer(
                proposed_buyer=proposed_buyer,
                price=parsed_price,
                agreement_hash=agreement_hash,
                initiated_by=caller,
                initiated_at=tx.timestamp,
            )
            record.legal_status = LegalStatus.PENDING_TRANSFER
            record.history.append(
                HistoryEntry(
                    tx_id=tx.tx_id,
                    action=HistoryAction.TRANSFER_INITIATED,
                    by=caller,
                    timestamp=tx.timestamp,
                )
            )
            record.last_updated = tx.timestamp
            self._put(unit, record)

        logger.info(
            "Transfer of %s to %s initiated", land_id, proposed_buyer, extra=_log_fields(tx, land_id)
        )
        return record

    # Registrar
    def approve_transfer(self, tx: TransactionContext, land_id: str) -> LandRecord:
        """Complete the pending transfer, moving ownership to the proposed buyer.

        Raises
        ------
        UnauthorizedError
            If the caller is not the registrar.
        RecordNotFoundError
            If the record does not exist.
        ConflictingStateError
            If no transfer is pending.
        """
        self._require_registrar(tx, "approve transfers")

        with self.ledger.transaction(tx.tx_id, tx.timestamp) as unit:
            record = self._get(unit, land_id)
            pending = record.pending_transfer
            if pending is None:
                raise ConflictingStateError(f"No transfer request pending for land {land_id}")

            old_owner = record.owner
            new_owner = pending.proposed_buyer
            record.previous_owners.append(
                PreviousOwner(owner=old_owner, to=format_timestamp(tx.timestamp))
            )
            record.owner = new_owner
            record.owner_name = new_owner
            record.legal_status = LegalStatus.REGISTERED
            record.current_status = CurrentStatus.OWNED
            record.pending_transfer = None
            record.history.append(
                HistoryEntry(
                    tx_id=tx.tx_id,
                    action=HistoryAction.TRANSFER_APPROVED,
                    by=tx.caller.client_id,
                    timestamp=tx.timestamp,
                    from_owner=old_owner,
                    to_owner=new_owner,
                )
            )
            record.last_updated = tx.timestamp
            self._put(unit, record)

        logger.info(
            "Transfer of %s approved: %s -> %s",
            land_id,
            old_owner,
            new_owner,
            extra=_log_fields(tx, land_id),
        )
        return record

    def _require_registrar(self, tx: TransactionContext, action: str) -> None:
        if not is_registrar(tx.caller, self.authorization):
            logger.warning(
                "Rejected %s attempt by %s (org %s)",
                action,
                tx.caller.client_id,
                tx.caller.organization_id,
            )
            raise UnauthorizedError(
                f"Only the registrar ({self.authorization.registrar_org_id}, "
                f"{self.authorization.role_attribute}={self.authorization.registrar_role}) "
                f"can {action}"
            )

    @staticmethod
    def _get(unit: LedgerTransaction, land_id: str) -> LandRecord:
        raw = unit.get_state(land_id)
        if not raw:
            raise RecordNotFoundError(f"Land {land_id} not found")
        return LandRecord.from_dict(decode_json(raw))

    @staticmethod
    def _put(unit: LedgerTransaction, record: LandRecord) -> None:
        unit.put_state(record.land_id, encode_canonical(record.to_dict()))


def _log_fields(tx: TransactionContext, land_id: str) -> dict:
    return {"extra": {"land_id": land_id, "tx_id": tx.tx_id}}
