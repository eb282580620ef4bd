"""Land record models.

Attributes are snake_case in Python; :meth:`LandRecord.to_dict` and
:meth:`LandRecord.from_dict` map them to the camelCase keys persisted in
the ledger.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from land_registry.exceptions import CorruptRecordError, InvalidArgumentError
from land_registry.models.enums import DOC_TYPE_LAND, CurrentStatus, HistoryAction, LegalStatus
from land_registry.serialization import Number, format_timestamp, parse_timestamp, serialize_value


@dataclass
class Coordinates:
    """Parcel centroid in decimal degrees."""

    lat: Number
    long: Number


@dataclass
class Boundary:
    """What lies on each side of the parcel."""

    north: str
    south: str
    east: str
    west: str


@dataclass
class PreviousOwner:
    """One former owner. ``from_`` is unknown for owners replaced by a transfer."""

    owner: str
    to: str
    from_: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"owner": self.owner, "to": self.to}
        if self.from_ is not None:
            result["from"] = self.from_
        return result


@dataclass
class PendingTransfer:
    """Open proposal to change ownership, awaiting registrar approval."""

    proposed_buyer: str
    price: Number
    agreement_hash: str
    initiated_by: str
    initiated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "proposedBuyer": self.proposed_buyer,
            "price": serialize_value(self.price),
            "agreementHash": self.agreement_hash,
            "initiatedBy": self.initiated_by,
            "initiatedAt": format_timestamp(self.initiated_at),
        }


@dataclass
class HistoryEntry:
    """Immutable audit record of one state change."""

    tx_id: str
    action: HistoryAction
    by: str
    timestamp: datetime
    from_owner: str | None = None
    to_owner: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "txId": self.tx_id,
            "action": self.action.value,
            "by": self.by,
            "timestamp": format_timestamp(self.timestamp),
        }
        if self.from_owner is not None:
            result["from"] = self.from_owner
        if self.to_owner is not None:
            result["to"] = self.to_owner
        return result


@dataclass
class LandRecord:
    """A registered land parcel and its audit trail."""

    land_id: str
    title_number: str
    land_type: str
    ownership_type: str
    owner: str  # Caller identity of the current owner
    owner_name: str
    area: Number
    unit: str
    survey_number: str
    mutation_number: str
    location: str
    coordinates: Coordinates
    boundary: Boundary
    market_value: Number
    registration_date: datetime
    doc_hash: str
    last_updated: datetime
    legal_status: LegalStatus = LegalStatus.REGISTERED
    current_status: CurrentStatus = CurrentStatus.OWNED
    previous_owners: list[PreviousOwner] = field(default_factory=list)
    pending_transfer: PendingTransfer | None = None
    history: list[HistoryEntry] = field(default_factory=list)
    doc_type: str = DOC_TYPE_LAND

    @property
    def is_pending_transfer(self) -> bool:
        return self.legal_status == LegalStatus.PENDING_TRANSFER

    def check_invariants(self) -> None:
        """Raise if ``legal_status`` and ``pending_transfer`` disagree."""
        if self.is_pending_transfer != (self.pending_transfer is not None):
            raise InvalidArgumentError(
                f"Land {self.land_id} has legalStatus={self.legal_status.value} "
                f"but pendingTransfer is {'set' if self.pending_transfer else 'null'}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted JSON layout."""
        return {
            "docType": self.doc_type,
            "landId": self.land_id,
            "titleNumber": self.title_number,
            "landType": self.land_type,
            "ownershipType": self.ownership_type,
            "owner": self.owner,
            "ownerName": self.owner_name,
            "area": serialize_value(self.area),
            "unit": self.unit,
            "surveyNumber": self.survey_number,
            "mutationNumber": self.mutation_number,
            "location": self.location,
            "coordinates": {
                "lat": serialize_value(self.coordinates.lat),
                "long": serialize_value(self.coordinates.long),
            },
            "boundary": {
                "north": self.boundary.north,
                "south": self.boundary.south,
                "east": self.boundary.east,
                "west": self.boundary.west,
            },
            "marketValue": serialize_value(self.market_value),
            "registrationDate": format_timestamp(self.registration_date),
            "legalStatus": self.legal_status.value,
            "currentStatus": self.current_status.value,
            "docHash": self.doc_hash,
            "previousOwners": [p.to_dict() for p in self.previous_owners],
            "pendingTransfer": self.pending_transfer.to_dict() if self.pending_transfer else None,
            "history": [h.to_dict() for h in self.history],
            "lastUpdated": format_timestamp(self.last_updated),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LandRecord":
        """Build a record from its persisted JSON layout.

        Raises
        ------
        CorruptRecordError
            If a required key is missing, an enum value is unknown, or the
            pending-transfer invariant does not hold.
        """
        try:
            pending = data.get("pendingTransfer")
            record = cls(
                land_id=data["landId"],
                title_number=data["titleNumber"],
                land_type=data["landType"],
                ownership_type=data["ownershipType"],
                owner=data["owner"],
                owner_name=data["ownerName"],
                area=data["area"],
                unit=data["unit"],
                survey_number=data["surveyNumber"],
                mutation_number=data["mutationNumber"],
                location=data["location"],
                coordinates=Coordinates(**data["coordinates"]),
                boundary=Boundary(**data["boundary"]),
                market_value=data["marketValue"],
                registration_date=parse_timestamp(data["registrationDate"]),
                doc_hash=data["docHash"],
                last_updated=parse_timestamp(data["lastUpdated"]),
                legal_status=LegalStatus(data["legalStatus"]),
                current_status=CurrentStatus(data["currentStatus"]),
                previous_owners=[
                    PreviousOwner(owner=p["owner"], to=p["to"], from_=p.get("from"))
                    for p in data.get("previousOwners", [])
                ],
                pending_transfer=_pending_from_dict(pending) if pending else None,
                history=[_history_from_dict(h) for h in data.get("history", [])],
                doc_type=data.get("docType", DOC_TYPE_LAND),
            )
            record.check_invariants()
        except (KeyError, TypeError, ValueError, InvalidArgumentError) as exc:
            raise CorruptRecordError(f"Malformed land record: {exc!r}") from exc
        return record


def _pending_from_dict(data: dict[str, Any]) -> PendingTransfer:
    return PendingTransfer(
        proposed_buyer=data["proposedBuyer"],
        price=data["price"],
        agreement_hash=data["agreementHash"],
        initiated_by=data["initiatedBy"],
        initiated_at=parse_timestamp(data["initiatedAt"]),
    )


def _history_from_dict(data: dict[str, Any]) -> HistoryEntry:
    return HistoryEntry(
        tx_id=data["txId"],
        action=HistoryAction(data["action"]),
        by=data["by"],
        timestamp=parse_timestamp(data["timestamp"]),
        from_owner=data.get("from"),
        to_owner=data.get("to"),
    )
