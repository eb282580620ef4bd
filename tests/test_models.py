"""Tests for land record models."""

from datetime import datetime, timezone

import pytest

from land_registry.exceptions import CorruptRecordError, InvalidArgumentError
from land_registry.models import (
    DOC_TYPE_LAND,
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

TS = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def record() -> LandRecord:
    """A registered parcel with one history entry."""
    return LandRecord(
        land_id="LAND0042",
        title_number="TN-42",
        land_type="Agricultural",
        ownership_type="Freehold",
        owner="Aadhar_1000",
        owner_name="Meera Iyer",
        area=2.5,
        unit="acre",
        survey_number="SV-42",
        mutation_number="MUT-42",
        location="Nashik",
        coordinates=Coordinates(lat=19.9975, long=73.7898),
        boundary=Boundary(north="Road", south="Canal", east="Plot 3", west="Plot 5"),
        market_value=1200000,
        registration_date=TS,
        doc_hash="sha256:42",
        last_updated=TS,
        history=[HistoryEntry(tx_id="TX1", action=HistoryAction.CREATED, by="Registrar_001", timestamp=TS)],
    )


class TestLandRecordDefaults:
    """Tests for default field values."""

    def test_defaults(self, record: LandRecord) -> None:
        assert record.legal_status == LegalStatus.REGISTERED
        assert record.current_status == CurrentStatus.OWNED
        assert record.previous_owners == []
        assert record.pending_transfer is None
        assert record.doc_type == DOC_TYPE_LAND
        assert not record.is_pending_transfer


class TestLandRecordToDict:
    """Tests for the persisted layout."""

    def test_camel_case_keys(self, record: LandRecord) -> None:
        data = record.to_dict()
        assert data["docType"] == "land"
        assert data["landId"] == "LAND0042"
        assert data["ownerName"] == "Meera Iyer"
        assert data["marketValue"] == 1200000
        assert data["coordinates"] == {"lat": 19.9975, "long": 73.7898}
        assert data["boundary"]["west"] == "Plot 5"
        assert data["legalStatus"] == "REGISTERED"
        assert data["registrationDate"] == "2025-01-01T12:00:00.000Z"
        assert data["pendingTransfer"] is None

    def test_history_entry_omits_unset_owners(self, record: LandRecord) -> None:
        entry = record.to_dict()["history"][0]
        assert entry == {
            "txId": "TX1",
            "action": "CREATED",
            "by": "Registrar_001",
            "timestamp": "2025-01-01T12:00:00.000Z",
        }

    def test_history_entry_with_owners(self) -> None:
        entry = HistoryEntry(
            tx_id="TX2",
            action=HistoryAction.TRANSFER_APPROVED,
            by="Registrar_001",
            timestamp=TS,
            from_owner="A",
            to_owner="B",
        )
        assert entry.to_dict()["from"] == "A"
        assert entry.to_dict()["to"] == "B"

    def test_previous_owner_from_is_optional(self) -> None:
        assert PreviousOwner(owner="A", to="2025").to_dict() == {"owner": "A", "to": "2025"}
        assert PreviousOwner(owner="A", to="2025", from_="2015").to_dict()["from"] == "2015"


class TestLandRecordFromDict:
    """Tests for rebuilding records from stored JSON."""

    def test_round_trip(self, record: LandRecord) -> None:
        record.pending_transfer = PendingTransfer(
            proposed_buyer="Aadhar_2000",
            price=900000,
            agreement_hash="sha256:agree",
            initiated_by="Aadhar_1000",
            initiated_at=TS,
        )
        record.legal_status = LegalStatus.PENDING_TRANSFER
        record.previous_owners.append(PreviousOwner(owner="Aadhar_0001", to="2020-01-01", from_="2010-01-01"))

        rebuilt = LandRecord.from_dict(record.to_dict())

        assert rebuilt == record

    def test_missing_doc_type_defaults_to_land(self, record: LandRecord) -> None:
        data = record.to_dict()
        del data["docType"]
        assert LandRecord.from_dict(data).doc_type == "land"

    def test_missing_field(self, record: LandRecord) -> None:
        data = record.to_dict()
        del data["owner"]
        with pytest.raises(CorruptRecordError, match="Malformed land record"):
            LandRecord.from_dict(data)

    def test_unknown_status(self, record: LandRecord) -> None:
        data = record.to_dict()
        data["legalStatus"] = "SEIZED"
        with pytest.raises(CorruptRecordError):
            LandRecord.from_dict(data)

    def test_pending_status_without_transfer(self, record: LandRecord) -> None:
        data = record.to_dict()
        data["legalStatus"] = "PENDING_TRANSFER"
        with pytest.raises(CorruptRecordError, match="pendingTransfer is null"):
            LandRecord.from_dict(data)

    def test_bad_timestamp(self, record: LandRecord) -> None:
        data = record.to_dict()
        data["lastUpdated"] = "yesterday"
        with pytest.raises(CorruptRecordError, match="Invalid timestamp"):
            LandRecord.from_dict(data)


class TestCheckInvariants:
    """Tests for the pending-transfer invariant."""

    def test_transfer_without_pending_status(self, record: LandRecord) -> None:
        record.pending_transfer = PendingTransfer(
            proposed_buyer="B", price=1, agreement_hash="h", initiated_by="A", initiated_at=TS
        )
        with pytest.raises(InvalidArgumentError, match="pendingTransfer is set"):
            record.check_invariants()

    def test_consistent_record_passes(self, record: LandRecord) -> None:
        record.check_invariants()
