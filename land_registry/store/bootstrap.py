"""Records written by ``InitLedger`` when the registry is first deployed."""

from land_registry.context import TransactionContext
from land_registry.models import (
    Boundary,
    Coordinates,
    HistoryAction,
    HistoryEntry,
    LandRecord,
    PreviousOwner,
)

BOOTSTRAP_REGISTRAR_ID = "Registrar_001"


def default_bootstrap_records(tx: TransactionContext) -> list[LandRecord]:
    """Return the seed parcel registered at deployment, stamped with ``tx``."""
    return [
        LandRecord(
            land_id="LAND0001",
            title_number="TN-123456",
            land_type="Residential",
            ownership_type="Freehold",
            owner="Aadhar_1234",
            owner_name="Akhil Kumar",
            area=1200,
            unit="sq.ft",
            survey_number="SV-9876",
            mutation_number="MUT-9087",
            location="Village X, Tehsil Y, Kanpur Nagar, Uttar Pradesh, 208002",
            coordinates=Coordinates(lat=26.4511, long=80.3469),
            boundary=Boundary(north="Road", south="River", east="Plot 12", west="Canal"),
            market_value=4000000,
            registration_date=tx.timestamp,
            doc_hash="sha256:abcdef...",
            last_updated=tx.timestamp,
            previous_owners=[PreviousOwner(owner="Aadhar_1111", from_="2015-01-01", to="2025-11-04")],
            history=[
                HistoryEntry(
                    tx_id=tx.tx_id,
                    action=HistoryAction.CREATED,
                    by=BOOTSTRAP_REGISTRAR_ID,
                    timestamp=tx.timestamp,
                )
            ],
        )
    ]
