"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from land_registry.context import CallerIdentity, TransactionContext
from land_registry.contract import LandContract
from land_registry.history import HistoryReader
from land_registry.ledger import InMemoryLedger
from land_registry.query import QueryService
from land_registry.store import RecordStore

START = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


class TxFactory:
    """Sequential tx ids and timestamps one second apart."""

    def __init__(self, start: datetime = START) -> None:
        self.now = start
        self.counter = 0

    def __call__(self, caller: CallerIdentity) -> TransactionContext:
        self.counter += 1
        self.now += timedelta(seconds=1)
        return TransactionContext(caller=caller, tx_id=f"TX{self.counter:05d}", timestamp=self.now)


@pytest.fixture
def tx() -> TxFactory:
    """Deterministic transaction contexts."""
    return TxFactory()


@pytest.fixture
def registrar() -> CallerIdentity:
    """Government registrar caller."""
    return CallerIdentity(client_id="Registrar_001", organization_id="Org1MSP", attributes={"role": "gov"})


@pytest.fixture
def owner() -> CallerIdentity:
    """Owner of the sample parcel."""
    return CallerIdentity(client_id="Aadhar_5555", organization_id="Org2MSP")


@pytest.fixture
def buyer() -> CallerIdentity:
    """Prospective buyer of the sample parcel."""
    return CallerIdentity(client_id="Aadhar_7777", organization_id="Org2MSP")


@pytest.fixture
def ledger() -> InMemoryLedger:
    """Fresh in-memory ledger for each test."""
    return InMemoryLedger()


@pytest.fixture
def store(ledger: InMemoryLedger) -> RecordStore:
    return RecordStore(ledger)


@pytest.fixture
def history_reader(ledger: InMemoryLedger) -> HistoryReader:
    return HistoryReader(ledger)


@pytest.fixture
def queries(ledger: InMemoryLedger) -> QueryService:
    return QueryService(ledger)


@pytest.fixture
def contract(ledger: InMemoryLedger) -> LandContract:
    return LandContract.from_ledger(ledger)


@pytest.fixture
def land_args() -> dict[str, str]:
    """CreateLand arguments for parcel LAND0010, as the transport sends them."""
    return {
        "land_id": "LAND0010",
        "title_number": "TN-111",
        "land_type": "Residential",
        "ownership_type": "Freehold",
        "owner": "Aadhar_5555",
        "owner_name": "Rohit Verma",
        "area": "1500",
        "unit": "sq.ft",
        "survey_number": "SV-0001",
        "mutation_number": "MUT-1001",
        "location": "Kanpur",
        "lat": "26.4511",
        "long": "80.3469",
        "north": "North Boundary",
        "south": "South Boundary",
        "east": "East Boundary",
        "west": "West Boundary",
        "market_value": "5000000",
        "doc_hash": "sha256:test",
    }
