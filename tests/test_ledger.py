"""Tests for the in-memory ledger."""

from datetime import datetime, timezone

import pytest

from land_registry.exceptions import CommitConflictError, InvalidArgumentError, StoreUnavailableError
from land_registry.ledger import InMemoryLedger, ResultsIterator

TS = datetime(2025, 1, 1, tzinfo=timezone.utc)


def write(ledger: InMemoryLedger, tx_id: str, key: str, value: bytes) -> None:
    with ledger.transaction(tx_id, TS) as unit:
        unit.put_state(key, value)


class TestTransactions:
    """Tests for units of work."""

    def test_missing_key_reads_empty(self, ledger: InMemoryLedger) -> None:
        assert ledger.get_state("nope") == b""

    def test_write_visible_after_commit(self, ledger: InMemoryLedger) -> None:
        with ledger.transaction("TX1", TS) as unit:
            unit.put_state("k", b"v1")
            assert ledger.get_state("k") == b""
            assert unit.get_state("k") == b"v1"
        assert ledger.get_state("k") == b"v1"

    def test_exception_discards_writes(self, ledger: InMemoryLedger) -> None:
        with pytest.raises(RuntimeError):
            with ledger.transaction("TX1", TS) as unit:
                unit.put_state("k", b"v1")
                raise RuntimeError("boom")
        assert ledger.get_state("k") == b""
        assert ledger.keys() == []

    def test_stale_read_conflicts(self, ledger: InMemoryLedger) -> None:
        write(ledger, "TX1", "k", b"v1")

        with pytest.raises(CommitConflictError, match="read k at version 1"):
            with ledger.transaction("TX2", TS) as first:
                assert first.get_state("k") == b"v1"
                write(ledger, "TX3", "k", b"v2")
                first.put_state("k", b"from-first")

        assert ledger.get_state("k") == b"v2"

    def test_read_of_absent_key_conflicts_with_concurrent_create(self, ledger: InMemoryLedger) -> None:
        with pytest.raises(CommitConflictError):
            with ledger.transaction("TX1", TS) as unit:
                assert unit.get_state("k") == b""
                write(ledger, "TX2", "k", b"other")
                unit.put_state("k", b"mine")
        assert ledger.get_state("k") == b"other"

    def test_read_only_unit_never_conflicts(self, ledger: InMemoryLedger) -> None:
        write(ledger, "TX1", "k", b"v1")
        with ledger.transaction("TX2", TS) as unit:
            unit.get_state("k")
            write(ledger, "TX3", "k", b"v2")

    def test_duplicate_tx_id_rejected(self, ledger: InMemoryLedger) -> None:
        write(ledger, "TX1", "a", b"1")
        with pytest.raises(CommitConflictError, match="already committed"):
            write(ledger, "TX1", "b", b"2")
        assert ledger.get_state("b") == b""

    def test_empty_value_rejected(self, ledger: InMemoryLedger) -> None:
        with pytest.raises(InvalidArgumentError):
            write(ledger, "TX1", "k", b"")

    def test_closed_ledger_unavailable(self, ledger: InMemoryLedger) -> None:
        ledger.close()
        with pytest.raises(StoreUnavailableError):
            ledger.get_state("k")
        with pytest.raises(StoreUnavailableError):
            with ledger.transaction("TX1", TS):
                pass


class TestHistory:
    """Tests for per-key history."""

    def test_versions_in_commit_order(self, ledger: InMemoryLedger) -> None:
        for i in range(3):
            write(ledger, f"TX{i}", "k", f"v{i}".encode())
        write(ledger, "TX9", "other", b"x")

        with ledger.get_history_for_key("k") as versions:
            items = list(versions)

        assert [v.tx_id for v in items] == ["TX0", "TX1", "TX2"]
        assert [v.value for v in items] == [b"v0", b"v1", b"v2"]
        assert all(not v.is_delete and v.timestamp == TS for v in items)

    def test_unknown_key_has_no_history(self, ledger: InMemoryLedger) -> None:
        with ledger.get_history_for_key("nope") as versions:
            assert list(versions) == []

    def test_cursor_released(self, ledger: InMemoryLedger) -> None:
        write(ledger, "TX1", "k", b"v")
        with ledger.get_history_for_key("k") as versions:
            assert ledger.open_iterators == 1
            next(versions)
        assert ledger.open_iterators == 0
        assert versions.closed


class TestQuery:
    """Tests for selector queries."""

    def test_equality_match(self, ledger: InMemoryLedger) -> None:
        write(ledger, "TX1", "a", b'{"docType":"land","owner":"X"}')
        write(ledger, "TX2", "b", b'{"docType":"land","owner":"Y"}')
        write(ledger, "TX3", "c", b'{"docType":"deed","owner":"X"}')
        write(ledger, "TX4", "d", b"not json")

        with ledger.get_query_result({"docType": "land", "owner": "X"}) as results:
            hits = list(results)

        assert [h.key for h in hits] == ["a"]

    def test_no_partial_match(self, ledger: InMemoryLedger) -> None:
        write(ledger, "TX1", "a", b'{"docType":"land","location":"Kanpur Nagar"}')
        with ledger.get_query_result({"docType": "land", "location": "Kanpur"}) as results:
            assert list(results) == []

    def test_empty_selector_rejected(self, ledger: InMemoryLedger) -> None:
        with pytest.raises(InvalidArgumentError):
            ledger.get_query_result({})

    def test_cursor_released_on_error(self, ledger: InMemoryLedger) -> None:
        write(ledger, "TX1", "a", b'{"docType":"land"}')
        with pytest.raises(RuntimeError):
            with ledger.get_query_result({"docType": "land"}):
                raise RuntimeError("consumer failed")
        assert ledger.open_iterators == 0


class TestResultsIterator:
    """Tests for the closeable cursor."""

    def test_close_is_idempotent(self) -> None:
        calls = []
        cursor = ResultsIterator([1, 2], on_close=lambda: calls.append(1))
        cursor.close()
        cursor.close()
        assert calls == [1]

    def test_closed_cursor_yields_nothing(self) -> None:
        cursor = ResultsIterator([1, 2, 3])
        assert next(cursor) == 1
        cursor.close()
        assert list(cursor) == []
