"""Unit tests for ReportPersistenceAdapter."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from civic_reports.config.storage import InMemoryKeyValueStore
from civic_reports.core.exceptions import PersistenceError
from civic_reports.models.report import Location, Report
from civic_reports.services.persistence import ReportPersistenceAdapter
from civic_reports.services.status_workflow import ReportStatus

KEY = "CIVIC_REPORTS"


def make_reports() -> list[Report]:
    return [
        Report(
            id="2",
            photo_reference="file:///b.jpg",
            location=Location(latitude=-33.8688, longitude=151.2093),
            description="broken bench",
            created_at=datetime(2024, 6, 11, 9, 30, 15, 123000, tzinfo=timezone.utc),
            status=ReportStatus.IN_PROGRESS,
            department="Parks",
        ),
        Report(
            id="1",
            photo_reference="file:///a.jpg",
            location=Location(latitude=1.0, longitude=2.0),
            description="pothole",
            created_at=datetime(2024, 6, 10, tzinfo=timezone.utc),
            status=ReportStatus.REPORTED,
            department="unassigned",
        ),
    ]


def test_absent_entry_loads_as_empty_list() -> None:
    adapter = ReportPersistenceAdapter(InMemoryKeyValueStore(), KEY)
    assert adapter.load() == []


def test_round_trip_preserves_order_and_fields() -> None:
    adapter = ReportPersistenceAdapter(InMemoryKeyValueStore(), KEY)
    reports = make_reports()

    adapter.save(reports)

    assert adapter.load() == reports


def test_round_trip_of_empty_list() -> None:
    storage = InMemoryKeyValueStore()
    adapter = ReportPersistenceAdapter(storage, KEY)

    adapter.save([])

    assert storage.get(KEY) == "[]"
    assert adapter.load() == []


def test_whole_list_is_written_in_one_entry() -> None:
    storage = InMemoryKeyValueStore()
    ReportPersistenceAdapter(storage, KEY).save(make_reports())

    stored = json.loads(storage.get(KEY))
    assert [item["id"] for item in stored] == ["2", "1"]
    assert stored[0]["photoReference"] == "file:///b.jpg"
    assert stored[0]["status"] == "In Progress"


@pytest.mark.parametrize("raw", ["not json", '{"id": "1"}', '[{"id": "1"}]'])
def test_corrupt_entry_raises_persistence_error(raw: str) -> None:
    adapter = ReportPersistenceAdapter(InMemoryKeyValueStore({KEY: raw}), KEY)
    with pytest.raises(PersistenceError):
        adapter.load()


def test_engine_failures_are_wrapped(flaky_storage) -> None:
    adapter = ReportPersistenceAdapter(flaky_storage, KEY)

    flaky_storage.fail_set = True
    with pytest.raises(PersistenceError) as excinfo:
        adapter.save(make_reports())
    assert isinstance(excinfo.value.__cause__, OSError)

    flaky_storage.fail_get = True
    with pytest.raises(PersistenceError):
        adapter.load()


@pytest.mark.parametrize("raw", [[1, 2], {"id": "1"}, 42])
def test_non_text_entry_raises_persistence_error(raw) -> None:
    adapter = ReportPersistenceAdapter(InMemoryKeyValueStore({KEY: raw}), KEY)
    with pytest.raises(PersistenceError, match="expected text"):
        adapter.load()


def test_repeated_ids_are_rejected() -> None:
    storage = InMemoryKeyValueStore()
    adapter = ReportPersistenceAdapter(storage, KEY)
    first, second = make_reports()
    adapter.save([first, second, first])

    with pytest.raises(PersistenceError, match="duplicate id"):
        adapter.load()
