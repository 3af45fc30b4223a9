"""Shared fixtures: in-memory and failure-injecting storage engines, store factory."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional

import pytest

from civic_reports.config.storage import InMemoryKeyValueStore, KeyValueStore
from civic_reports.services.persistence import ReportPersistenceAdapter
from civic_reports.services.report_store import ReportStore

REPORTS_KEY = "CIVIC_REPORTS"


class FlakyKeyValueStore(KeyValueStore):
    """In-memory engine whose reads/writes can be switched to fail."""

    name = "flaky"

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.inner = InMemoryKeyValueStore(initial)
        self.fail_get = False
        self.fail_set = False
        self.set_calls = 0

    def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise OSError("storage read failed")
        return self.inner.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        if self.fail_set:
            raise OSError("storage write failed")
        self.inner.set(key, value)


@pytest.fixture
def flaky_storage() -> FlakyKeyValueStore:
    return FlakyKeyValueStore()


@pytest.fixture
def make_store():
    def _make(storage: Optional[KeyValueStore] = None, **kwargs) -> ReportStore:
        adapter = ReportPersistenceAdapter(storage or InMemoryKeyValueStore(), REPORTS_KEY)
        return ReportStore(adapter, **kwargs)

    return _make


@pytest.fixture
def fixed_clock():
    moment = datetime(2024, 6, 10, 8, 13, 20, tzinfo=timezone.utc)
    return lambda: moment
