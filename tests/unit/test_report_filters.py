"""Unit tests for status filtering and derived counts."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from civic_reports.core.exceptions import ValidationError
from civic_reports.models.report import Location, Report
from civic_reports.services import report_filters
from civic_reports.services.status_workflow import ReportStatus


def make_report(report_id: str, status: ReportStatus) -> Report:
    return Report(
        id=report_id,
        photo_reference=f"file:///{report_id}.jpg",
        location=Location(latitude=0.0, longitude=0.0),
        description=f"issue {report_id}",
        created_at=datetime(2024, 6, 10, tzinfo=timezone.utc),
        status=status,
    )


REPORTS = (
    make_report("e", ReportStatus.RESOLVED),
    make_report("d", ReportStatus.REPORTED),
    make_report("c", ReportStatus.RESOLVED),
    make_report("b", ReportStatus.IN_PROGRESS),
    make_report("a", ReportStatus.REPORTED),
)


class TestFilterByStatus:
    def test_all_returns_full_list_in_order(self):
        assert report_filters.filter_by_status(REPORTS, "all") == REPORTS
        assert report_filters.filter_by_status(REPORTS) == REPORTS

    def test_specific_status_keeps_relative_order(self):
        resolved = report_filters.filter_by_status(REPORTS, ReportStatus.RESOLVED)
        assert [r.id for r in resolved] == ["e", "c"]

    def test_string_selector(self):
        reported = report_filters.filter_by_status(REPORTS, "Reported")
        assert [r.id for r in reported] == ["d", "a"]

    def test_status_with_no_matches(self):
        assert report_filters.filter_by_status(REPORTS, ReportStatus.ACKNOWLEDGED) == ()

    def test_unknown_selector_is_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            report_filters.filter_by_status(REPORTS, "Closed")
        assert excinfo.value.fields == ["status"]

    def test_input_is_not_modified(self):
        reports = list(REPORTS)
        report_filters.filter_by_status(reports, ReportStatus.REPORTED)
        assert reports == list(REPORTS)


class TestCounts:
    def test_counts_match_list(self):
        assert report_filters.count_total(REPORTS) == 5
        assert report_filters.count_resolved(REPORTS) == 2

    def test_stats_include_every_status(self):
        stats = report_filters.compute_stats(REPORTS)
        assert stats.total == 5
        assert stats.resolved == 2
        assert stats.by_status == {
            "Reported": 2,
            "Acknowledged": 0,
            "In Progress": 1,
            "Resolved": 2,
        }

    def test_empty_list(self):
        stats = report_filters.compute_stats(())
        assert stats.total == 0
        assert stats.resolved == 0
        assert sum(stats.by_status.values()) == 0
