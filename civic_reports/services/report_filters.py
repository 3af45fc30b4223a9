"""
Filtering and aggregate counts over a report list.

Everything here is a pure read: the input sequence is never modified and
no counter is kept between calls.
"""

from typing import Sequence, Tuple, Union

from civic_reports.core.exceptions import ValidationError
from civic_reports.models.report import Report, ReportStats
from civic_reports.services.status_workflow import ReportStatus, StatusWorkflowEngine

ALL_STATUSES = "all"

StatusSelector = Union[ReportStatus, str]


def parse_status_selector(selector: StatusSelector) -> Union[ReportStatus, str]:
    """
    Normalize a selector to ALL_STATUSES or a ReportStatus.

    Raises:
        ValidationError: If the selector names no known status
    """
    if isinstance(selector, ReportStatus):
        return selector
    if selector is None or str(selector).strip().lower() == ALL_STATUSES:
        return ALL_STATUSES
    try:
        return ReportStatus(str(selector).strip())
    except ValueError:
        raise ValidationError(["status"], f"Unknown status filter: {selector}")


def filter_by_status(reports: Sequence[Report], selector: StatusSelector = ALL_STATUSES) -> Tuple[Report, ...]:
    """Subsequence of `reports` matching the selector, in the same order."""
    wanted = parse_status_selector(selector)
    if wanted == ALL_STATUSES:
        return tuple(reports)
    return tuple(report for report in reports if report.status == wanted)


def count_total(reports: Sequence[Report]) -> int:
    return len(reports)


def count_resolved(reports: Sequence[Report]) -> int:
    return sum(1 for report in reports if report.status == ReportStatus.RESOLVED)


def compute_stats(reports: Sequence[Report]) -> ReportStats:
    by_status = {status.value: 0 for status in StatusWorkflowEngine.ordered_statuses()}
    for report in reports:
        by_status[report.status.value] += 1
    return ReportStats(
        total=count_total(reports),
        resolved=count_resolved(reports),
        by_status=by_status,
    )
