"""
Error taxonomy for the report store.

Every failure of a store operation is reported synchronously to the caller
as one of these. Nothing here is retried internally.
"""

from typing import Iterable, List, Optional


class ReportStoreError(Exception):
    """Base class for all report store failures."""


class ValidationError(ReportStoreError):
    """A required input to submit/assign was missing, empty or out of range."""

    def __init__(self, fields: Iterable[str], message: Optional[str] = None):
        self.fields: List[str] = list(fields)
        super().__init__(message or f"Missing or invalid field(s): {', '.join(self.fields)}")


class NotFoundError(ReportStoreError):
    """An operation referenced a report id that is not in the store."""

    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Report {report_id} not found")


class PersistenceError(ReportStoreError):
    """The underlying key-value engine failed to read or write."""


class CaptureError(Exception):
    """
    Raised by photo/location capture collaborators.
    The store never interprets it; a failed capture simply yields no input.
    """
