"""
Report endpoints - the local presentation surface.

Each endpoint is one UI event. Routes hold no state: they call the report
store and return its snapshot. Store errors are mapped to HTTP responses by
the handlers registered in main.py.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from civic_reports.models.report import DepartmentAssignRequest, Report, ReportCreate, ReportStats
from civic_reports.services.report_filters import ALL_STATUSES
from civic_reports.services.report_store import ReportStore, get_report_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


def _serialize(report: Report) -> dict:
    return report.to_storage_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_report(report: ReportCreate, store: ReportStore = Depends(get_report_store)):
    """
    Submit a new citizen report.
    Requires photoReference, location and description.
    """
    logger.info("POST /reports")
    created = await store.submit(report.photo_reference, report.location, report.description)
    return _serialize(created)


@router.get("")
async def list_reports(
    status_filter: Optional[str] = Query(ALL_STATUSES, alias="status", description="'all' or a status value"),
    store: ReportStore = Depends(get_report_store),
) -> List[dict]:
    """Reports matching the status filter, newest first."""
    return [_serialize(report) for report in store.filter_by_status(status_filter)]


@router.get("/stats", response_model=ReportStats)
async def report_stats(store: ReportStore = Depends(get_report_store)):
    return store.stats()


@router.get("/{report_id}")
async def get_report(report_id: str, store: ReportStore = Depends(get_report_store)):
    return _serialize(store.get(report_id))


@router.post("/{report_id}/advance")
async def advance_report_status(report_id: str, store: ReportStore = Depends(get_report_store)):
    """Move the report one step forward: Reported → Acknowledged → In Progress → Resolved."""
    return _serialize(await store.advance_status(report_id))


@router.put("/{report_id}/department")
async def assign_report_department(
    report_id: str,
    request: DepartmentAssignRequest,
    store: ReportStore = Depends(get_report_store),
):
    return _serialize(await store.assign_department(report_id, request.department))


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_report(report_id: str, store: ReportStore = Depends(get_report_store)):
    await store.remove(report_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_reports(store: ReportStore = Depends(get_report_store)):
    """Delete every report."""
    await store.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
