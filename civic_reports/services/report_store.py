"""
Report store - the single owner of the report list.

DESIGN NOTE:
- The in-memory list always equals the last successfully persisted list
- Every mutation: read current -> compute next -> persist next -> publish next
- If persistence fails nothing is published and the error reaches the caller
- Mutations are serialized by one asyncio.Lock; the persistence write is the
  only await point while the lock is held
- A cancelled mutation still waits for its write and publishes it if it landed
- Readers get immutable snapshots (tuples of frozen Report models)
"""

import asyncio
import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional, Tuple, Union

from civic_reports.core.exceptions import NotFoundError, PersistenceError, ValidationError
from civic_reports.models.report import UNASSIGNED_DEPARTMENT, Location, Report, ReportStats
from civic_reports.services import report_filters
from civic_reports.services.persistence import ReportPersistenceAdapter
from civic_reports.services.status_workflow import StatusWorkflowEngine
from civic_reports.services.submission_draft import SubmissionDraft
from civic_reports.utils.location import build_location, format_location

logger = logging.getLogger(__name__)

ReportList = Tuple[Report, ...]
LocationInput = Union[Location, Tuple[float, float], dict, None]


def generate_report_id() -> str:
    """Millisecond timestamp plus a random suffix, e.g. '1718000000000-3f2a9c1d'."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_location(location: LocationInput) -> Optional[Location]:
    if location is None or isinstance(location, Location):
        return location
    if isinstance(location, dict):
        return build_location(location.get("latitude"), location.get("longitude"))
    latitude, longitude = location
    return build_location(latitude, longitude)


def _index_of(reports: ReportList, report_id: str) -> int:
    for index, report in enumerate(reports):
        if report.id == report_id:
            return index
    raise NotFoundError(report_id)


class ReportStore:
    """
    Authoritative, newest-first list of reports.

    Args:
        adapter: Whole-list load/save over the key-value engine
        clock: Returns the creation timestamp for new reports
        id_factory: Returns candidate ids; retried until unique in the list
    """

    def __init__(
        self,
        adapter: ReportPersistenceAdapter,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = generate_report_id,
    ):
        self._adapter = adapter
        self._clock = clock
        self._id_factory = id_factory
        self._reports: ReportList = ()
        self._lock = asyncio.Lock()
        self._initialized = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> ReportList:
        """
        Load the persisted list into memory. Safe to call more than once:
        later calls return the current snapshot without reloading.
        A failed or corrupt load degrades to an empty list.
        """
        async with self._lock:
            if self._initialized:
                return self._reports
            try:
                loaded = await asyncio.to_thread(self._adapter.load)
                self._reports = tuple(loaded)
                logger.info(f"Report store initialized with {len(self._reports)} report(s)")
            except PersistenceError as e:
                logger.warning(f"Could not load persisted reports, starting empty: {e}")
                self._reports = ()
            self._initialized = True
            return self._reports

    @property
    def initialized(self) -> bool:
        return self._initialized

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def reports(self) -> ReportList:
        """Snapshot of the last committed list, newest first."""
        return self._reports

    def get(self, report_id: str) -> Report:
        return self._reports[_index_of(self._reports, report_id)]

    def filter_by_status(self, selector: report_filters.StatusSelector = report_filters.ALL_STATUSES) -> ReportList:
        return report_filters.filter_by_status(self._reports, selector)

    def count_total(self) -> int:
        return report_filters.count_total(self._reports)

    def count_resolved(self) -> int:
        return report_filters.count_resolved(self._reports)

    def stats(self) -> ReportStats:
        return report_filters.compute_stats(self._reports)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def _commit(self, compute: Callable[[ReportList], ReportList]) -> ReportList:
        async with self._lock:
            updated = compute(self._reports)
            save = asyncio.ensure_future(asyncio.to_thread(self._adapter.save, updated))
            try:
                await asyncio.shield(save)
            except asyncio.CancelledError:
                # The write thread cannot be stopped: hold the lock until it
                # finishes and publish whatever it committed.
                await asyncio.wait([save])
                if not save.cancelled() and save.exception() is None:
                    self._reports = updated
                raise
            self._reports = updated
            return updated

    def _new_id(self, existing: Iterable[Report]) -> str:
        taken = {report.id for report in existing}
        report_id = self._id_factory()
        while report_id in taken:
            report_id = self._id_factory()
        return report_id

    async def submit(
        self,
        photo_reference: Optional[str],
        location: LocationInput,
        description: Optional[str],
    ) -> Report:
        """
        Create a report and prepend it to the list.

        Raises:
            ValidationError: Listing every missing, empty or out-of-range input
            PersistenceError: If the list could not be saved
        """
        invalid = []
        if not isinstance(photo_reference, str) or not photo_reference.strip():
            invalid.append("photoReference")
        try:
            coerced_location = _coerce_location(location)
            if coerced_location is None:
                invalid.append("location")
        except ValidationError as e:
            coerced_location = None
            invalid.extend(e.fields)
        if not isinstance(description, str) or not description.strip():
            invalid.append("description")
        if invalid:
            raise ValidationError(invalid)

        created = {}

        def prepend(current: ReportList) -> ReportList:
            report = Report(
                id=self._new_id(current),
                photo_reference=photo_reference,
                location=coerced_location,
                description=description.strip(),
                created_at=self._clock(),
                status=StatusWorkflowEngine.INITIAL_STATUS,
                department=UNASSIGNED_DEPARTMENT,
            )
            created["report"] = report
            return (report,) + current

        await self._commit(prepend)
        report = created["report"]
        logger.info(f"Report submitted: {report.id} ({format_location(report.location)})")
        return report

    async def submit_draft(self, draft: SubmissionDraft) -> Report:
        """Submit a completed draft; the draft is reset only on success."""
        report = await self.submit(draft.photo_reference, draft.location, draft.description)
        draft.reset()
        return report

    async def _replace(self, report_id: str, change: Callable[[Report], Report]) -> Report:
        replaced = {}

        def apply(current: ReportList) -> ReportList:
            index = _index_of(current, report_id)
            updated = change(current[index])
            replaced["report"] = updated
            return current[:index] + (updated,) + current[index + 1:]

        await self._commit(apply)
        return replaced["report"]

    async def advance_status(self, report_id: str) -> Report:
        """
        Move a report one step forward in the workflow.
        Advancing a Resolved report succeeds and leaves it Resolved.

        Raises:
            NotFoundError: If no report has this id
            PersistenceError: If the list could not be saved
        """
        report = await self._replace(
            report_id,
            lambda r: r.model_copy(update={"status": StatusWorkflowEngine.next_status(r.status)}),
        )
        logger.info(f"Report {report_id} status -> {report.status.value}")
        return report

    async def assign_department(self, report_id: str, department: Optional[str]) -> Report:
        """
        Tag a report with a free-text department.

        Raises:
            ValidationError: If department is empty after trimming
            NotFoundError: If no report has this id
            PersistenceError: If the list could not be saved
        """
        name = (department or "").strip()
        if not name:
            raise ValidationError(["department"])

        report = await self._replace(report_id, lambda r: r.model_copy(update={"department": name}))
        logger.info(f"Report {report_id} assigned to '{name}'")
        return report

    async def remove(self, report_id: str) -> Report:
        """
        Delete exactly one report.

        Raises:
            NotFoundError: If no report has this id
            PersistenceError: If the list could not be saved
        """
        removed = {}

        def drop(current: ReportList) -> ReportList:
            index = _index_of(current, report_id)
            removed["report"] = current[index]
            return current[:index] + current[index + 1:]

        await self._commit(drop)
        logger.info(f"Report removed: {report_id}")
        return removed["report"]

    async def clear_all(self) -> None:
        """Replace the list with an empty one. Clearing an empty store succeeds."""
        await self._commit(lambda current: ())
        logger.info("All reports cleared")


# Global store instance
_report_store: Optional[ReportStore] = None


def get_report_store() -> ReportStore:
    """Get or create the process-wide report store."""
    global _report_store
    if _report_store is None:
        from civic_reports.config.storage import get_storage
        from civic_reports.core.settings import settings

        adapter = ReportPersistenceAdapter(get_storage(), settings.REPORTS_KEY)
        _report_store = ReportStore(adapter)
    return _report_store


def reset_report_store() -> None:
    global _report_store
    _report_store = None
