"""
Persistence adapter - whole-list load/save over a key-value engine.

The entire report list lives under one named entry as a JSON array of
field-name/value objects. Every save replaces that entry in a single set()
call; there is no per-report write.
"""

import json
import logging
from collections import Counter
from typing import List, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from civic_reports.config.storage import KeyValueStore
from civic_reports.core.exceptions import PersistenceError
from civic_reports.models.report import Report

logger = logging.getLogger(__name__)

_report_list_adapter = TypeAdapter(List[Report])


class ReportPersistenceAdapter:
    """Narrow load()/save() contract used exclusively by the report store."""

    def __init__(self, storage: KeyValueStore, key: str):
        self.storage = storage
        self.key = key

    def load(self) -> List[Report]:
        """
        Load the persisted list.

        Returns:
            The stored reports in stored order, or [] if the entry is absent

        Raises:
            PersistenceError: If the engine read fails or the entry is corrupt
        """
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read '{self.key}' from {self.storage.name} storage: {e}", exc_info=True)
            raise PersistenceError(f"Failed to read reports: {e}") from e

        if raw is None:
            return []

        if not isinstance(raw, str):
            logger.error(f"Stored entry '{self.key}' is a {type(raw).__name__}, not serialized text")
            raise PersistenceError(f"Stored reports are corrupt: expected text, got {type(raw).__name__}")

        try:
            reports = _report_list_adapter.validate_python(json.loads(raw))
        except (ValueError, TypeError, PydanticValidationError) as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Stored entry '{self.key}' is corrupt: {e}")
            raise PersistenceError(f"Stored reports are corrupt: {e}") from e

        id_counts = Counter(report.id for report in reports)
        duplicates = sorted(report_id for report_id, count in id_counts.items() if count > 1)
        if duplicates:
            logger.error(f"Stored entry '{self.key}' repeats report id(s): {duplicates}")
            raise PersistenceError(f"Stored reports are corrupt: duplicate id(s) {', '.join(duplicates)}")

        return reports

    def save(self, reports: Sequence[Report]) -> None:
        """
        Replace the persisted list with `reports` in one write.

        Raises:
            PersistenceError: If the engine write fails
        """
        raw = json.dumps([report.to_storage_dict() for report in reports], ensure_ascii=False)
        try:
            self.storage.set(self.key, raw)
        except Exception as e:
            logger.error(f"Failed to write '{self.key}' to {self.storage.name} storage: {e}", exc_info=True)
            raise PersistenceError(f"Failed to save reports: {e}") from e
        logger.debug(f"Persisted {len(reports)} report(s) under '{self.key}'")
