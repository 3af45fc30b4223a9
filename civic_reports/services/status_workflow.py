"""
Status Workflow Engine - strict, forward-only state machine.

DESIGN PRINCIPLES:
- No skipping states
- No backward transitions
- Only forward advancement is exposed; status is never set to an arbitrary value
- Advancing the terminal state is a no-op, not an error
"""

from enum import Enum
from typing import Dict, List, Optional


class ReportStatus(str, Enum):
    """
    Report lifecycle. States must be traversed in order:
    REPORTED → ACKNOWLEDGED → IN_PROGRESS → RESOLVED
    """
    REPORTED = "Reported"            # Initial state, assigned at creation
    ACKNOWLEDGED = "Acknowledged"    # Seen by an administrator
    IN_PROGRESS = "In Progress"      # Work under way
    RESOLVED = "Resolved"            # Terminal state


class StatusWorkflowEngine:
    """
    Pure function of (current status) -> (next status).
    """

    INITIAL_STATUS: ReportStatus = ReportStatus.REPORTED

    # Explicit ordering table: {from_status: next_status}. Terminal state maps to None.
    NEXT_STATUS: Dict[ReportStatus, Optional[ReportStatus]] = {
        ReportStatus.REPORTED: ReportStatus.ACKNOWLEDGED,
        ReportStatus.ACKNOWLEDGED: ReportStatus.IN_PROGRESS,
        ReportStatus.IN_PROGRESS: ReportStatus.RESOLVED,
        ReportStatus.RESOLVED: None,
    }

    @classmethod
    def next_status(cls, current_status: ReportStatus) -> ReportStatus:
        """
        Return the status immediately following current_status,
        or current_status unchanged if it is terminal.

        Raises:
            ValueError: If current_status is not a known status value
        """
        current = ReportStatus(current_status)
        if cls.is_terminal(current):
            return current
        return cls.NEXT_STATUS[current]

    @classmethod
    def is_terminal(cls, status: ReportStatus) -> bool:
        return cls.NEXT_STATUS[ReportStatus(status)] is None

    @classmethod
    def ordered_statuses(cls) -> List[ReportStatus]:
        """All statuses in lifecycle order."""
        ordered = [cls.INITIAL_STATUS]
        while cls.NEXT_STATUS[ordered[-1]] is not None:
            ordered.append(cls.NEXT_STATUS[ordered[-1]])
        return ordered
