"""
Submission draft - the inputs gathered before a report is submitted.

Photo and location arrive from capture collaborators (camera/gallery,
geolocation). A cancelled capture produces no reference; a failed capture
raises CaptureError, which the capture_* methods pass through unchanged.
"""

import logging
from typing import Callable, List, Optional, Tuple

from civic_reports.core.exceptions import CaptureError
from civic_reports.models.report import Location
from civic_reports.utils.location import build_location

logger = logging.getLogger(__name__)


class SubmissionDraft:

    def __init__(self):
        self.photo_reference: Optional[str] = None
        self.location: Optional[Location] = None
        self.description: str = ""

    def attach_photo(self, photo_reference: Optional[str]) -> None:
        # None means the capture was cancelled: keep whatever was attached before
        if photo_reference:
            self.photo_reference = photo_reference

    def attach_location(self, latitude: Optional[float], longitude: Optional[float]) -> None:
        self.location = build_location(latitude, longitude)

    def clear_location(self) -> None:
        self.location = None

    def capture_photo(self, capture: Callable[[], Optional[str]]) -> None:
        """
        Run a camera/gallery collaborator and attach what it returns.

        Raises:
            CaptureError: From the collaborator; the draft keeps its previous photo
        """
        try:
            photo_reference = capture()
        except CaptureError as e:
            logger.warning(f"Photo capture failed: {e}")
            raise
        self.attach_photo(photo_reference)

    def capture_location(self, capture: Callable[[], Optional[Tuple[float, float]]]) -> None:
        """
        Run a geolocation collaborator. A pending (None) or failed capture
        both leave the draft with no location.

        Raises:
            CaptureError: From the collaborator, after the location is cleared
        """
        self.clear_location()
        try:
            coordinates = capture()
        except CaptureError as e:
            logger.warning(f"Location capture failed: {e}")
            raise
        if coordinates is not None:
            self.attach_location(*coordinates)

    def set_description(self, text: Optional[str]) -> None:
        self.description = text or ""

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.photo_reference:
            missing.append("photoReference")
        if self.location is None:
            missing.append("location")
        if not self.description.strip():
            missing.append("description")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def reset(self) -> None:
        self.photo_reference = None
        self.location = None
        self.description = ""
        logger.debug("Submission draft cleared")
