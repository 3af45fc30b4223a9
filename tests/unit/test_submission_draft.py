"""Unit tests for SubmissionDraft and coordinate helpers."""

from __future__ import annotations

import pytest

from civic_reports.core.exceptions import CaptureError, ValidationError
from civic_reports.models.report import Location
from civic_reports.services.submission_draft import SubmissionDraft
from civic_reports.utils.location import build_location, format_location


class TestSubmissionDraft:
    def test_new_draft_is_missing_everything(self):
        draft = SubmissionDraft()
        assert draft.missing_fields() == ["photoReference", "location", "description"]
        assert not draft.is_complete

    def test_complete_draft(self):
        draft = SubmissionDraft()
        draft.attach_photo("file:///p1.jpg")
        draft.attach_location(1.0, 2.0)
        draft.set_description("pothole")
        assert draft.is_complete
        assert draft.location == Location(latitude=1.0, longitude=2.0)

    def test_cancelled_capture_keeps_previous_photo(self):
        draft = SubmissionDraft()
        draft.attach_photo("file:///first.jpg")
        draft.attach_photo(None)
        assert draft.photo_reference == "file:///first.jpg"

    def test_pending_location_counts_as_missing(self):
        draft = SubmissionDraft()
        draft.attach_location(1.0, 2.0)
        draft.clear_location()
        assert "location" in draft.missing_fields()
        draft.attach_location(None, None)
        assert draft.location is None

    def test_whitespace_description_is_missing(self):
        draft = SubmissionDraft()
        draft.set_description("   ")
        assert "description" in draft.missing_fields()

    def test_reset(self):
        draft = SubmissionDraft()
        draft.attach_photo("file:///p1.jpg")
        draft.set_description("x")
        draft.reset()
        assert draft.missing_fields() == ["photoReference", "location", "description"]


class TestLocationHelpers:
    def test_build_location_out_of_range(self):
        with pytest.raises(ValidationError) as excinfo:
            build_location(95.0, 200.0)
        assert excinfo.value.fields == ["latitude", "longitude"]

    def test_build_location_missing_coordinate(self):
        assert build_location(1.0, None) is None

    def test_format_location(self):
        assert format_location(Location(latitude=18.50741, longitude=73.80774)) == "Lat: 18.5074, Lng: 73.8077"
        assert format_location(None) == "Location unavailable"


class TestCaptureCollaborators:
    def test_captured_photo_is_attached(self):
        draft = SubmissionDraft()
        draft.capture_photo(lambda: "file:///camera/IMG_1.jpg")
        assert draft.photo_reference == "file:///camera/IMG_1.jpg"

    def test_failed_photo_capture_propagates_and_keeps_previous_photo(self):
        def camera_unavailable():
            raise CaptureError("camera unavailable")

        draft = SubmissionDraft()
        draft.attach_photo("file:///first.jpg")
        with pytest.raises(CaptureError):
            draft.capture_photo(camera_unavailable)
        assert draft.photo_reference == "file:///first.jpg"

    def test_captured_location_is_attached(self):
        draft = SubmissionDraft()
        draft.capture_location(lambda: (18.5074, 73.8077))
        assert draft.location == Location(latitude=18.5074, longitude=73.8077)

    def test_pending_location_capture_leaves_no_location(self):
        draft = SubmissionDraft()
        draft.attach_location(1.0, 2.0)
        draft.capture_location(lambda: None)
        assert draft.location is None

    def test_failed_location_capture_propagates_and_clears_location(self):
        def gps_denied():
            raise CaptureError("permission denied")

        draft = SubmissionDraft()
        draft.attach_location(1.0, 2.0)
        with pytest.raises(CaptureError):
            draft.capture_location(gps_denied)
        assert draft.location is None
        assert "location" in draft.missing_fields()
