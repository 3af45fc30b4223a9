"""
Coordinate helpers for captured locations.
"""

import logging
from typing import Optional

from civic_reports.core.exceptions import ValidationError
from civic_reports.models.report import Location

logger = logging.getLogger(__name__)


def build_location(latitude: Optional[float], longitude: Optional[float]) -> Optional[Location]:
    """
    Build a Location from a captured coordinate pair.

    Returns None when either coordinate is missing: an in-flight capture and
    an unavailable capture both mean "no location yet".

    Raises:
        ValidationError: If a coordinate is outside its valid range
    """
    if latitude is None or longitude is None:
        return None

    invalid = []
    if not -90 <= latitude <= 90:
        invalid.append("latitude")
    if not -180 <= longitude <= 180:
        invalid.append("longitude")
    if invalid:
        logger.warning(f"Rejected out-of-range coordinates ({latitude}, {longitude})")
        raise ValidationError(invalid, f"Coordinates out of range: ({latitude}, {longitude})")

    return Location(latitude=float(latitude), longitude=float(longitude))


def format_location(location: Optional[Location]) -> str:
    """Display form used by report lists, e.g. 'Lat: 18.5074, Lng: 73.8077'."""
    if location is None:
        return "Location unavailable"
    return f"Lat: {location.latitude:.4f}, Lng: {location.longitude:.4f}"
