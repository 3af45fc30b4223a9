"""
Pydantic models for citizen reports.
These models define the persisted record layout and the request/response
shapes of the local presentation surface.
"""

from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
from typing import Dict, Optional

from civic_reports.services.status_workflow import ReportStatus

UNASSIGNED_DEPARTMENT = "unassigned"


class Location(BaseModel):
    """Coordinate pair captured by the device."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    class Config:
        frozen = True


class Report(BaseModel):
    """
    One citizen-submitted civic issue.

    Instances are immutable. The store produces changed copies for the two
    permitted mutations (status advance, department assignment).
    Field aliases are the persisted field names and must not change.
    """
    id: str = Field(..., min_length=1, description="Unique, generated at creation")
    photo_reference: str = Field(
        ...,
        min_length=1,
        alias="photoReference",
        # Older entries stored the handle as photoUri
        validation_alias=AliasChoices("photoReference", "photoUri", "photo_reference"),
        description="Opaque handle to the captured image",
    )
    location: Optional[Location] = None
    description: str = Field(..., min_length=1)
    created_at: datetime = Field(
        ...,
        alias="createdAt",
        validation_alias=AliasChoices("createdAt", "created_at"),
    )
    status: ReportStatus = Field(default=ReportStatus.REPORTED)
    department: str = Field(default=UNASSIGNED_DEPARTMENT)

    class Config:
        frozen = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "1718000000000-3f2a9c1d",
                "photoReference": "file:///photos/IMG_0042.jpg",
                "location": {"latitude": 18.5074, "longitude": 73.8077},
                "description": "Large pothole near the school gate",
                "createdAt": "2024-06-10T08:13:20Z",
                "status": "Reported",
                "department": "unassigned",
            }
        }

    def to_storage_dict(self) -> Dict:
        """Field-name/value pairs exactly as persisted."""
        return self.model_dump(mode="json", by_alias=True)


class ReportCreate(BaseModel):
    """
    Incoming submission. Fields are optional here so that the store can
    report every missing field at once instead of failing on the first.
    """
    photo_reference: Optional[str] = Field(
        None,
        alias="photoReference",
        validation_alias=AliasChoices("photoReference", "photo_reference"),
    )
    location: Optional[Location] = None
    description: Optional[str] = Field(None, max_length=2000)

    class Config:
        populate_by_name = True
        extra = "ignore"


class DepartmentAssignRequest(BaseModel):
    """Free-text department; any non-empty trimmed string is accepted."""
    department: str = Field(..., max_length=200)


class ReportStats(BaseModel):
    """Aggregate counts derived from the current list at query time."""
    total: int = 0
    resolved: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
