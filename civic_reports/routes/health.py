"""
Health check endpoints.
Used for readiness checks and basic storage connectivity tests.
"""

from fastapi import APIRouter, HTTPException
from datetime import datetime, timezone

from civic_reports.config.storage import get_storage
from civic_reports.core.settings import settings


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/storage")
async def storage_health():
    """
    Storage connectivity check.
    Reads the reports entry without parsing it.
    """
    try:
        storage = get_storage()
        raw = storage.get(settings.REPORTS_KEY)
        return {
            "status": "healthy",
            "storage": storage.name,
            "connected": True,
            "has_reports_entry": raw is not None,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    except Exception as e:
        raise HTTPException(
            status_code=503,
            detail=f"Storage connection failed: {str(e)}"
        )
