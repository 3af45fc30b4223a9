"""
Civic Reports - FastAPI Application Entry Point

Local, single-device service for citizen civic-issue reports: submission with
photo and location, then administrator triage through a fixed status workflow.

DESIGN PRINCIPLES:
- Local storage is the durable source of truth
- The report store is the only writer; this layer only forwards UI events
- No network sync, no authentication, one writer at a time
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from civic_reports.core.exceptions import NotFoundError, PersistenceError, ValidationError
from civic_reports.core.log_config import configure_logging
from civic_reports.core.settings import settings
from civic_reports.routes import health, reports
from civic_reports.services.report_store import get_report_store

logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Local store and triage workflow for citizen-reported civic issues",
    debug=settings.DEBUG
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "fields": exc.fields}
    )


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error(f"{request.method} {request.url.path} failed to persist: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": f"Storage unavailable: {exc}"}
    )


# CORS - local presentation layer only, configured via settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Application lifecycle events
@app.on_event("startup")
async def startup_event():
    """
    Initialize services on application startup.
    Loading never blocks startup: a missing or corrupt entry starts an empty list.
    """
    configure_logging()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    try:
        store = get_report_store()
    except RuntimeError as e:
        logger.warning(f"Storage initialization failed: {e}")
        logger.warning("The app will start but report operations may fail.")
        return
    await store.initialize()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(reports.router)


# Root endpoint
@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "reports": "/reports?status={all|Reported|Acknowledged|In Progress|Resolved}"
    }
