"""
Complaint Tracker - FastAPI Application Entry Point

Citizens submit and track complaints; admins and department desks (traffic,
cyber crime) triage them; an analytics view summarizes outcomes.

DESIGN PRINCIPLES:
- One versioned JSON document is the system-of-record
- Every status change is recorded in the complaint's history
- Citizens never see private comments or unmasked contact details
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from complaint_tracker.core.settings import settings
from complaint_tracker.routes import admin, analytics, complaints, dashboards, health
from complaint_tracker.routes import settings as settings_routes
from complaint_tracker.services.complaint_service import get_complaint_service

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# Initialize FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Citizen complaint tracking with department triage and analytics",
    debug=settings.DEBUG,
)


# Global exception handler to catch ALL exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them with full traceback."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}\n"
        + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"Internal server error: {str(exc)}"},
    )


# Pydantic validation error handler
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Log request validation errors and return them to the caller."""
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold exception objects that are not JSON serializable
    errors = []
    for error in exc.errors():
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {k: str(v) for k, v in error["ctx"].items()}
        errors.append(error)
    return errors


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
    Loads (or seeds) the stored document so the first request is served warm.
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    service = get_complaint_service()
    service.sync()
    logger.info(
        f"Storage: {service.storage.backend.describe()} "
        f"({len(service.data['complaints'])} complaint(s) loaded)"
    )


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.APP_NAME}")


# Include routers
app.include_router(health.router)
app.include_router(complaints.router)
app.include_router(admin.router)
app.include_router(dashboards.router)
app.include_router(analytics.router)
app.include_router(settings_routes.router)


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
        "track": "/complaints/{complaint_id}",
    }
