"""FastAPI application entry point for the hostel NOC workflow."""

from fastapi import FastAPI

from hostel_noc.api.middleware.logging_middleware import LoggingMiddleware
from hostel_noc.api.routes.checklist import router as checklist_router
from hostel_noc.api.routes.health import router as health_router
from hostel_noc.api.routes.noc import router as noc_router
from hostel_noc.bootstrap.logging import configure_structlog
from hostel_noc.config.noc_config import get_app_environment

configure_structlog(environment=get_app_environment())

app = FastAPI(
    title="Hostel NOC API",
    description="Hostel exit clearance: request, warden verification, admin approval",
    version="0.1.0",
)

app.add_middleware(LoggingMiddleware)

app.include_router(health_router)
app.include_router(checklist_router)
app.include_router(noc_router)
