# fitclub/main.py
"""
FitClub scheduling API.

Thin HTTP adapter over the constraint engine. Every write goes through
ConstraintEngine; rejections are returned as HTTP errors carrying the
rejection code.
"""

import logging

from fastapi import APIRouter, FastAPI

from . import __version__
from .core.config import settings
from .errors import register_error_handlers
from .routes import prometheus
from .routes.v1 import (
    availability as availability_v1,
    classes as classes_v1,
    club as club_v1,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

API_TITLE = "FitClub Scheduling API"
API_DESCRIPTION = "Availability, class booking and registration admission for FitClub"


def create_app() -> FastAPI:
    """Build the FastAPI application with v1 routes and the metrics endpoint."""
    application = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    register_error_handlers(application)

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(availability_v1.router)
    api_v1.include_router(classes_v1.router)
    api_v1.include_router(club_v1.router)

    application.include_router(api_v1)
    application.include_router(prometheus.router)

    logger.info(
        f"FitClub API ready (environment={settings.environment}, "
        f"lock_backend={settings.scheduling_lock_backend})"
    )
    return application


app = create_app()
