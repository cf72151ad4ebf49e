# fitclub/errors.py
"""Exception handlers that keep the {"detail": {...}} error envelope."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from .core.exceptions import (
    DomainException,
    RepositoryException,
    SchedulingUnavailableException,
    ServiceException,
)

logger = logging.getLogger(__name__)


def _envelope(exc: DomainException) -> JSONResponse:
    http_exc = exc.to_http_exception()
    return JSONResponse(
        {"detail": http_exc.detail},
        status_code=http_exc.status_code,
        headers=http_exc.headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
        if isinstance(exc, ServiceException):
            logger.warning(f"{exc.code} on {request.url.path}: {exc.message}")
        return _envelope(exc)

    @app.exception_handler(OperationalError)
    async def operational_error_handler(request: Request, exc: OperationalError) -> JSONResponse:
        # Reads outside a service transaction
        logger.warning(f"Transient store failure on {request.url.path}: {exc}")
        return _envelope(
            SchedulingUnavailableException(
                "The schedule store is temporarily unavailable. Please retry."
            )
        )

    @app.exception_handler(RepositoryException)
    async def repository_exception_handler(
        request: Request, exc: RepositoryException
    ) -> JSONResponse:
        logger.error(f"Repository failure on {request.url.path}: {exc}")
        return _envelope(ServiceException("Database operation failed"))
