# fitclub/routes/_helpers.py
"""Shared helpers for scheduling routes."""

from typing import NoReturn

from fastapi import HTTPException, status

from ..core.exceptions import DomainException
from ..services.constraint_engine import AdmissionResult, Rejected


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def admitted_id(result: AdmissionResult) -> str:
    """Return the id of an accepted commitment or raise the rejection as HTTP."""
    if isinstance(result, Rejected):
        if result.error is not None:
            handle_domain_exception(result.error)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": result.message, "code": result.reason.value, "details": result.details},
        )
    return result.id
