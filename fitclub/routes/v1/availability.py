# fitclub/routes/v1/availability.py
"""
Trainer availability routes - API v1

Endpoints:
    POST /trainers/me/availability            → Declare a weekly window (trainer)
    GET  /trainers/{trainer_id}/availability  → List a trainer's windows
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_constraint_engine, get_principal, require_role
from ...core.enums import ClubRole
from ...core.exceptions import InvalidIntervalError
from ...domain.intervals import TimeInterval
from ...principal import ClubPrincipal
from ...schemas.scheduling import (
    AvailabilityWindowCreate,
    AvailabilityWindowResponse,
    CreatedResponse,
)
from ...services.constraint_engine import ConstraintEngine
from .._helpers import admitted_id, handle_domain_exception

logger = logging.getLogger(__name__)

# V1 router - no prefix here, added when mounting in main.py
router = APIRouter(tags=["availability-v1"])


@router.post(
    "/trainers/me/availability",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_availability_window(
    payload: AvailabilityWindowCreate,
    principal: ClubPrincipal = Depends(require_role(ClubRole.TRAINER)),
    engine: ConstraintEngine = Depends(get_constraint_engine),
) -> CreatedResponse:
    """
    Declare a recurring weekly availability window for the calling trainer.

    Rejected with 409 when it overlaps one of the trainer's windows on the
    same weekday.
    """
    try:
        interval = TimeInterval(payload.start_time, payload.end_time)
    except InvalidIntervalError as exc:
        handle_domain_exception(exc)

    result = engine.propose_window(principal.actor_id, payload.day_of_week, interval)
    return CreatedResponse(id=admitted_id(result))


@router.get(
    "/trainers/{trainer_id}/availability",
    response_model=List[AvailabilityWindowResponse],
)
def list_availability_windows(
    trainer_id: str,
    _: ClubPrincipal = Depends(get_principal),
    engine: ConstraintEngine = Depends(get_constraint_engine),
) -> List[AvailabilityWindowResponse]:
    """Windows ordered Monday through Sunday, then by start time."""
    windows = engine.availability.list_windows(trainer_id)
    return [AvailabilityWindowResponse.model_validate(window) for window in windows]
