# fitclub/routes/v1/classes.py
"""
Group class routes - API v1

Endpoints:
    POST /classes                              → Book a class (admin)
    GET  /classes/upcoming                     → Upcoming classes with spots left
    POST /classes/{class_id}/registrations     → Register for a class (member)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_constraint_engine, get_principal, require_role
from ...core.enums import ClubRole
from ...core.exceptions import InvalidIntervalError
from ...domain.intervals import TimeInterval
from ...principal import ClubPrincipal
from ...schemas.scheduling import ClassBookingCreate, ClassSummaryResponse, CreatedResponse
from ...services.constraint_engine import ConstraintEngine
from .._helpers import admitted_id, handle_domain_exception

logger = logging.getLogger(__name__)

# V1 router - no prefix here, added when mounting in main.py
router = APIRouter(tags=["classes-v1"])


@router.post("/classes", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_class(
    payload: ClassBookingCreate,
    _: ClubPrincipal = Depends(require_role(ClubRole.ADMIN)),
    engine: ConstraintEngine = Depends(get_constraint_engine),
) -> CreatedResponse:
    """
    Book a group class into a room with a trainer.

    The trainer must have declared availability covering the class, and
    neither the room nor the trainer may already be busy at that time.
    """
    try:
        interval = TimeInterval(payload.start_time, payload.end_time)
    except InvalidIntervalError as exc:
        handle_domain_exception(exc)

    result = engine.propose_booking(
        payload.room_id,
        payload.trainer_id,
        payload.class_date,
        interval,
        payload.capacity,
        class_name=payload.class_name,
    )
    return CreatedResponse(id=admitted_id(result))


@router.get("/classes/upcoming", response_model=List[ClassSummaryResponse])
def list_upcoming_classes(
    _: ClubPrincipal = Depends(get_principal),
    engine: ConstraintEngine = Depends(get_constraint_engine),
) -> List[ClassSummaryResponse]:
    """Classes from today on, by date and start time."""
    return [
        ClassSummaryResponse(
            id=summary.class_id,
            class_name=summary.class_name,
            room_id=summary.room_id,
            room_name=summary.room_name,
            trainer_id=summary.trainer_id,
            trainer_name=summary.trainer_name,
            class_date=summary.class_date,
            start_time=summary.interval.start,
            end_time=summary.interval.end,
            duration_minutes=summary.interval.duration_minutes,
            capacity=summary.capacity,
            registered=summary.registered,
            spots_left=summary.spots_left,
        )
        for summary in engine.bookings.list_upcoming_classes()
    ]


@router.post(
    "/classes/{class_id}/registrations",
    response_model=CreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_for_class(
    class_id: str,
    principal: ClubPrincipal = Depends(require_role(ClubRole.MEMBER)),
    engine: ConstraintEngine = Depends(get_constraint_engine),
) -> CreatedResponse:
    """Take a seat in a class for the calling member."""
    result = engine.propose_registration(class_id, principal.actor_id)
    if result.accepted:
        logger.info(f"Member {principal.actor_id} registered for class {class_id}")
    return CreatedResponse(id=admitted_id(result))
