# fitclub/schemas/scheduling.py
"""
Scheduling schemas for the FitClub API.

Request models only shape the payload. Interval order, capacity and every
other scheduling rule is enforced by the constraint engine so that the API
and direct callers see the same typed rejections.
"""

import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from ..domain.intervals import Weekday
from ._strict_base import StrictModel, StrictRequestModel

DateType = datetime.date
TimeType = datetime.time


class AvailabilityWindowCreate(StrictRequestModel):
    """Recurring weekly window declared by the calling trainer."""

    day_of_week: Weekday
    start_time: TimeType
    end_time: TimeType


class ClassBookingCreate(StrictRequestModel):
    """Group class proposed by an administrator."""

    class_name: Optional[str] = Field(default=None, max_length=100)
    room_id: str
    trainer_id: str
    class_date: DateType
    start_time: TimeType
    end_time: TimeType
    capacity: int


class CreatedResponse(StrictModel):
    """Identifier of a newly admitted commitment."""

    id: str


class AvailabilityWindowResponse(StrictModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: str
    trainer_id: str
    day_of_week: Weekday
    start_time: TimeType
    end_time: TimeType


class ClassSummaryResponse(StrictModel):
    """Upcoming class with its remaining seats."""

    id: str
    class_name: str
    room_id: str
    room_name: str
    trainer_id: str
    trainer_name: str
    class_date: DateType
    start_time: TimeType
    end_time: TimeType
    duration_minutes: int
    capacity: int
    registered: int
    spots_left: int


class RoomResponse(StrictModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: str
    name: str
    capacity: int


class TrainerResponse(StrictModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    id: str
    first_name: str
    last_name: str
    full_name: str
    specialization: Optional[str] = None
