# fitclub/models/availability.py
"""
Trainer availability model.

A window declares that a trainer can teach on a given weekday between two
wall-clock times, every week. Windows are only ever added; they are never
edited in place.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, String, Time
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base
from ..domain.intervals import TimeInterval, Weekday

_WEEKDAY_VALUES = ", ".join(f"'{day.value}'" for day in Weekday)


class AvailabilityWindow(Base):
    """Recurring weekly availability of a trainer."""

    __tablename__ = "trainer_availability"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    trainer_id = Column(String(26), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(String(10), nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_trainer_availability_time_order"),
        CheckConstraint(
            f"day_of_week IN ({_WEEKDAY_VALUES})", name="ck_trainer_availability_day_of_week"
        ),
        Index("idx_trainer_availability_trainer_day", "trainer_id", "day_of_week"),
    )

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.start_time, self.end_time)

    @property
    def weekday(self) -> Weekday:
        return Weekday(self.day_of_week)

    def __repr__(self) -> str:
        return f"<AvailabilityWindow {self.trainer_id} {self.day_of_week} {self.interval}>"
