# fitclub/models/group_class.py
"""
Group class bookings and member registrations.

A ClassBooking ties a room and a trainer to a date and time range. It is
created once by an admin and not modified afterwards. Registrations
reference a class and a member by identifier only.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Time,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base
from ..domain.intervals import TimeInterval


class ClassBooking(Base):
    """A scheduled group class occupying a room and a trainer."""

    __tablename__ = "group_classes"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    class_name = Column(String(100), nullable=False)
    room_id = Column(String(26), ForeignKey("rooms.id"), nullable=False)
    trainer_id = Column(String(26), ForeignKey("trainers.id"), nullable=False)
    class_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    capacity = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_group_classes_time_order"),
        CheckConstraint("capacity > 0", name="ck_group_classes_capacity_positive"),
        Index("idx_group_classes_room_date", "room_id", "class_date"),
        Index("idx_group_classes_trainer_date", "trainer_id", "class_date"),
    )

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.start_time, self.end_time)

    def __repr__(self) -> str:
        return f"<ClassBooking {self.class_name} {self.class_date} {self.interval}>"


class Registration(Base):
    """A member's seat in a group class."""

    __tablename__ = "class_registrations"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    class_id = Column(
        String(26), ForeignKey("group_classes.id", ondelete="CASCADE"), nullable=False
    )
    member_id = Column(String(26), ForeignKey("members.id", ondelete="CASCADE"), nullable=False)
    registered_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("class_id", "member_id", name="uq_class_registrations_class_member"),
        Index("idx_class_registrations_class", "class_id"),
    )

    def __repr__(self) -> str:
        return f"<Registration class={self.class_id} member={self.member_id}>"
