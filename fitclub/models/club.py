# fitclub/models/club.py
"""
Club resources referenced by scheduling commitments.

Rooms, trainers and members are maintained by profile CRUD outside the
scheduling core; the engine only reads them by primary key.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base


class Room(Base):
    """A bookable room with a fixed head-count capacity."""

    __tablename__ = "rooms"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    name = Column(String(100), nullable=False)
    capacity = Column(Integer, nullable=False)

    __table_args__ = (CheckConstraint("capacity > 0", name="ck_rooms_capacity_positive"),)

    def __repr__(self) -> str:
        return f"<Room {self.name} capacity={self.capacity}>"


class Trainer(Base):
    """A trainer who declares availability and teaches group classes."""

    __tablename__ = "trainers"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    specialization = Column(String(100), nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Trainer {self.full_name}>"


class Member(Base):
    """A club member who registers for group classes."""

    __tablename__ = "members"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    registration_date = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Member {self.full_name}>"
