# fitclub/models/__init__.py
"""
SQLAlchemy models for the FitClub scheduling engine.

Importing this package registers every table on ``Base.metadata``.
"""

from .availability import AvailabilityWindow
from .club import Member, Room, Trainer
from .group_class import ClassBooking, Registration

__all__ = [
    "AvailabilityWindow",
    "ClassBooking",
    "Member",
    "Registration",
    "Room",
    "Trainer",
]
