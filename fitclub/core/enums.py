# fitclub/core/enums.py
"""
Enumerations shared across the scheduling core and the HTTP adapter.
"""

from enum import Enum


class ClubRole(str, Enum):
    """Roles a caller can act under."""

    MEMBER = "member"
    TRAINER = "trainer"
    ADMIN = "admin"


class CommitmentKind(str, Enum):
    """Kinds of time-bound or counted commitments admitted by the engine."""

    AVAILABILITY_WINDOW = "availability_window"
    CLASS_BOOKING = "class_booking"
    REGISTRATION = "registration"


class RejectionReason(str, Enum):
    """Why a proposed commitment was not admitted."""

    INVALID_INTERVAL = "INVALID_INTERVAL"
    INVALID_CAPACITY = "INVALID_CAPACITY"
    AVAILABILITY_OVERLAP = "AVAILABILITY_OVERLAP"
    ROOM_DOUBLE_BOOKED = "ROOM_DOUBLE_BOOKED"
    TRAINER_DOUBLE_BOOKED = "TRAINER_DOUBLE_BOOKED"
    TRAINER_UNAVAILABLE = "TRAINER_UNAVAILABLE"
    CAPACITY_EXCEEDS_ROOM = "CAPACITY_EXCEEDS_ROOM"
    CLASS_FULL = "CLASS_FULL"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    CLASS_NOT_FOUND = "CLASS_NOT_FOUND"
    CLASS_IN_PAST = "CLASS_IN_PAST"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    TRAINER_NOT_FOUND = "TRAINER_NOT_FOUND"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"


class LockBackend(str, Enum):
    """Conflict-domain lock implementations."""

    LOCAL = "local"
    ADVISORY = "advisory"
    REDIS = "redis"
