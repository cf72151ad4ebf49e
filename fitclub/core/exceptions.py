# fitclub/core/exceptions.py
"""
Domain-specific exceptions for the FitClub scheduling engine.

Scheduling rejections are expected, recoverable outcomes: each one carries a
RejectionReason so callers can present a precise message and let the user
retry with different input. System failures (repository errors, lock
timeouts, serialization conflicts) are a separate branch of the hierarchy.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from .enums import RejectionReason

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Default conversion to HTTPException (override in subclasses)."""
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ForbiddenException(DomainException):
    """Raised when the caller acts under a role that may not perform the action."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


class SchedulingUnavailableException(ServiceException):
    """
    Raised when a proposal could not be evaluated atomically right now.

    Covers lock acquisition timeouts, an unreachable lock backend and store
    failures such as serialization conflicts or deadlocks. Nothing has been
    persisted, so the caller may resubmit the same proposal.
    """

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="SCHEDULING_UNAVAILABLE", details=details)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
            headers={"Retry-After": "1"},
        )


# Scheduling rejections


class SchedulingRejection(DomainException):
    """A proposed commitment violates a scheduling invariant."""

    reason: RejectionReason
    status_code: int = status.HTTP_409_CONFLICT

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message=message, code=self.reason.value, details=details)

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class InvalidIntervalError(SchedulingRejection):
    """Raised when an interval is not a naive wall-clock range with start < end."""

    reason = RejectionReason.INVALID_INTERVAL
    status_code = HTTP_422_UNPROCESSABLE

    def __init__(self, start: Any, end: Any, message: Optional[str] = None):
        super().__init__(
            message=message or f"End time must be after start time (got {start} - {end})",
            details={"start_time": str(start), "end_time": str(end)},
        )


class InvalidCapacityException(SchedulingRejection):
    """Raised when a class capacity is not a positive number."""

    reason = RejectionReason.INVALID_CAPACITY
    status_code = HTTP_422_UNPROCESSABLE

    def __init__(self, capacity: int):
        super().__init__(
            message="Capacity must be positive",
            details={"capacity": capacity},
        )


class AvailabilityOverlapException(SchedulingRejection):
    """Raised when an availability window overlaps an existing window."""

    reason = RejectionReason.AVAILABILITY_OVERLAP

    def __init__(
        self,
        day_of_week: str,
        new_range: str,
        conflicting_range: str,
        conflicting_window_id: str,
    ):
        super().__init__(
            message=(
                f"Overlapping availability on {day_of_week}: "
                f"{new_range} conflicts with {conflicting_range}"
            ),
            details={
                "day_of_week": day_of_week,
                "new_window": new_range,
                "conflicting_window": conflicting_range,
                "conflicting_window_id": conflicting_window_id,
            },
        )


class RoomDoubleBookedException(SchedulingRejection):
    """Raised when a room already hosts an overlapping class on that date."""

    reason = RejectionReason.ROOM_DOUBLE_BOOKED

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "Room is already booked at this time",
            details=details,
        )


class TrainerDoubleBookedException(SchedulingRejection):
    """Raised when a trainer already teaches an overlapping class on that date."""

    reason = RejectionReason.TRAINER_DOUBLE_BOOKED

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "Trainer is already teaching another class at this time",
            details=details,
        )


class TrainerUnavailableException(SchedulingRejection):
    """Raised when no availability window of the trainer covers the class."""

    reason = RejectionReason.TRAINER_UNAVAILABLE
    status_code = HTTP_422_UNPROCESSABLE

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "Trainer is not available at this time",
            details=details,
        )


class CapacityExceedsRoomException(SchedulingRejection):
    """Raised when a class capacity is larger than its room."""

    reason = RejectionReason.CAPACITY_EXCEEDS_ROOM
    status_code = HTTP_422_UNPROCESSABLE

    def __init__(self, capacity: int, room_capacity: int):
        super().__init__(
            message=f"Class capacity ({capacity}) exceeds room capacity ({room_capacity})",
            details={"capacity": capacity, "room_capacity": room_capacity},
        )


class ClassFullException(SchedulingRejection):
    """Raised when a class has no registration spots left."""

    reason = RejectionReason.CLASS_FULL

    def __init__(self, class_id: str, capacity: int):
        super().__init__(
            message="This class is already at full capacity",
            details={"class_id": class_id, "capacity": capacity},
        )


class AlreadyRegisteredException(SchedulingRejection):
    """Raised when a member registers twice for the same class."""

    reason = RejectionReason.ALREADY_REGISTERED

    def __init__(self, class_id: str, member_id: str):
        super().__init__(
            message="You are already registered for this class",
            details={"class_id": class_id, "member_id": member_id},
        )


class ClassInPastException(SchedulingRejection):
    """Raised when a class date lies before the club's current date."""

    reason = RejectionReason.CLASS_IN_PAST
    status_code = HTTP_422_UNPROCESSABLE

    def __init__(self, class_date: Any, today: Any):
        super().__init__(
            message="Class date is in the past",
            details={"class_date": str(class_date), "today": str(today)},
        )


class _NotFoundRejection(SchedulingRejection):
    status_code = status.HTTP_404_NOT_FOUND
    entity: str = "Resource"
    id_field: str = "id"

    def __init__(self, entity_id: str):
        super().__init__(
            message=f"{self.entity} not found",
            details={self.id_field: entity_id},
        )


class ClassNotFoundException(_NotFoundRejection):
    reason = RejectionReason.CLASS_NOT_FOUND
    entity = "Class"
    id_field = "class_id"


class RoomNotFoundException(_NotFoundRejection):
    reason = RejectionReason.ROOM_NOT_FOUND
    entity = "Room"
    id_field = "room_id"


class TrainerNotFoundException(_NotFoundRejection):
    reason = RejectionReason.TRAINER_NOT_FOUND
    entity = "Trainer"
    id_field = "trainer_id"


class MemberNotFoundException(_NotFoundRejection):
    reason = RejectionReason.MEMBER_NOT_FOUND
    entity = "Member"
    id_field = "member_id"


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
