# fitclub/services/booking_ledger.py
"""
Booking Ledger for FitClub

Admits group class bookings. A booking ties a room and a trainer to a date
and a time range, and is accepted only if:
- the class capacity fits the room,
- the room hosts no overlapping class that date,
- one of the trainer's availability windows for that weekday covers it,
- the trainer teaches no overlapping class that date.

Checks run in that order so the reported rejection is deterministic when
several would fail.
"""

from dataclasses import dataclass
from datetime import date
import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import (
    CapacityExceedsRoomException,
    ClassInPastException,
    InvalidCapacityException,
    RoomDoubleBookedException,
    RoomNotFoundException,
    TrainerDoubleBookedException,
    TrainerNotFoundException,
    TrainerUnavailableException,
)
from ..core.scheduling_lock import (
    ConflictDomainLock,
    get_conflict_domain_lock,
    room_date_key,
    trainer_date_key,
)
from ..core.timezone_utils import get_club_today
from ..domain.intervals import TimeInterval, contains, overlaps, weekday_for
from ..repositories import RepositoryFactory
from ..repositories.class_booking_repository import ClassBookingRepository
from .base import BaseService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassSummary:
    """An upcoming class with its seat usage."""

    class_id: str
    class_name: str
    room_id: str
    room_name: str
    trainer_id: str
    trainer_name: str
    class_date: date
    interval: TimeInterval
    capacity: int
    registered: int

    @property
    def spots_left(self) -> int:
        return max(self.capacity - self.registered, 0)

    @property
    def is_full(self) -> bool:
        return self.spots_left == 0


class BookingLedger(BaseService):
    """Per-room and per-trainer class bookings."""

    def __init__(
        self,
        db: Session,
        repository: Optional[ClassBookingRepository] = None,
        lock: Optional[ConflictDomainLock] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize booking ledger.

        Args:
            db: Database session
            repository: Optional ClassBookingRepository instance
            lock: Optional conflict-domain lock
            clock: Returns the club's current date (defaults to club timezone)
        """
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_class_booking_repository(db)
        self.availability_repository = RepositoryFactory.create_availability_repository(db)
        self.room_repository = RepositoryFactory.create_room_repository(db)
        self.trainer_repository = RepositoryFactory.create_trainer_repository(db)
        self.lock = lock or get_conflict_domain_lock()
        self.clock = clock or get_club_today

    @BaseService.measure_operation("propose_booking")
    def propose_booking(
        self,
        room_id: str,
        trainer_id: str,
        class_date: date,
        interval: TimeInterval,
        capacity: int,
        class_name: Optional[str] = None,
    ) -> str:
        """
        Admit a new group class booking.

        Args:
            room_id: Room hosting the class
            trainer_id: Trainer teaching the class
            class_date: Calendar date of the class
            interval: Wall-clock range, half-open
            capacity: Maximum number of registrations
            class_name: Display name, defaults to the configured name

        Returns:
            ID of the persisted booking

        Raises:
            InvalidCapacityException: capacity <= 0
            ClassInPastException: class_date before today
            RoomNotFoundException / TrainerNotFoundException: unknown ids
            CapacityExceedsRoomException, RoomDoubleBookedException,
            TrainerUnavailableException, TrainerDoubleBookedException
        """
        self.log_operation(
            "propose_booking",
            room_id=room_id,
            trainer_id=trainer_id,
            class_date=class_date.isoformat(),
            interval=str(interval),
            capacity=capacity,
        )

        if capacity <= 0:
            raise InvalidCapacityException(capacity)
        today = self.clock()
        if class_date < today:
            raise ClassInPastException(class_date, today)

        keys = (room_date_key(room_id, class_date), trainer_date_key(trainer_id, class_date))
        with self.lock.hold(*keys, session=self.db):
            with self.transaction():
                room = self.room_repository.get_by_id(room_id)
                if room is None:
                    raise RoomNotFoundException(room_id)
                if self.trainer_repository.get_by_id(trainer_id) is None:
                    raise TrainerNotFoundException(trainer_id)

                if capacity > room.capacity:
                    raise CapacityExceedsRoomException(capacity, room.capacity)

                self._check_room_conflicts(room_id, class_date, interval)
                self._check_trainer_availability(trainer_id, class_date, interval)
                self._check_trainer_conflicts(trainer_id, class_date, interval)

                booking = self.repository.create(
                    class_name=class_name or settings.default_class_name,
                    room_id=room_id,
                    trainer_id=trainer_id,
                    class_date=class_date,
                    start_time=interval.start,
                    end_time=interval.end,
                    capacity=capacity,
                )
                booking_id = booking.id

        self.logger.info(
            f"Class {booking_id} booked in room {room_id} with {trainer_id} "
            f"on {class_date} {interval} ({interval.duration_minutes} min)"
        )
        return booking_id

    def _check_room_conflicts(self, room_id: str, class_date: date, interval: TimeInterval) -> None:
        for existing in self.repository.get_bookings_for_room(room_id, class_date):
            if overlaps(existing.interval, interval):
                raise RoomDoubleBookedException(
                    details={
                        "room_id": room_id,
                        "class_date": class_date.isoformat(),
                        "requested": str(interval),
                        "conflicting_class_id": existing.id,
                        "conflicting_range": str(existing.interval),
                    }
                )

    def _check_trainer_availability(
        self, trainer_id: str, class_date: date, interval: TimeInterval
    ) -> None:
        day_of_week = weekday_for(class_date)
        windows = self.availability_repository.get_windows_for_day(trainer_id, day_of_week)
        if not any(contains(window.interval, interval) for window in windows):
            raise TrainerUnavailableException(
                details={
                    "trainer_id": trainer_id,
                    "day_of_week": day_of_week.value,
                    "requested": str(interval),
                    "windows": [str(window.interval) for window in windows],
                }
            )

    def _check_trainer_conflicts(
        self, trainer_id: str, class_date: date, interval: TimeInterval
    ) -> None:
        for existing in self.repository.get_bookings_for_trainer(trainer_id, class_date):
            if overlaps(existing.interval, interval):
                raise TrainerDoubleBookedException(
                    details={
                        "trainer_id": trainer_id,
                        "class_date": class_date.isoformat(),
                        "requested": str(interval),
                        "conflicting_class_id": existing.id,
                        "conflicting_range": str(existing.interval),
                    }
                )

    @BaseService.measure_operation("list_upcoming_classes")
    def list_upcoming_classes(self) -> List[ClassSummary]:
        """
        Classes dated today or later, with room and trainer names, registered
        counts and spots left.
        """
        rows = self.repository.get_upcoming_with_counts(self.clock())
        return [
            ClassSummary(
                class_id=booking.id,
                class_name=booking.class_name,
                room_id=booking.room_id,
                room_name=room.name,
                trainer_id=booking.trainer_id,
                trainer_name=trainer.full_name,
                class_date=booking.class_date,
                interval=booking.interval,
                capacity=booking.capacity,
                registered=registered,
            )
            for booking, room, trainer, registered in rows
        ]
