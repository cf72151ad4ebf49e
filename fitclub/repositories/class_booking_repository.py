# fitclub/repositories/class_booking_repository.py
"""
ClassBooking Repository for FitClub

Range queries over group class bookings used for room and trainer
double-booking checks, plus the upcoming-classes listing with seat counts.
"""

from datetime import date
import logging
from typing import List, Tuple, cast

from sqlalchemy import func
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.club import Room, Trainer
from ..models.group_class import ClassBooking, Registration
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ClassBookingRepository(BaseRepository[ClassBooking]):
    """Repository for group class bookings."""

    def __init__(self, db: Session):
        super().__init__(db, ClassBooking)
        self.logger = logging.getLogger(__name__)

    def get_bookings_for_room(self, room_id: str, class_date: date) -> List[ClassBooking]:
        """
        Get every class held in a room on a date.

        Args:
            room_id: The room to check
            class_date: The date to check

        Returns:
            Bookings ordered by start time
        """
        try:
            query = self.db.query(ClassBooking).filter(
                ClassBooking.room_id == room_id,
                ClassBooking.class_date == class_date,
            )
            return cast(List[ClassBooking], query.order_by(ClassBooking.start_time).all())
        except OperationalError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting room bookings: {str(e)}")
            raise RepositoryException(f"Failed to get room bookings: {str(e)}")

    def get_bookings_for_trainer(self, trainer_id: str, class_date: date) -> List[ClassBooking]:
        """
        Get every class a trainer teaches on a date, ordered by start time.
        """
        try:
            query = self.db.query(ClassBooking).filter(
                ClassBooking.trainer_id == trainer_id,
                ClassBooking.class_date == class_date,
            )
            return cast(List[ClassBooking], query.order_by(ClassBooking.start_time).all())
        except OperationalError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting trainer bookings: {str(e)}")
            raise RepositoryException(f"Failed to get trainer bookings: {str(e)}")

    def get_upcoming_with_counts(
        self, from_date: date
    ) -> List[Tuple[ClassBooking, Room, Trainer, int]]:
        """
        Get classes on or after ``from_date`` with their room, trainer and
        registration count.

        Returns:
            (booking, room, trainer, registered) rows ordered by date and start time
        """
        try:
            registered = func.count(Registration.id)
            rows = (
                self.db.query(ClassBooking, Room, Trainer, registered)
                .join(Room, Room.id == ClassBooking.room_id)
                .join(Trainer, Trainer.id == ClassBooking.trainer_id)
                .outerjoin(Registration, Registration.class_id == ClassBooking.id)
                .filter(ClassBooking.class_date >= from_date)
                .group_by(ClassBooking.id, Room.id, Trainer.id)
                .order_by(ClassBooking.class_date, ClassBooking.start_time)
                .all()
            )
            return [(booking, room, trainer, int(count)) for booking, room, trainer, count in rows]
        except OperationalError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting upcoming classes: {str(e)}")
            raise RepositoryException(f"Failed to get upcoming classes: {str(e)}")
