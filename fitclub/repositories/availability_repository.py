# fitclub/repositories/availability_repository.py
"""
Availability Repository for FitClub

Data access for recurring trainer availability windows. The availability
ledger reads a trainer's windows for one weekday to test a new window for
overlap; the booking ledger reads the same rows to test containment.
"""

import logging
from typing import List, cast

from sqlalchemy import case
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..domain.intervals import Weekday
from ..models.availability import AvailabilityWindow
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

_WEEKDAY_ORDINAL = case(
    {day.value: day.ordinal for day in Weekday},
    value=AvailabilityWindow.day_of_week,
)


class AvailabilityRepository(BaseRepository[AvailabilityWindow]):
    """Repository for trainer availability windows."""

    def __init__(self, db: Session):
        super().__init__(db, AvailabilityWindow)
        self.logger = logging.getLogger(__name__)

    def get_windows_for_day(self, trainer_id: str, day_of_week: Weekday) -> List[AvailabilityWindow]:
        """
        Get a trainer's windows for a single weekday.

        Args:
            trainer_id: The trainer ID
            day_of_week: Weekday to fetch

        Returns:
            Windows ordered by start time
        """
        try:
            return cast(
                List[AvailabilityWindow],
                self.db.query(AvailabilityWindow)
                .filter(
                    AvailabilityWindow.trainer_id == trainer_id,
                    AvailabilityWindow.day_of_week == day_of_week.value,
                )
                .order_by(AvailabilityWindow.start_time)
                .all(),
            )
        except OperationalError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting availability windows: {str(e)}")
            raise RepositoryException(f"Failed to get availability windows: {str(e)}")

    def get_windows_for_trainer(self, trainer_id: str) -> List[AvailabilityWindow]:
        """
        Get every window of a trainer, Monday first, then by start time.
        """
        try:
            return cast(
                List[AvailabilityWindow],
                self.db.query(AvailabilityWindow)
                .filter(AvailabilityWindow.trainer_id == trainer_id)
                .order_by(_WEEKDAY_ORDINAL, AvailabilityWindow.start_time)
                .all(),
            )
        except OperationalError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting trainer availability: {str(e)}")
            raise RepositoryException(f"Failed to get trainer availability: {str(e)}")
