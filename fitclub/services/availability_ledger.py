# fitclub/services/availability_ledger.py
"""
Availability Ledger for FitClub

Admits recurring weekly availability windows declared by trainers. For a
fixed trainer and weekday no two windows may overlap; any overlap is a hard
rejection, never resolved by precedence.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.exceptions import AvailabilityOverlapException, TrainerNotFoundException
from ..core.scheduling_lock import ConflictDomainLock, get_conflict_domain_lock, trainer_weekday_key
from ..domain.intervals import TimeInterval, Weekday, overlaps
from ..models.availability import AvailabilityWindow
from ..repositories import RepositoryFactory
from ..repositories.availability_repository import AvailabilityRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class AvailabilityLedger(BaseService):
    """
    Per-trainer weekly availability windows.

    The read-check-write of a proposal runs under the trainer+weekday
    conflict-domain lock, inside one transaction.
    """

    def __init__(
        self,
        db: Session,
        repository: Optional[AvailabilityRepository] = None,
        lock: Optional[ConflictDomainLock] = None,
    ):
        """
        Initialize availability ledger.

        Args:
            db: Database session
            repository: Optional AvailabilityRepository instance
            lock: Optional conflict-domain lock (defaults to the process-wide one)
        """
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_availability_repository(db)
        self.trainer_repository = RepositoryFactory.create_trainer_repository(db)
        self.lock = lock or get_conflict_domain_lock()

    @BaseService.measure_operation("propose_window")
    def propose_window(self, trainer_id: str, day_of_week: Weekday, interval: TimeInterval) -> str:
        """
        Admit a new availability window.

        Args:
            trainer_id: Trainer declaring the window
            day_of_week: Weekday the window recurs on
            interval: Wall-clock range, half-open

        Returns:
            ID of the persisted window

        Raises:
            TrainerNotFoundException: If the trainer does not exist
            AvailabilityOverlapException: If an existing window overlaps
        """
        day_of_week = Weekday(day_of_week)
        self.log_operation(
            "propose_window", trainer_id=trainer_id, day_of_week=day_of_week.value, interval=str(interval)
        )

        with self.lock.hold(trainer_weekday_key(trainer_id, day_of_week), session=self.db):
            with self.transaction():
                if self.trainer_repository.get_by_id(trainer_id) is None:
                    raise TrainerNotFoundException(trainer_id)

                for existing in self.repository.get_windows_for_day(trainer_id, day_of_week):
                    if overlaps(existing.interval, interval):
                        self.logger.info(
                            f"Availability overlap for {trainer_id} on {day_of_week.value}: "
                            f"{interval} vs {existing.interval}"
                        )
                        raise AvailabilityOverlapException(
                            day_of_week=day_of_week.value,
                            new_range=str(interval),
                            conflicting_range=str(existing.interval),
                            conflicting_window_id=existing.id,
                        )

                window = self.repository.create(
                    trainer_id=trainer_id,
                    day_of_week=day_of_week.value,
                    start_time=interval.start,
                    end_time=interval.end,
                )
                window_id = window.id

        self.logger.info(f"Availability window {window_id} added for {trainer_id}")
        return window_id

    @BaseService.measure_operation("list_windows")
    def list_windows(self, trainer_id: str) -> List[AvailabilityWindow]:
        """Every window of a trainer, Monday through Sunday, then by start time."""
        return self.repository.get_windows_for_trainer(trainer_id)
