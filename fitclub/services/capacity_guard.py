# fitclub/services/capacity_guard.py
"""
Capacity Guard for FitClub

Admits member registrations for group classes. Popular classes see many
members registering at once, so the count-then-insert sequence runs under
the class's conflict-domain lock; the unique (class_id, member_id)
constraint backs up the duplicate check at the storage layer.
"""

from datetime import date
import logging
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.exceptions import (
    AlreadyRegisteredException,
    ClassFullException,
    ClassInPastException,
    ClassNotFoundException,
    MemberNotFoundException,
)
from ..core.scheduling_lock import ConflictDomainLock, class_key, get_conflict_domain_lock
from ..core.timezone_utils import get_club_today
from ..repositories import RepositoryFactory
from ..repositories.registration_repository import RegistrationRepository
from .base import BaseService

logger = logging.getLogger(__name__)


class CapacityGuard(BaseService):
    """Per-class registration counter with a hard capacity ceiling."""

    def __init__(
        self,
        db: Session,
        repository: Optional[RegistrationRepository] = None,
        lock: Optional[ConflictDomainLock] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        super().__init__(db)
        self.repository = repository or RepositoryFactory.create_registration_repository(db)
        self.class_repository = RepositoryFactory.create_class_booking_repository(db)
        self.member_repository = RepositoryFactory.create_member_repository(db)
        self.lock = lock or get_conflict_domain_lock()
        self.clock = clock or get_club_today

    @BaseService.measure_operation("propose_registration")
    def propose_registration(self, class_id: str, member_id: str) -> str:
        """
        Admit a member into a class.

        Args:
            class_id: Class to register for
            member_id: Registering member

        Returns:
            ID of the persisted registration

        Raises:
            ClassNotFoundException: Unknown class
            ClassInPastException: Class date before today
            MemberNotFoundException: Unknown member
            AlreadyRegisteredException: Member already holds a seat
            ClassFullException: No seats left
        """
        self.log_operation("propose_registration", class_id=class_id, member_id=member_id)

        with self.lock.hold(class_key(class_id), session=self.db):
            with self.transaction():
                group_class = self.class_repository.get_by_id(class_id)
                if group_class is None:
                    raise ClassNotFoundException(class_id)
                today = self.clock()
                if group_class.class_date < today:
                    raise ClassInPastException(group_class.class_date, today)
                if self.member_repository.get_by_id(member_id) is None:
                    raise MemberNotFoundException(member_id)

                if self.repository.is_registered(class_id, member_id):
                    raise AlreadyRegisteredException(class_id, member_id)

                registered = self.repository.count_for_class(class_id)
                if registered >= group_class.capacity:
                    self.logger.info(
                        f"Class {class_id} full ({registered}/{group_class.capacity}); "
                        f"rejecting {member_id}"
                    )
                    raise ClassFullException(class_id, group_class.capacity)

                try:
                    registration = self.repository.create(class_id=class_id, member_id=member_id)
                except IntegrityError as exc:
                    raise AlreadyRegisteredException(class_id, member_id) from exc
                registration_id = registration.id

        self.logger.info(f"Member {member_id} registered for class {class_id}")
        return registration_id

    @BaseService.measure_operation("spots_left")
    def spots_left(self, class_id: str) -> int:
        """Seats still open in a class."""
        group_class = self.class_repository.get_by_id(class_id)
        if group_class is None:
            raise ClassNotFoundException(class_id)
        return max(group_class.capacity - self.repository.count_for_class(class_id), 0)
