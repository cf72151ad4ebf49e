# fitclub/repositories/registration_repository.py
"""
Registration Repository for FitClub

Seat counting and duplicate detection for class registrations.
"""

import logging

from sqlalchemy.orm import Session

from ..models.group_class import Registration
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class RegistrationRepository(BaseRepository[Registration]):
    """Repository for class registrations."""

    def __init__(self, db: Session):
        super().__init__(db, Registration)

    def count_for_class(self, class_id: str) -> int:
        """Number of members registered for a class."""
        return self.count(class_id=class_id)

    def is_registered(self, class_id: str, member_id: str) -> bool:
        """Whether the member already holds a seat in the class."""
        return self.exists(class_id=class_id, member_id=member_id)
