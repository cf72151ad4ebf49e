# fitclub/repositories/factory.py
"""
Repository Factory for FitClub

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from ..models.club import Member
from .base_repository import BaseRepository

# Avoid circular imports
if TYPE_CHECKING:
    from .availability_repository import AvailabilityRepository
    from .class_booking_repository import ClassBookingRepository
    from .club_repository import RoomRepository, TrainerRepository
    from .registration_repository import RegistrationRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_room_repository(db: Session) -> "RoomRepository":
        from .club_repository import RoomRepository

        return RoomRepository(db)

    @staticmethod
    def create_trainer_repository(db: Session) -> "TrainerRepository":
        from .club_repository import TrainerRepository

        return TrainerRepository(db)

    @staticmethod
    def create_member_repository(db: Session) -> BaseRepository[Member]:
        return BaseRepository(db, Member)

    @staticmethod
    def create_availability_repository(db: Session) -> "AvailabilityRepository":
        """Create repository for trainer availability windows."""
        from .availability_repository import AvailabilityRepository

        return AvailabilityRepository(db)

    @staticmethod
    def create_class_booking_repository(db: Session) -> "ClassBookingRepository":
        """Create repository for group class bookings."""
        from .class_booking_repository import ClassBookingRepository

        return ClassBookingRepository(db)

    @staticmethod
    def create_registration_repository(db: Session) -> "RegistrationRepository":
        """Create repository for class registrations."""
        from .registration_repository import RegistrationRepository

        return RegistrationRepository(db)
