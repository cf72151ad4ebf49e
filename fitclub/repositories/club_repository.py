# fitclub/repositories/club_repository.py
"""
Room and Trainer Repositories for FitClub

Primary-key lookups for existence checks plus the directory listings an
admin picks from when proposing a class.
"""

import logging
from typing import List, cast

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.club import Room, Trainer
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class RoomRepository(BaseRepository[Room]):
    """Repository for bookable rooms."""

    def __init__(self, db: Session):
        super().__init__(db, Room)

    def list_rooms(self) -> List[Room]:
        """Every room, by name."""
        try:
            return cast(List[Room], self.db.query(Room).order_by(Room.name, Room.id).all())
        except OperationalError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing rooms: {str(e)}")
            raise RepositoryException(f"Failed to list rooms: {str(e)}")


class TrainerRepository(BaseRepository[Trainer]):
    """Repository for trainers."""

    def __init__(self, db: Session):
        super().__init__(db, Trainer)

    def list_trainers(self) -> List[Trainer]:
        """Every trainer, by last then first name."""
        try:
            return cast(
                List[Trainer],
                self.db.query(Trainer)
                .order_by(Trainer.last_name, Trainer.first_name, Trainer.id)
                .all(),
            )
        except OperationalError:
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"Error listing trainers: {str(e)}")
            raise RepositoryException(f"Failed to list trainers: {str(e)}")
