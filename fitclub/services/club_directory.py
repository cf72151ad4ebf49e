# fitclub/services/club_directory.py
"""
Club Directory for FitClub

Read-only listings of rooms and trainers. An admin uses them to choose the
room and trainer of a class; room capacity is the ceiling a class capacity
is checked against.
"""

from typing import List

from sqlalchemy.orm import Session

from ..models.club import Room, Trainer
from ..repositories import RepositoryFactory
from .base import BaseService


class ClubDirectory(BaseService):
    def __init__(self, db: Session):
        super().__init__(db)
        self.room_repository = RepositoryFactory.create_room_repository(db)
        self.trainer_repository = RepositoryFactory.create_trainer_repository(db)

    @BaseService.measure_operation("list_rooms")
    def list_rooms(self) -> List[Room]:
        return self.room_repository.list_rooms()

    @BaseService.measure_operation("list_trainers")
    def list_trainers(self) -> List[Trainer]:
        return self.trainer_repository.list_trainers()
