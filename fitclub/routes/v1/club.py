# fitclub/routes/v1/club.py
"""
Club directory routes - API v1

Endpoints:
    GET /rooms     → Rooms with their capacity
    GET /trainers  → Trainers
"""

from typing import List

from fastapi import APIRouter, Depends

from ...api.dependencies import get_club_directory, get_principal
from ...principal import ClubPrincipal
from ...schemas.scheduling import RoomResponse, TrainerResponse
from ...services.club_directory import ClubDirectory

# V1 router - no prefix here, added when mounting in main.py
router = APIRouter(tags=["club-v1"])


@router.get("/rooms", response_model=List[RoomResponse])
def list_rooms(
    _: ClubPrincipal = Depends(get_principal),
    directory: ClubDirectory = Depends(get_club_directory),
) -> List[RoomResponse]:
    return [RoomResponse.model_validate(room) for room in directory.list_rooms()]


@router.get("/trainers", response_model=List[TrainerResponse])
def list_trainers(
    _: ClubPrincipal = Depends(get_principal),
    directory: ClubDirectory = Depends(get_club_directory),
) -> List[TrainerResponse]:
    return [TrainerResponse.model_validate(trainer) for trainer in directory.list_trainers()]
