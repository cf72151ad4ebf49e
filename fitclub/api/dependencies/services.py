# fitclub/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

Each request gets a ConstraintEngine bound to its own session; the
conflict-domain lock behind it is process-wide.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from ...services.club_directory import ClubDirectory
from ...services.constraint_engine import ConstraintEngine
from .database import get_db


def get_constraint_engine(db: Session = Depends(get_db)) -> ConstraintEngine:
    """Get the constraint engine for the request's session."""
    return ConstraintEngine(db)


def get_club_directory(db: Session = Depends(get_db)) -> ClubDirectory:
    return ClubDirectory(db)
