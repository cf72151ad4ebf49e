# fitclub/api/dependencies/__init__.py
"""FastAPI dependencies for the scheduling API."""

from .auth import get_principal, require_role
from .database import get_db
from .services import get_club_directory, get_constraint_engine

__all__ = [
    "get_club_directory",
    "get_constraint_engine",
    "get_db",
    "get_principal",
    "require_role",
]
