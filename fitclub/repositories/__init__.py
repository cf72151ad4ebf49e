# fitclub/repositories/__init__.py
"""
Repository layer for FitClub.

Repositories encapsulate data access and never commit; services own the
transaction.
"""

from .base_repository import BaseRepository, IRepository
from .factory import RepositoryFactory

__all__ = ["BaseRepository", "IRepository", "RepositoryFactory"]
