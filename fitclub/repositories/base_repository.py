# fitclub/repositories/base_repository.py
"""
Generic data access for FitClub tables.

Repositories flush but never commit; the calling ledger owns the
transaction so a conflict read and the insert it guards share one unit of
work. Store errors reach services as RepositoryException, except
IntegrityError (mapped to a typed rejection by the caller) and
OperationalError (deadlock, serialization failure, locked database; mapped
to SchedulingUnavailableException by the transaction or the app handler).
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
import logging
from typing import Any, Generic, Iterator, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException

T = TypeVar("T")

logger = logging.getLogger(__name__)


class IRepository(ABC, Generic[T]):
    """Operations every scheduling table supports."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Row with this ULID, or None."""

    @abstractmethod
    def create(self, **kwargs: Any) -> T:
        """Insert and flush a row; the id is populated on return."""

    @abstractmethod
    def exists(self, **kwargs: Any) -> bool:
        ...

    @abstractmethod
    def count(self, **kwargs: Any) -> int:
        ...


class BaseRepository(IRepository[T]):
    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @contextmanager
    def _store_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except (IntegrityError, OperationalError):
            raise
        except SQLAlchemyError as e:
            self.logger.error(f"{self.model.__name__} {action} failed: {e}")
            raise RepositoryException(f"Failed to {action} {self.model.__name__}: {e}") from e

    def get_by_id(self, id: str) -> Optional[T]:
        with self._store_errors("load"):
            return self.db.get(self.model, id)

    def create(self, **kwargs: Any) -> T:
        entity = self.model(**kwargs)
        try:
            with self._store_errors("insert"):
                self.db.add(entity)
                self.db.flush()
        except IntegrityError:
            self.logger.warning("Constraint violated inserting %s", self.model.__name__)
            raise
        return entity

    def exists(self, **kwargs: Any) -> bool:
        with self._store_errors("look up"):
            subquery = self.db.query(self.model).filter_by(**kwargs).exists()
            return bool(self.db.query(subquery).scalar())

    def count(self, **kwargs: Any) -> int:
        with self._store_errors("count"):
            return self.db.query(self.model).filter_by(**kwargs).count()
