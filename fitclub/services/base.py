# fitclub/services/base.py
"""
Shared plumbing for FitClub services.

Every ledger owns its transaction: the conflict read and the write it
guards must commit or roll back together. Services also report timings to
Prometheus through ``measure_operation``.
"""

from contextlib import contextmanager
from functools import wraps
import logging
import time
from typing import Any, Callable, Iterator, Optional, TypeVar, cast

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import SchedulingUnavailableException, ServiceException
from ..monitoring.prometheus_metrics import prometheus_metrics

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

SLOW_OPERATION_SECONDS = 1.0


class BaseService:
    """Base class for services bound to one SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(self.__class__.__name__)

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Run the block as one unit of work.

        Commits when the block finishes and rolls back when it raises.
        ``OperationalError`` from any statement in the block (a deadlock, a
        serialization failure, a locked SQLite file, a dropped connection)
        becomes SchedulingUnavailableException: nothing was written, so the
        caller may resubmit. Other store errors become ServiceException.

        Usage:
            with self.transaction():
                self.repository.create(...)
        """
        try:
            yield self.db
            self.db.commit()
        except OperationalError as e:
            self.db.rollback()
            self.logger.warning(f"Transient store failure, rolled back: {e}")
            raise SchedulingUnavailableException(
                "The schedule store is temporarily unavailable. Please retry."
            ) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Store failure, rolled back: {e}")
            raise ServiceException(f"Database operation failed: {e}") from e
        except Exception:
            self.db.rollback()
            raise

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Record duration and outcome of a service method in Prometheus.

        Usage:
            @BaseService.measure_operation("propose_booking")
            def propose_booking(self, ...):
                ...
        """

        def decorator(func: F) -> F:
            @wraps(func)
            def wrapper(self: "BaseService", *args: Any, **kwargs: Any) -> Any:
                started = time.perf_counter()
                error_type: Optional[str] = None
                try:
                    return func(self, *args, **kwargs)
                except Exception as e:
                    error_type = type(e).__name__
                    raise
                finally:
                    elapsed = time.perf_counter() - started
                    if elapsed > SLOW_OPERATION_SECONDS:
                        self.logger.warning(f"Slow operation: {operation_name} took {elapsed:.2f}s")
                    prometheus_metrics.record_service_operation(
                        service=self.__class__.__name__,
                        operation=operation_name,
                        duration=elapsed,
                        status="error" if error_type else "success",
                        error_type=error_type,
                    )

            return cast(F, wrapper)

        return decorator

    def log_operation(self, operation: str, **context: Any) -> None:
        """Log an operation at INFO with its context as structured extras."""
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, **context})
