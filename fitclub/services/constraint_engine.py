# fitclub/services/constraint_engine.py
"""
Constraint Engine for FitClub

Single admission-control gate in front of every write that creates a
time-bound or counted commitment. Routes a proposal to its ledger and turns
the ledger's typed rejection into a tagged result; it never retries.

Usage:
    engine = ConstraintEngine(db)
    result = engine.propose_registration(class_id, member_id)
    if isinstance(result, Rejected):
        show(result.message)
"""

from dataclasses import dataclass, field
from datetime import date
import logging
from typing import Any, Callable, Dict, Optional, Union

from sqlalchemy.orm import Session

from ..core.enums import CommitmentKind, RejectionReason
from ..core.exceptions import SchedulingRejection
from ..core.scheduling_lock import ConflictDomainLock, get_conflict_domain_lock
from ..domain.intervals import TimeInterval, Weekday
from ..monitoring.prometheus_metrics import prometheus_metrics
from .availability_ledger import AvailabilityLedger
from .booking_ledger import BookingLedger
from .capacity_guard import CapacityGuard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Accepted:
    """The commitment was persisted under ``id``."""

    id: str
    kind: CommitmentKind

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """The commitment violates an invariant; nothing was persisted."""

    reason: RejectionReason
    message: str
    kind: CommitmentKind
    details: Dict[str, Any] = field(default_factory=dict)
    error: Optional[SchedulingRejection] = field(default=None, compare=False, repr=False)

    @property
    def accepted(self) -> bool:
        return False


AdmissionResult = Union[Accepted, Rejected]


class ConstraintEngine:
    """
    Façade over AvailabilityLedger, BookingLedger and CapacityGuard.

    All three ledgers share one session and one conflict-domain lock.
    Transient failures (SchedulingUnavailableException, RepositoryException)
    are not rejections and propagate to the caller.
    """

    def __init__(
        self,
        db: Session,
        lock: Optional[ConflictDomainLock] = None,
        clock: Optional[Callable[[], date]] = None,
    ):
        self.db = db
        self.lock = lock or get_conflict_domain_lock()
        self.availability = AvailabilityLedger(db, lock=self.lock)
        self.bookings = BookingLedger(db, lock=self.lock, clock=clock)
        self.registrations = CapacityGuard(db, lock=self.lock, clock=clock)
        self.logger = logging.getLogger(self.__class__.__name__)

    def propose_window(
        self, trainer_id: str, day_of_week: Weekday, interval: TimeInterval
    ) -> AdmissionResult:
        return self._admit(
            CommitmentKind.AVAILABILITY_WINDOW,
            lambda: self.availability.propose_window(trainer_id, day_of_week, interval),
        )

    def propose_booking(
        self,
        room_id: str,
        trainer_id: str,
        class_date: date,
        interval: TimeInterval,
        capacity: int,
        class_name: Optional[str] = None,
    ) -> AdmissionResult:
        return self._admit(
            CommitmentKind.CLASS_BOOKING,
            lambda: self.bookings.propose_booking(
                room_id, trainer_id, class_date, interval, capacity, class_name=class_name
            ),
        )

    def propose_registration(self, class_id: str, member_id: str) -> AdmissionResult:
        return self._admit(
            CommitmentKind.REGISTRATION,
            lambda: self.registrations.propose_registration(class_id, member_id),
        )

    def _admit(self, kind: CommitmentKind, propose: Callable[[], str]) -> AdmissionResult:
        try:
            commitment_id = propose()
        except SchedulingRejection as exc:
            prometheus_metrics.record_admission(kind.value, "rejected", exc.reason.value)
            self.logger.info(
                f"Rejected {kind.value}: {exc.reason.value}",
                extra={"kind": kind.value, "reason": exc.reason.value, "details": exc.details},
            )
            return Rejected(
                reason=exc.reason,
                message=exc.message,
                kind=kind,
                details=exc.details,
                error=exc,
            )

        prometheus_metrics.record_admission(kind.value, "accepted")
        return Accepted(id=commitment_id, kind=kind)

