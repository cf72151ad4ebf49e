# tests/services/test_capacity_guard.py
"""
Tests for CapacityGuard registration admission.
"""

from datetime import time, timedelta

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from fitclub.core.exceptions import (
    AlreadyRegisteredException,
    ClassFullException,
    ClassInPastException,
    ClassNotFoundException,
    MemberNotFoundException,
    SchedulingUnavailableException,
)
from fitclub.models import ClassBooking, Registration
from fitclub.services.capacity_guard import CapacityGuard


@pytest.fixture
def guard(db, scheduling_lock, clock):
    return CapacityGuard(db, lock=scheduling_lock, clock=clock)


def _book(db, room, trainer, class_date, capacity):
    booking = ClassBooking(
        class_name="Spin",
        room_id=room.id,
        trainer_id=trainer.id,
        class_date=class_date,
        start_time=time(9, 0),
        end_time=time(10, 0),
        capacity=capacity,
    )
    db.add(booking)
    db.commit()
    return booking


@pytest.fixture
def small_class(db, room, trainer, next_monday):
    return _book(db, room, trainer, next_monday, capacity=2)


class TestProposeRegistration:
    def test_registration_persisted(self, db, guard, small_class, member):
        registration_id = guard.propose_registration(small_class.id, member.id)

        stored = db.get(Registration, registration_id)
        assert (stored.class_id, stored.member_id) == (small_class.id, member.id)
        assert guard.spots_left(small_class.id) == 1

    def test_duplicate_registration(self, db, guard, small_class, member):
        guard.propose_registration(small_class.id, member.id)

        with pytest.raises(AlreadyRegisteredException) as exc_info:
            guard.propose_registration(small_class.id, member.id)

        assert exc_info.value.status_code == 409
        assert db.query(Registration).count() == 1

    def test_duplicate_reported_before_full(self, guard, small_class, members):
        guard.propose_registration(small_class.id, members[0].id)
        guard.propose_registration(small_class.id, members[1].id)

        with pytest.raises(AlreadyRegisteredException):
            guard.propose_registration(small_class.id, members[0].id)

    def test_class_full(self, db, guard, small_class, members):
        guard.propose_registration(small_class.id, members[0].id)
        guard.propose_registration(small_class.id, members[1].id)

        with pytest.raises(ClassFullException) as exc_info:
            guard.propose_registration(small_class.id, members[2].id)

        assert exc_info.value.details == {"class_id": small_class.id, "capacity": 2}
        assert db.query(Registration).count() == 2
        assert guard.spots_left(small_class.id) == 0

    def test_unknown_class(self, guard, member):
        with pytest.raises(ClassNotFoundException) as exc_info:
            guard.propose_registration("01NOSUCHCLASS0000000000000", member.id)

        assert exc_info.value.details == {"class_id": "01NOSUCHCLASS0000000000000"}

    def test_unknown_member(self, guard, small_class):
        with pytest.raises(MemberNotFoundException):
            guard.propose_registration(small_class.id, "01NOSUCHMEMBER000000000000")

    def test_class_in_past(self, db, guard, room, trainer, member, today):
        past_class = _book(db, room, trainer, today - timedelta(days=2), capacity=10)

        with pytest.raises(ClassInPastException):
            guard.propose_registration(past_class.id, member.id)

    def test_class_today_open(self, db, guard, room, trainer, member, today):
        todays_class = _book(db, room, trainer, today, capacity=10)

        guard.propose_registration(todays_class.id, member.id)

    def test_unique_constraint_maps_to_already_registered(self, guard, small_class, member, monkeypatch):
        # Storage-level duplicate that slipped past the read check
        monkeypatch.setattr(guard.repository, "is_registered", lambda class_id, member_id: False)

        def raise_integrity(**kwargs):
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        monkeypatch.setattr(guard.repository, "create", raise_integrity)

        with pytest.raises(AlreadyRegisteredException):
            guard.propose_registration(small_class.id, member.id)

    def test_deadlock_on_insert_is_retryable(self, db, guard, small_class, member, monkeypatch):
        def raise_deadlock(**kwargs):
            raise OperationalError("INSERT", {}, Exception("deadlock detected"))

        monkeypatch.setattr(guard.repository, "create", raise_deadlock)

        with pytest.raises(SchedulingUnavailableException) as exc_info:
            guard.propose_registration(small_class.id, member.id)

        http_exc = exc_info.value.to_http_exception()
        assert http_exc.status_code == 503
        assert http_exc.headers["Retry-After"] == "1"
        assert db.query(Registration).count() == 0


class TestSpotsLeft:
    def test_empty_class(self, guard, small_class):
        assert guard.spots_left(small_class.id) == 2

    def test_unknown_class(self, guard):
        with pytest.raises(ClassNotFoundException):
            guard.spots_left("01NOSUCHCLASS0000000000000")
