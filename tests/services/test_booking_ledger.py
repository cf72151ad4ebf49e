# tests/services/test_booking_ledger.py
"""
Tests for BookingLedger: room and trainer double-booking, trainer
availability containment, capacity and date rules.
"""

from datetime import date, time, timedelta
import logging

import pytest

from fitclub.core.enums import RejectionReason
from fitclub.core.exceptions import (
    CapacityExceedsRoomException,
    ClassInPastException,
    InvalidCapacityException,
    RoomDoubleBookedException,
    RoomNotFoundException,
    SchedulingRejection,
    TrainerDoubleBookedException,
    TrainerNotFoundException,
    TrainerUnavailableException,
)
from fitclub.domain.intervals import TimeInterval
from fitclub.models import AvailabilityWindow, ClassBooking, Registration
from fitclub.services.booking_ledger import BookingLedger


def iv(start: str, end: str) -> TimeInterval:
    return TimeInterval(time.fromisoformat(start), time.fromisoformat(end))


@pytest.fixture
def ledger(db, scheduling_lock, clock):
    return BookingLedger(db, lock=scheduling_lock, clock=clock)


@pytest.fixture
def other_trainer_monday(db, other_trainer):
    window = AvailabilityWindow(
        trainer_id=other_trainer.id,
        day_of_week="Monday",
        start_time=time(6, 0),
        end_time=time(20, 0),
    )
    db.add(window)
    db.commit()
    return window


class TestProposeBooking:
    def test_booking_persisted(self, db, ledger, room, trainer, monday_morning, next_monday):
        class_id = ledger.propose_booking(
            room.id, trainer.id, next_monday, iv("09:00", "10:00"), 15, class_name="Morning HIIT"
        )

        stored = db.get(ClassBooking, class_id)
        assert stored.class_name == "Morning HIIT"
        assert stored.room_id == room.id
        assert stored.trainer_id == trainer.id
        assert stored.class_date == next_monday
        assert stored.interval == iv("09:00", "10:00")
        assert stored.capacity == 15

    def test_default_class_name(self, db, ledger, room, trainer, monday_morning, next_monday):
        class_id = ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:00"), 10)

        assert db.get(ClassBooking, class_id).class_name == "Group Class"

    def test_booking_logged_with_duration(self, ledger, room, trainer, monday_morning, next_monday, caplog):
        with caplog.at_level(logging.INFO, logger="BookingLedger"):
            ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:30"), 10)

        assert "09:00-10:30 (90 min)" in caplog.text

    def test_room_double_booked_regardless_of_trainer(
        self, db, ledger, room, trainer, other_trainer, monday_morning, other_trainer_monday, next_monday
    ):
        first_id = ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:00"), 10)

        with pytest.raises(RoomDoubleBookedException) as exc_info:
            ledger.propose_booking(room.id, other_trainer.id, next_monday, iv("09:30", "10:30"), 10)

        assert exc_info.value.details["conflicting_class_id"] == first_id
        assert exc_info.value.details["conflicting_range"] == "09:00-10:00"
        assert db.query(ClassBooking).count() == 1

    def test_back_to_back_in_same_room(self, ledger, room, trainer, monday_morning, next_monday):
        ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:00"), 10)
        ledger.propose_booking(room.id, trainer.id, next_monday, iv("10:00", "11:00"), 10)

    def test_same_slot_on_other_date(self, db, ledger, room, trainer, monday_morning, next_monday):
        ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:00"), 10)
        ledger.propose_booking(
            room.id, trainer.id, next_monday + timedelta(days=7), iv("09:00", "10:00"), 10
        )

        assert db.query(ClassBooking).count() == 2

    def test_trainer_double_booked_across_rooms(
        self, ledger, room, small_room, trainer, monday_morning, next_monday
    ):
        ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:00"), 10)

        with pytest.raises(TrainerDoubleBookedException) as exc_info:
            ledger.propose_booking(small_room.id, trainer.id, next_monday, iv("09:45", "10:15"), 4)

        assert exc_info.value.reason == RejectionReason.TRAINER_DOUBLE_BOOKED

    def test_trainer_without_window_on_weekday(self, ledger, room, trainer, monday_morning, next_monday):
        tuesday = next_monday + timedelta(days=1)

        with pytest.raises(TrainerUnavailableException) as exc_info:
            ledger.propose_booking(room.id, trainer.id, tuesday, iv("09:00", "10:00"), 10)

        assert exc_info.value.details["day_of_week"] == "Tuesday"
        assert exc_info.value.details["windows"] == []

    def test_class_must_fit_inside_one_window(self, ledger, room, trainer, monday_morning, next_monday):
        with pytest.raises(TrainerUnavailableException) as exc_info:
            ledger.propose_booking(room.id, trainer.id, next_monday, iv("11:30", "12:30"), 10)

        assert exc_info.value.details["windows"] == ["08:00-12:00"]

    def test_class_ending_at_window_end_accepted(
        self, ledger, room, trainer, monday_morning, next_monday
    ):
        ledger.propose_booking(room.id, trainer.id, next_monday, iv("11:00", "12:00"), 10)

    def test_capacity_exceeds_room(self, ledger, small_room, trainer, monday_morning, next_monday):
        with pytest.raises(CapacityExceedsRoomException) as exc_info:
            ledger.propose_booking(small_room.id, trainer.id, next_monday, iv("09:00", "10:00"), 5)

        assert exc_info.value.details == {"capacity": 5, "room_capacity": 4}

    @pytest.mark.parametrize("capacity", [0, -3])
    def test_capacity_must_be_positive(self, ledger, room, trainer, monday_morning, next_monday, capacity):
        with pytest.raises(InvalidCapacityException):
            ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:00"), capacity)

    def test_class_in_past(self, ledger, room, trainer, monday_morning, today):
        last_monday = date(2029, 12, 31)
        assert last_monday < today

        with pytest.raises(ClassInPastException) as exc_info:
            ledger.propose_booking(room.id, trainer.id, last_monday, iv("09:00", "10:00"), 10)

        assert exc_info.value.details == {"class_date": "2029-12-31", "today": "2030-01-02"}

    def test_class_today_accepted(self, db, ledger, room, trainer, today):
        db.add(
            AvailabilityWindow(
                trainer_id=trainer.id,
                day_of_week="Wednesday",
                start_time=time(17, 0),
                end_time=time(21, 0),
            )
        )
        db.commit()

        ledger.propose_booking(room.id, trainer.id, today, iv("18:00", "19:00"), 10)

    def test_unknown_room(self, ledger, trainer, monday_morning, next_monday):
        with pytest.raises(RoomNotFoundException):
            ledger.propose_booking("01NOSUCHROOM00000000000000", trainer.id, next_monday, iv("09:00", "10:00"), 10)

    def test_unknown_trainer(self, ledger, room, next_monday):
        with pytest.raises(TrainerNotFoundException):
            ledger.propose_booking(room.id, "01NOSUCHTRAINER0000000000", next_monday, iv("09:00", "10:00"), 10)

    def test_capacity_checked_before_conflicts(
        self, ledger, small_room, trainer, monday_morning, next_monday
    ):
        ledger.propose_booking(small_room.id, trainer.id, next_monday, iv("09:00", "10:00"), 4)

        # Would also double-book the room; capacity is reported first
        with pytest.raises(CapacityExceedsRoomException):
            ledger.propose_booking(small_room.id, trainer.id, next_monday, iv("09:00", "10:00"), 10)

    def test_room_conflict_reported_before_trainer_availability(
        self, ledger, room, trainer, other_trainer, monday_morning, next_monday
    ):
        ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:00"), 10)

        # other_trainer has no Monday window either
        with pytest.raises(RoomDoubleBookedException):
            ledger.propose_booking(room.id, other_trainer.id, next_monday, iv("09:00", "10:00"), 10)


class TestEndToEndScenario:
    def test_room_and_trainer_rules_together(
        self, db, ledger, room, trainer, monday_morning, next_monday
    ):
        outcomes = []
        for interval, capacity in [
            (iv("09:00", "10:00"), 15),
            (iv("09:30", "10:30"), 15),
            (iv("13:00", "14:00"), 15),
        ]:
            try:
                ledger.propose_booking(room.id, trainer.id, next_monday, interval, capacity)
                outcomes.append("accepted")
            except SchedulingRejection as exc:
                outcomes.append(exc.reason)

        assert outcomes == [
            "accepted",
            RejectionReason.ROOM_DOUBLE_BOOKED,
            RejectionReason.TRAINER_UNAVAILABLE,
        ]
        assert db.query(ClassBooking).count() == 1


class TestListUpcomingClasses:
    def test_counts_and_spots_left(self, db, ledger, room, trainer, monday_morning, members, next_monday):
        full_id = ledger.propose_booking(room.id, trainer.id, next_monday, iv("08:00", "09:00"), 2)
        open_id = ledger.propose_booking(room.id, trainer.id, next_monday, iv("10:00", "11:00"), 5)
        db.add_all(
            [
                Registration(class_id=full_id, member_id=members[0].id),
                Registration(class_id=full_id, member_id=members[1].id),
                Registration(class_id=open_id, member_id=members[2].id),
            ]
        )
        db.commit()

        summaries = ledger.list_upcoming_classes()

        assert [s.class_id for s in summaries] == [full_id, open_id]
        assert (summaries[0].registered, summaries[0].spots_left, summaries[0].is_full) == (2, 0, True)
        assert (summaries[1].registered, summaries[1].spots_left, summaries[1].is_full) == (1, 4, False)

    def test_room_and_trainer_names_joined(self, ledger, room, trainer, monday_morning, next_monday):
        ledger.propose_booking(room.id, trainer.id, next_monday, iv("09:00", "10:30"), 10)

        (summary,) = ledger.list_upcoming_classes()

        assert summary.room_name == "Studio A"
        assert summary.trainer_name == "Tara Quinn"
        assert summary.interval.duration_minutes == 90

    def test_past_classes_excluded(self, db, ledger, room, trainer, today):
        db.add(
            ClassBooking(
                class_name="Yesterday Yoga",
                room_id=room.id,
                trainer_id=trainer.id,
                class_date=today - timedelta(days=1),
                start_time=time(9, 0),
                end_time=time(10, 0),
                capacity=10,
            )
        )
        db.commit()

        assert ledger.list_upcoming_classes() == []
