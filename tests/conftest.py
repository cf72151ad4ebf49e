# tests/conftest.py
"""
Shared fixtures for the FitClub test suite.

Each test gets a fresh in-memory SQLite database, a private conflict-domain
lock and a fixed club date, so tests never depend on the wall clock or on
each other.
"""

from datetime import date, time
from typing import Iterator, List

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fitclub.core.enums import LockBackend
from fitclub.core.scheduling_lock import ConflictDomainLock, LocalLockRegistry
from fitclub.database import Base
import fitclub.models  # noqa: F401  registers every table on Base.metadata
from fitclub.models import AvailabilityWindow, Member, Room, Trainer
from fitclub.services.constraint_engine import ConstraintEngine

# 2030-01-02 is a Wednesday; 2030-01-07 is the following Monday
CLUB_TODAY = date(2030, 1, 2)
NEXT_MONDAY = date(2030, 1, 7)


@pytest.fixture
def today() -> date:
    return CLUB_TODAY


@pytest.fixture
def next_monday() -> date:
    return NEXT_MONDAY


@pytest.fixture
def clock():
    return lambda: CLUB_TODAY


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(db_engine: Engine) -> Iterator[Session]:
    TestingSession = sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def lock_registry() -> LocalLockRegistry:
    return LocalLockRegistry()


@pytest.fixture
def scheduling_lock(lock_registry: LocalLockRegistry) -> ConflictDomainLock:
    return ConflictDomainLock(LockBackend.LOCAL, timeout_s=2.0, registry=lock_registry)


@pytest.fixture
def constraint_engine(db: Session, scheduling_lock: ConflictDomainLock, clock) -> ConstraintEngine:
    return ConstraintEngine(db, lock=scheduling_lock, clock=clock)


@pytest.fixture
def room(db: Session) -> Room:
    room = Room(name="Studio A", capacity=20)
    db.add(room)
    db.commit()
    return room


@pytest.fixture
def small_room(db: Session) -> Room:
    room = Room(name="Spin Room", capacity=4)
    db.add(room)
    db.commit()
    return room


@pytest.fixture
def trainer(db: Session) -> Trainer:
    trainer = Trainer(
        first_name="Tara",
        last_name="Quinn",
        email="tara.quinn@fitclub.example",
        specialization="HIIT",
    )
    db.add(trainer)
    db.commit()
    return trainer


@pytest.fixture
def other_trainer(db: Session) -> Trainer:
    trainer = Trainer(first_name="Omar", last_name="Reyes", email="omar.reyes@fitclub.example")
    db.add(trainer)
    db.commit()
    return trainer


@pytest.fixture
def members(db: Session) -> List[Member]:
    created = [
        Member(first_name=f"Member{i}", last_name="Test", email=f"member{i}@fitclub.example")
        for i in range(6)
    ]
    db.add_all(created)
    db.commit()
    return created


@pytest.fixture
def member(members: List[Member]) -> Member:
    return members[0]


@pytest.fixture
def monday_morning(db: Session, trainer: Trainer) -> AvailabilityWindow:
    """Trainer available Mondays 08:00-12:00."""
    window = AvailabilityWindow(
        trainer_id=trainer.id,
        day_of_week="Monday",
        start_time=time(8, 0),
        end_time=time(12, 0),
    )
    db.add(window)
    db.commit()
    return window
