# fitclub/database/__init__.py
"""
Database engine, session factory, and metadata shared across the application.
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Any, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker

from fitclub.core.config import settings

logger = logging.getLogger(__name__)


def _build_engine_kwargs(db_url: str) -> dict[str, Any]:
    """Pool and connect arguments per dialect."""
    if db_url.startswith("sqlite"):
        # Sessions are handed to worker threads by the HTTP adapter
        return {
            "connect_args": {"check_same_thread": False, "timeout": 30},
            "echo": settings.database_echo,
        }
    return {
        "pool_size": 10,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
        "echo": settings.database_echo,
        "connect_args": {"connect_timeout": 10, "application_name": "fitclub_scheduling"},
    }


def create_db_engine(db_url: str) -> Engine:
    """Create an engine for ``db_url`` with the project's pool settings."""
    db_engine = create_engine(db_url, **_build_engine_kwargs(db_url))

    @event.listens_for(db_engine, "connect")
    def receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
        connection_record.info["connect_time"] = datetime.now()
        logger.debug("Database connection established")

    return db_engine


engine: Engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
