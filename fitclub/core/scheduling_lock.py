# fitclub/core/scheduling_lock.py
"""
Conflict-domain locks for scheduling admissions.

Every proposal reads the rows of its conflict domain (same room and date,
same trainer and date, same trainer and weekday, same class), checks them,
and writes. Holding the domain's key for the whole read-check-write
sequence serializes proposals that could conflict while leaving unrelated
domains free to proceed.

Keys are always taken in sorted order so a booking that needs both a room
key and a trainer key cannot deadlock against another booking.

Backends:
    local     process-wide threading locks (always taken)
    advisory  local + pg_advisory_xact_lock on the caller's transaction
    redis     local + a Redis lock per key, for multi-process deployments

Unlike rate limiting, admission locks fail closed: if a key cannot be taken
in time the proposal is refused with SchedulingUnavailableException and
nothing is written.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
import hashlib
import logging
import threading
import time
from typing import Any, Dict, Iterator, List, Optional

from redis import Redis
from redis.exceptions import LockError, RedisError
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from ..domain.intervals import Weekday
from ..monitoring.prometheus_metrics import prometheus_metrics
from .config import settings
from .enums import LockBackend
from .exceptions import SchedulingUnavailableException

logger = logging.getLogger(__name__)


def room_date_key(room_id: str, class_date: date) -> str:
    return f"room:{room_id}:date:{class_date.isoformat()}"


def trainer_date_key(trainer_id: str, class_date: date) -> str:
    return f"trainer:{trainer_id}:date:{class_date.isoformat()}"


def trainer_weekday_key(trainer_id: str, day_of_week: Weekday) -> str:
    return f"trainer:{trainer_id}:weekday:{day_of_week.value}"


def class_key(class_id: str) -> str:
    return f"class:{class_id}"


def advisory_lock_id(key: str) -> int:
    """Map a key to the signed 64-bit id PostgreSQL advisory locks expect."""
    digest = hashlib.blake2b(key.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big", signed=True)


class _LockEntry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class LocalLockRegistry:
    """
    Per-key threading locks, created on demand and dropped when unused.

    ``users`` counts holders plus waiters so an entry is never discarded
    while a thread may still acquire it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[str, _LockEntry] = {}

    def acquire(self, key: str, timeout: float) -> bool:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _LockEntry()
            entry.users += 1
        acquired = entry.lock.acquire(timeout=max(timeout, 0))
        if not acquired:
            self._forget(key, entry)
        return acquired

    def release(self, key: str) -> None:
        with self._guard:
            entry = self._entries[key]
        entry.lock.release()
        self._forget(key, entry)

    def _forget(self, key: str, entry: _LockEntry) -> None:
        with self._guard:
            entry.users -= 1
            if entry.users == 0 and self._entries.get(key) is entry:
                del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


_LOCAL_REGISTRY = LocalLockRegistry()

_REDIS: Optional[Redis] = None
_REDIS_INIT_LOCK = threading.Lock()


def _get_redis() -> Redis:
    global _REDIS
    if _REDIS is not None:
        return _REDIS
    with _REDIS_INIT_LOCK:
        if _REDIS is None:
            _REDIS = Redis.from_url(settings.redis_url, decode_responses=True)
        return _REDIS


class ConflictDomainLock:
    """Mutual exclusion over scheduling conflict domains."""

    def __init__(
        self,
        backend: Optional[LockBackend] = None,
        *,
        timeout_s: Optional[float] = None,
        ttl_s: Optional[int] = None,
        namespace: Optional[str] = None,
        redis_client: Optional[Redis] = None,
        registry: Optional[LocalLockRegistry] = None,
    ) -> None:
        self.backend = backend or LockBackend(settings.scheduling_lock_backend)
        self.timeout_s = timeout_s if timeout_s is not None else settings.scheduling_lock_timeout_seconds
        self.ttl_s = ttl_s if ttl_s is not None else settings.scheduling_lock_ttl_seconds
        self.namespace = namespace or settings.scheduling_lock_namespace
        self._redis = redis_client
        self._registry = registry if registry is not None else _LOCAL_REGISTRY

    def _namespaced(self, key: str) -> str:
        return f"{self.namespace}:lock:{key}"

    def _redis_client(self) -> Redis:
        return self._redis if self._redis is not None else _get_redis()

    @contextmanager
    def hold(self, *keys: str, session: Optional[Session] = None) -> Iterator[List[str]]:
        """
        Hold every key for the duration of the block.

        Args:
            *keys: Conflict-domain keys (duplicates are ignored)
            session: Session whose transaction carries advisory locks

        Yields:
            The keys in acquisition order

        Raises:
            SchedulingUnavailableException: If a key cannot be taken in time
        """
        ordered = sorted(set(keys))
        deadline = time.monotonic() + self.timeout_s
        local_held: List[str] = []
        redis_held: List[Any] = []
        try:
            for key in ordered:
                if not self._registry.acquire(key, deadline - time.monotonic()):
                    self._raise_timeout(key)
                local_held.append(key)

            if self.backend == LockBackend.REDIS:
                for key in ordered:
                    redis_held.append(self._acquire_redis(key, deadline))
            elif self.backend == LockBackend.ADVISORY and session is not None:
                self._acquire_advisory(session, ordered, deadline)

            prometheus_metrics.record_scheduling_lock("acquire", "success")
            yield ordered
        finally:
            for redis_lock in reversed(redis_held):
                self._release_redis(redis_lock)
            for key in reversed(local_held):
                self._registry.release(key)
            if local_held:
                prometheus_metrics.record_scheduling_lock("release", "success")

    def _raise_timeout(self, key: str) -> None:
        prometheus_metrics.record_scheduling_lock("acquire", "timeout")
        logger.warning(
            "scheduling_lock_timeout",
            extra={"lock_key": key, "timeout_s": self.timeout_s, "backend": self.backend.value},
        )
        raise SchedulingUnavailableException(
            "Another request is updating this schedule. Please retry.",
            details={"lock_key": key},
        )

    def _acquire_redis(self, key: str, deadline: float) -> Any:
        try:
            redis_lock = self._redis_client().lock(
                self._namespaced(key),
                timeout=self.ttl_s,
                blocking_timeout=max(deadline - time.monotonic(), 0.01),
            )
            acquired = redis_lock.acquire()
        except RedisError as exc:
            prometheus_metrics.record_scheduling_lock("acquire", "error")
            logger.warning(
                "scheduling_lock_redis_unavailable",
                extra={"lock_key": key, "error": str(exc), "error_type": type(exc).__name__},
            )
            raise SchedulingUnavailableException(
                "Scheduling lock service is unavailable. Please retry.",
                details={"lock_key": key},
            ) from exc
        if not acquired:
            self._raise_timeout(key)
        return redis_lock

    def _release_redis(self, redis_lock: Any) -> None:
        try:
            redis_lock.release()
        except (LockError, RedisError) as exc:
            # Expired or lost: the TTL already freed the key
            prometheus_metrics.record_scheduling_lock("release", "error")
            logger.warning(
                "scheduling_lock_redis_release_failed",
                extra={"error": str(exc), "error_type": type(exc).__name__},
            )

    def _acquire_advisory(self, session: Session, keys: List[str], deadline: float) -> None:
        if session.get_bind().dialect.name != "postgresql":
            return
        timeout_ms = max(int((deadline - time.monotonic()) * 1000), 1)
        try:
            session.execute(text(f"SET LOCAL lock_timeout = {timeout_ms}"))
            for key in keys:
                session.execute(
                    text("SELECT pg_advisory_xact_lock(:lock_id)"),
                    {"lock_id": advisory_lock_id(key)},
                )
        except OperationalError as exc:
            session.rollback()
            prometheus_metrics.record_scheduling_lock("acquire", "timeout")
            raise SchedulingUnavailableException(
                "Another request is updating this schedule. Please retry.",
                details={"lock_keys": keys},
            ) from exc


_default_lock: Optional[ConflictDomainLock] = None


def get_conflict_domain_lock() -> ConflictDomainLock:
    """Process-wide lock configured from settings."""
    global _default_lock
    if _default_lock is None:
        _default_lock = ConflictDomainLock()
    return _default_lock
