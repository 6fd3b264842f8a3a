"""
Per-event mutual exclusion for the booking critical section.

Both providers expose ``hold(event_id)``: a context manager that is exclusive
for one event id and never blocks attempts against other events.
"""

import threading
from contextlib import contextmanager
from functools import lru_cache
from typing import ContextManager, Iterator, Protocol

import redis
from loguru import logger

from seat_ledger.core.config import (
    LOCK_BLOCKING_TIMEOUT,
    LOCK_TIMEOUT,
    get_lock_backend,
    get_redis_url,
)
from seat_ledger.core.exceptions import LockUnavailableError


class EventLocks(Protocol):
    def hold(self, event_id: int) -> ContextManager[None]: ...


@lru_cache(maxsize=1)
def get_redis_client():
    """Get the process-wide Redis client for locking; its pool is shared by every request."""
    return redis.from_url(get_redis_url(), decode_responses=True)


def lock_key(event_id: int) -> str:
    return f"event_lock:{event_id}"


class RedisEventLocks:
    """Distributed lock per event, shared by every API and worker process."""

    def __init__(
        self,
        client: redis.Redis,
        timeout: float = LOCK_TIMEOUT,
        blocking_timeout: float = LOCK_BLOCKING_TIMEOUT,
    ):
        self.client = client
        self.timeout = timeout
        self.blocking_timeout = blocking_timeout

    @contextmanager
    def hold(self, event_id: int) -> Iterator[None]:
        lock = self.client.lock(
            lock_key(event_id),
            timeout=self.timeout,
            blocking_timeout=self.blocking_timeout,
        )
        try:
            acquired = lock.acquire(blocking=True)
        except (redis.exceptions.LockError, redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as exc:
            logger.warning("Redis refused the lock on event {}: {}", event_id, exc)
            raise LockUnavailableError(f"Could not lock event {event_id}, please try again.") from exc
        if not acquired:
            logger.warning("Timed out after {}s waiting for lock on event {}", self.blocking_timeout, event_id)
            raise LockUnavailableError(f"Could not lock event {event_id}, please try again.")

        try:
            yield
        finally:
            try:
                lock.release()
            except redis.exceptions.LockNotOwnedError:
                # The lock expired while held; the conditional update still guards capacity
                logger.warning("Lock on event {} expired before release", event_id)


class LocalEventLocks:
    """In-process lock registry. Only valid when a single process writes the ledger."""

    def __init__(self, blocking_timeout: float = LOCK_BLOCKING_TIMEOUT):
        self.blocking_timeout = blocking_timeout
        self._locks: dict[int, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, event_id: int) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(event_id, threading.Lock())

    @contextmanager
    def hold(self, event_id: int) -> Iterator[None]:
        lock = self._lock_for(event_id)
        if not lock.acquire(timeout=self.blocking_timeout):
            logger.warning("Timed out after {}s waiting for lock on event {}", self.blocking_timeout, event_id)
            raise LockUnavailableError(f"Could not lock event {event_id}, please try again.")
        try:
            yield
        finally:
            lock.release()


_local_locks = LocalEventLocks()


def get_event_locks() -> EventLocks:
    if get_lock_backend() == "local":
        return _local_locks
    return RedisEventLocks(get_redis_client())
