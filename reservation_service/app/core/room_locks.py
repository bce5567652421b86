import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, List

from sqlalchemy import text
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 10


class RoomLockTimeout(Exception):
    pass


class RoomLockRegistry:
    """One lock per room number, so only requests that want the same room wait on each other."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def _lock_for(self, room_number: int) -> threading.Lock:
        with self._guard:
            if room_number not in self._locks:
                self._locks[room_number] = threading.Lock()
            return self._locks[room_number]

    @contextmanager
    def hold(self, db: Session, room_numbers: Iterable[int], timeout: float = LOCK_TIMEOUT_SECONDS):
        """
        Lock the given rooms for the rest of the current transaction step.

        Locks are taken in ascending room order. On PostgreSQL a transaction-scoped
        advisory lock per room is taken as well, so separate worker processes queue
        on the same rooms; those are released by the session's commit or rollback.
        """
        ordered = sorted(set(room_numbers))
        acquired: List[threading.Lock] = []
        try:
            for room_number in ordered:
                lock = self._lock_for(room_number)
                if not lock.acquire(timeout=timeout):
                    raise RoomLockTimeout(
                        f"Timed out waiting for room {room_number}")
                acquired.append(lock)

            if db.get_bind().dialect.name == "postgresql":
                for room_number in ordered:
                    db.execute(text("SELECT pg_advisory_xact_lock(:key)"),
                               {"key": room_number})
            yield ordered
        finally:
            for lock in reversed(acquired):
                lock.release()


room_locks = RoomLockRegistry()
