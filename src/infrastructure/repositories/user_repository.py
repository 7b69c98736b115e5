from __future__ import annotations

import itertools
import threading

import structlog
from src.domain.models import User

logger = structlog.get_logger()


class InMemoryUserRepository:
    """Thread-safe, process-local user store.

    Records are immutable ``User`` snapshots keyed by id and replaced
    wholesale on update. Ids come from a counter that is only advanced under
    the lock, so they are unique, gap-free and never reused. Nothing is
    persisted across restarts.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._users: dict[int, User] = {}

    def add(self, user: User) -> int:
        with self._lock:
            user_id = next(self._ids)
            self._users[user_id] = user.with_id(user_id)
        logger.debug("user_store_add", user_id=user_id)
        return user_id

    def get_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_all(self) -> list[User]:
        """Return a point-in-time snapshot ordered by id."""
        with self._lock:
            snapshot = list(self._users.values())
        return sorted(snapshot, key=lambda user: user.id)

    def update(self, user: User) -> bool:
        with self._lock:
            if user.id not in self._users:
                return False
            self._users[user.id] = user
        return True

    def delete(self, user_id: int) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
