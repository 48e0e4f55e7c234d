"""Short-lived cache of resolved contact details."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable
from zoneinfo import ZoneInfo

from goalsetting.db.models import CachedContact, Contact
from goalsetting.utils.constants import DEFAULT_CONTACT_TTL

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(ZoneInfo("UTC"))


class ContactCache:
    """TTL-bounded mapping from user id to contact details.

    An entry is valid only while ``now - cached_at < ttl``. Reads and writes
    take a lock so concurrent dispatches never see a half-updated mapping.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_CONTACT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CachedContact] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, user_id: str) -> Contact | None:
        """Return the cached contact, or None on a miss.

        A stale entry counts as a miss and is dropped.
        """
        with self._lock:
            cached = self._entries.get(user_id)
            if cached is None:
                return None

            if self._clock() - cached.cached_at < self.ttl:
                logger.debug(f"Cache hit for user {user_id}")
                return Contact(email=cached.email, name=cached.name)

            del self._entries[user_id]

        logger.debug(f"Cache expired for user {user_id}")
        return None

    def set(self, user_id: str, email: str | None, name: str | None) -> None:
        """Store a freshly timestamped entry, replacing any existing one."""
        entry = CachedContact(
            user_id=user_id, email=email, name=name, cached_at=self._clock()
        )
        with self._lock:
            self._entries[user_id] = entry
        logger.debug(f"Cached contact for user {user_id}")

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()
        logger.info("Contact cache cleared")

    def evict_expired(self) -> int:
        """Remove expired entries and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [
                user_id
                for user_id, cached in self._entries.items()
                if now - cached.cached_at >= self.ttl
            ]
            for user_id in expired:
                del self._entries[user_id]

        if expired:
            logger.info(f"Evicted {len(expired)} expired contact cache entries")

        return len(expired)
