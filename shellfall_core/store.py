from __future__ import annotations

import logging
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional

from .config import SESSION_TTL_SEC
from .session import GameSession

logger = logging.getLogger(__name__)


class UnknownSessionError(KeyError):
    """No live session is registered under the given id."""


@dataclass
class _Entry:
    session: GameSession
    lock: threading.Lock = field(default_factory=threading.Lock)
    touched_at: float = 0.0


class SessionStore:
    """
    In-memory registry of live sessions for the web host.

    Each session has its own lock; hold it through use() so a frame tick and
    an input event for the same session never interleave. Sessions untouched
    for ttl_sec are dropped the next time a session is created.
    """

    def __init__(self, ttl_sec: float = SESSION_TTL_SEC, now: Callable[[], float] = time.monotonic) -> None:
        self.ttl_sec = ttl_sec
        self._now = now
        self._entries: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._entries

    def create(self, session: GameSession) -> str:
        session_id = uuid.uuid4().hex
        with self._lock:
            self._prune_locked()
            self._entries[session_id] = _Entry(session=session, touched_at=self._now())
        logger.info('Registered session %s (%d live)', session_id, len(self._entries))
        return session_id

    def get(self, session_id: str) -> Optional[GameSession]:
        with self._lock:
            entry = self._entries.get(session_id)
        return entry.session if entry else None

    @contextmanager
    def use(self, session_id: str) -> Iterator[GameSession]:
        """Yields the session with its lock held. Raises UnknownSessionError for unknown ids."""
        with self._lock:
            entry = self._entries.get(session_id)
        if entry is None:
            raise UnknownSessionError(session_id)
        with entry.lock:
            entry.touched_at = self._now()
            yield entry.session

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._entries.pop(session_id, None) is not None

    def prune(self) -> int:
        with self._lock:
            return self._prune_locked()

    def _prune_locked(self) -> int:
        if self.ttl_sec <= 0:
            return 0
        cutoff = self._now() - self.ttl_sec
        stale = [sid for sid, e in self._entries.items() if e.touched_at < cutoff]
        for sid in stale:
            del self._entries[sid]
        if stale:
            logger.info('Dropped %d idle sessions', len(stale))
        return len(stale)
