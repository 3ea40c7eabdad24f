"""Session store holding one scene per canvas session."""

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import uuid4

from PIL import Image

from canvas_builder.domain.errors import SessionNotFound
from canvas_builder.domain.scenes import CanvasSession, Scene

_logger = logging.getLogger(__name__)

PreviewFactory = Callable[[int, int], Image.Image]


class SessionStore(Protocol):
    """Keyed storage for live canvas sessions."""

    def create(self, width: int, height: int) -> str:
        """Create an empty scene and return its session id."""

    def get(self, session_id: str) -> CanvasSession:
        """Return a live session or raise SessionNotFound."""


@dataclass
class _StoreEntry:
    session: CanvasSession
    last_accessed_at: datetime


class InMemorySessionStore(SessionStore):
    """Process-local session store with LRU eviction and idle expiry."""

    def __init__(
        self,
        max_sessions: int | None = None,
        ttl_seconds: int | None = None,
        preview_factory: PreviewFactory | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.max_sessions = max_sessions
        self.ttl_seconds = ttl_seconds
        self.preview_factory = preview_factory
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._entries: OrderedDict[str, _StoreEntry] = OrderedDict()
        self._lock = threading.Lock()

    def create(self, width: int, height: int) -> str:
        """Create an empty scene sized width x height."""
        scene = Scene(width, height)
        preview = (
            self.preview_factory(width, height) if self.preview_factory else None
        )
        with self._lock:
            session_id = str(uuid4())
            while session_id in self._entries:
                session_id = str(uuid4())
            session = CanvasSession(id=session_id, scene=scene, preview=preview)
            self._entries[session_id] = _StoreEntry(
                session=session, last_accessed_at=self._clock()
            )
            self._evict_overflow()
        _logger.info("Canvas initialized: id=%s size=%sx%s", session_id, width, height)
        return session_id

    def get(self, session_id: str) -> CanvasSession:
        """Return a session and mark it as recently used."""
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                raise SessionNotFound()
            now = self._clock()
            if self._is_expired(entry, now):
                self._entries.pop(session_id, None)
                _logger.info("Canvas session expired: id=%s", session_id)
                raise SessionNotFound()
            entry.last_accessed_at = now
            self._entries.move_to_end(session_id)
            return entry.session

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._entries)

    def _is_expired(self, entry: _StoreEntry, now: datetime) -> bool:
        if self.ttl_seconds is None:
            return False
        return now >= entry.last_accessed_at + timedelta(seconds=self.ttl_seconds)

    def _purge_expired(self, now: datetime) -> None:
        expired = [
            session_id
            for session_id, entry in self._entries.items()
            if self._is_expired(entry, now)
        ]
        for session_id in expired:
            self._entries.pop(session_id, None)

    def _evict_overflow(self) -> None:
        if self.max_sessions is None:
            return
        self._purge_expired(self._clock())
        while len(self._entries) > self.max_sessions:
            evicted_id, _ = self._entries.popitem(last=False)
            _logger.info("Canvas session evicted: id=%s", evicted_id)
