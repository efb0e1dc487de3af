import logging
import time
import uuid
from collections import OrderedDict
from typing import Callable, Optional, Tuple
from ad_studio.core.domain.session import StudioSession

logger = logging.getLogger(__name__)

class SessionStore:
    """In-memory sessions keyed by an opaque id; nothing survives a restart.

    Sessions are kept in least-recently-used order. Ones idle for longer than
    ``idle_timeout`` seconds are dropped, and the oldest is dropped when
    ``max_sessions`` would be exceeded. Dropping a session cancels its video task.
    """

    def __init__(self, message_interval: float = 5.0, idle_timeout: float = 3600.0,
                 max_sessions: int = 1000, clock: Callable[[], float] = time.monotonic):
        self.message_interval = message_interval
        self.idle_timeout = idle_timeout
        self.max_sessions = max_sessions
        self.clock = clock
        self._sessions: "OrderedDict[str, StudioSession]" = OrderedDict()
        self._last_seen = {}

    def get(self, session_id: Optional[str]) -> Optional[StudioSession]:
        self.expire_idle()
        if not session_id or session_id not in self._sessions:
            return None

        self._touch(session_id)
        return self._sessions[session_id]

    def get_or_create(self, session_id: Optional[str]) -> Tuple[StudioSession, bool]:
        """Return the session and whether it was created just now"""
        session = self.get(session_id)
        if session is not None:
            return session, False

        while self.max_sessions and len(self._sessions) >= self.max_sessions:
            oldest = next(iter(self._sessions))
            self._evict(oldest, reason="capacity")

        session = StudioSession(session_id=uuid.uuid4().hex, message_interval=self.message_interval)
        self._sessions[session.session_id] = session
        self._touch(session.session_id)
        logger.info("Session created", extra={"session_id": session.session_id, "active_sessions": len(self)})
        return session, True

    def expire_idle(self) -> None:
        if not self.idle_timeout:
            return

        cutoff = self.clock() - self.idle_timeout
        while self._sessions:
            oldest = next(iter(self._sessions))
            if self._last_seen[oldest] > cutoff:
                break
            self._evict(oldest, reason="idle")

    def _touch(self, session_id: str) -> None:
        self._sessions.move_to_end(session_id)
        self._last_seen[session_id] = self.clock()

    def _evict(self, session_id: str, reason: str) -> None:
        session = self._sessions.pop(session_id)
        self._last_seen.pop(session_id, None)
        session.cancel_video()
        logger.info("Session dropped", extra={"session_id": session_id, "reason": reason})

    def __len__(self) -> int:
        return len(self._sessions)
