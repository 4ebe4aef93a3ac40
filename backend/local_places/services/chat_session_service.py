"""
Chat session: in-memory transcript per session token.

Sessions expire after ttl_seconds idle; when max_sessions is exceeded the least
recently used session is dropped. A lock guards the map because prune_expired
runs on the scheduler thread.
"""
import logging
import threading
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Callable, Literal

logger = logging.getLogger(__name__)

Role = Literal["user", "model"]


@dataclass
class ChatTurn:
    role: Role
    text: str


@dataclass
class ChatSession:
    session_id: str
    created_at: float
    last_used_at: float
    turns: list[ChatTurn] = field(default_factory=list)

    def append_exchange(self, user_text: str, model_text: str) -> None:
        """Record one completed user/model exchange."""
        self.turns.append(ChatTurn("user", user_text))
        self.turns.append(ChatTurn("model", model_text))


def create_session_id() -> str:
    """Generate a new session id (UUID hex)."""
    return uuid.uuid4().hex


class ChatSessionStore:
    def __init__(
        self,
        ttl_seconds: float = 3600,
        max_sessions: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max(1, max_sessions)
        self._clock = clock
        self._sessions: OrderedDict[str, ChatSession] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _expired(self, session: ChatSession, now: float) -> bool:
        return now - session.last_used_at > self.ttl_seconds

    def get(self, session_id: str) -> ChatSession | None:
        """Live session for the token, or None. Does not refresh last_used_at."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self._expired(session, self._clock()):
                del self._sessions[session_id]
                return None
            return session

    def get_or_create(self, session_id: str | None = None) -> ChatSession:
        """Existing live session (touched), or a fresh one under the given or a generated token."""
        session_id = session_id or create_session_id()
        now = self._clock()
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and self._expired(session, now):
                del self._sessions[session_id]
                session = None
            if session is None:
                session = ChatSession(session_id=session_id, created_at=now, last_used_at=now)
                self._sessions[session_id] = session
                while len(self._sessions) > self.max_sessions:
                    evicted_id, _ = self._sessions.popitem(last=False)
                    logger.info("Chat session capacity reached; evicted %s", evicted_id)
            else:
                session.last_used_at = now
                self._sessions.move_to_end(session_id)
            return session

    def evict(self, session_id: str) -> bool:
        """Remove a session. False if the token was unknown."""
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def prune_expired(self) -> int:
        """Drop sessions idle longer than the TTL. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            stale = [sid for sid, s in self._sessions.items() if self._expired(s, now)]
            for sid in stale:
                del self._sessions[sid]
        if stale:
            logger.info("Pruned %d expired chat session(s)", len(stale))
        return len(stale)


def messages_for_display(session: ChatSession | None) -> list[dict]:
    """Transcript as simple { role, content } for the frontend."""
    if session is None:
        return []
    return [
        {"role": "user" if t.role == "user" else "assistant", "content": t.text}
        for t in session.turns
        if t.text
    ]
