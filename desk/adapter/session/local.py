"""In-process store of open review sessions."""

import threading
from datetime import datetime
from typing import Optional

from desk.domain.model.session import ReviewSession
from desk.domain.repository import ReviewSessionRepository
from desk.domain.value import MaterialId, ReviewSessionId


class LocalReviewSessionStore(ReviewSessionRepository):
    """Review sessions kept in server memory.

    Sessions do not survive a restart. A material found in progress
    afterwards is recovered by the initial-state substitution.
    """

    def __init__(self) -> None:
        """Initialize empty store."""
        self._sessions: dict[ReviewSessionId, ReviewSession] = {}
        self._guard = threading.Lock()

    async def add(self, session: ReviewSession) -> ReviewSession:
        with self._guard:
            self._drop_editor_sessions(session)
            self._sessions[session.id] = session
        return session

    async def claim(
        self, session: ReviewSession, now: datetime
    ) -> Optional[ReviewSession]:
        with self._guard:
            for other in self._sessions.values():
                if (
                    other.material_id == session.material_id
                    and other.editor != session.editor
                    and not other.is_expired(now)
                ):
                    return other
            self._drop_editor_sessions(session)
            self._sessions[session.id] = session
        return None

    async def find_by_id(self, session_id: ReviewSessionId) -> Optional[ReviewSession]:
        with self._guard:
            return self._sessions.get(session_id)

    async def find_by_material(self, material_id: MaterialId) -> list[ReviewSession]:
        with self._guard:
            sessions = [s for s in self._sessions.values() if s.material_id == material_id]
        return sorted(sessions, key=lambda s: s.started_at)

    async def touch(
        self, session_id: ReviewSessionId, expires_at: datetime
    ) -> Optional[ReviewSession]:
        with self._guard:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            refreshed = session.model_copy(update={"expires_at": expires_at})
            self._sessions[session_id] = refreshed
        return refreshed

    async def remove(self, session_id: ReviewSessionId) -> Optional[ReviewSession]:
        with self._guard:
            return self._sessions.pop(session_id, None)

    async def purge_expired(self, now: datetime) -> list[ReviewSession]:
        with self._guard:
            expired = [s for s in self._sessions.values() if s.is_expired(now)]
            for session in expired:
                del self._sessions[session.id]
        return expired

    def _drop_editor_sessions(self, session: ReviewSession) -> None:
        stale = [
            s.id
            for s in self._sessions.values()
            if s.material_id == session.material_id and s.editor == session.editor
        ]
        for session_id in stale:
            del self._sessions[session_id]
