"""
In-memory repository for club sessions.
"""

import logging

from domain.models.session import Session
from repositories.interfaces import ISessionRepository

logger = logging.getLogger("spiketime.repositories.session")


class SessionRepository(ISessionRepository):
    """
    Owns the process's session collection.

    Sessions are returned by reference; mutation is left to the enrollment
    and admin services, which serialize it under their own lock.
    """

    def __init__(self, sessions: list[Session] | None = None):
        self._sessions: dict[str, Session] = {}
        for session in sessions or []:
            self.add(session)

    def add(self, session: Session) -> None:
        if session.session_id in self._sessions:
            raise ValueError(f"Session {session.session_id} already exists")
        self._sessions[session.session_id] = session

    def get_by_id(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def get_all(self) -> list[Session]:
        """All sessions ordered by start time."""
        return sorted(self._sessions.values(), key=lambda s: s.start_time)

    def exists(self, session_id: str) -> bool:
        return session_id in self._sessions

    def delete(self, session_id: str) -> bool:
        removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.debug(f"Deleted session {session_id}")
        return removed is not None
