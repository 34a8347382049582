import asyncio
from typing import Dict

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session
from src.domain.errors import NotFoundError, PersistenceError


class InMemorySessionRepository(ISessionRepository):
    """
    Process-local session store.

    Used as the test double and for single-process development runs.
    Stores copies so callers cannot mutate persisted state, and performs
    the revoke check-and-set without yielding, which keeps it atomic on
    the event loop.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    async def save(self, session_obj: Session) -> Session:
        await asyncio.sleep(0)
        if session_obj.id in self._sessions:
            raise PersistenceError(f"session {session_obj.id} already exists")
        self._sessions[session_obj.id] = Session(**session_obj.model_dump())
        return session_obj

    async def get(self, session_id: str) -> Session:
        await asyncio.sleep(0)
        stored = self._sessions.get(session_id)
        if stored is None:
            raise NotFoundError(f"session {session_id} not found")
        return Session(**stored.model_dump())

    async def revoke(self, session_id: str) -> bool:
        await asyncio.sleep(0)
        stored = self._sessions.get(session_id)
        if stored is None or stored.is_revoked:
            return False
        stored.is_revoked = True
        return True

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
