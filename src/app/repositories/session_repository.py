from abc import ABC, abstractmethod

from src.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def save(self, session: Session) -> Session:
        """Persist a new session. Raises PersistenceError on fault or duplicate id."""
        pass

    @abstractmethod
    async def get(self, session_id: str) -> Session:
        """Get session by ID. Raises NotFoundError if absent, PersistenceError on fault."""
        pass

    @abstractmethod
    async def revoke(self, session_id: str) -> bool:
        """
        Mark session revoked. Idempotent.

        Returns True if this call flipped is_revoked, False if it was already
        revoked (or absent). Raises PersistenceError on fault.
        """
        pass
