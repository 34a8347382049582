import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.session_repository import ISessionRepository
from src.domain.entities import Session
from src.domain.errors import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, session_obj: Session) -> Session:
        """Insert a new session; a duplicate id fails the flush"""
        try:
            self.session.add(session_obj)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save session {session_obj.id}: {e}")
            raise PersistenceError(f"failed to save session {session_obj.id}") from e
        return session_obj

    async def get(self, session_id: str) -> Session:
        """Get session by ID, always re-reading the row"""
        stmt = (
            select(Session)
            .where(Session.id == session_id)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
            session_obj = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load session {session_id}: {e}")
            raise PersistenceError(f"failed to load session {session_id}") from e

        if session_obj is None:
            raise NotFoundError(f"session {session_id} not found")
        return session_obj

    async def revoke(self, session_id: str) -> bool:
        """
        Revoke a session with a single conditional UPDATE.

        Concurrent revokes of the same row serialize in the database; only
        the one that still sees is_revoked = false gets rowcount 1.
        """
        stmt = (
            update(Session)
            .where(Session.id == session_id, Session.is_revoked == False)  # noqa: E712
            .values(is_revoked=True)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to revoke session {session_id}: {e}")
            raise PersistenceError(f"failed to revoke session {session_id}") from e
        return result.rowcount > 0
