from typing import Optional

from src.adapter.repositories.in_memory_session_repository import (
    InMemorySessionRepository,
)
from src.app.services.unit_of_work import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """UnitOfWork over the in-memory store. Writes apply immediately."""

    def __init__(self, sessions: Optional[InMemorySessionRepository] = None):
        self.sessions = sessions if sessions is not None else InMemorySessionRepository()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass

    async def commit(self):
        pass

    async def rollback(self):
        pass
