from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.in_memory_session_repository import (
    InMemorySessionRepository,
)
from src.adapter.services.in_memory_unit_of_work import InMemoryUnitOfWork
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    IssueTokenPairUseCase,
    RefreshTokenPairUseCase,
    RevokeSessionUseCase,
)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

in_memory_sessions = InMemorySessionRepository()


async def get_unit_of_work(request: Request):
    if request.app.state.session_store == "memory":
        yield InMemoryUnitOfWork(in_memory_sessions)
        return
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_issue_use_case(
    request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
) -> IssueTokenPairUseCase:
    state = request.app.state
    return IssueTokenPairUseCase(uow, state.signer, state.generator, state.hasher)


def get_refresh_use_case(
    request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
) -> RefreshTokenPairUseCase:
    state = request.app.state
    return RefreshTokenPairUseCase(
        uow,
        state.signer,
        state.generator,
        state.hasher,
        state.dispatcher,
        state.notify_destination,
    )


def get_revoke_use_case(
    request: Request, uow: UnitOfWork = Depends(get_unit_of_work)
) -> RevokeSessionUseCase:
    return RevokeSessionUseCase(uow, request.app.state.signer)


def get_client_address(request: Request) -> str:
    """Network origin of the request, used as the session's bound address"""
    return request.client.host if request.client else ""
