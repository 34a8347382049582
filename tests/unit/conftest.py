from unittest.mock import AsyncMock, MagicMock

import pytest

from src.adapter.repositories.in_memory_session_repository import (
    InMemorySessionRepository,
)
from src.adapter.services.bcrypt_secret_hasher import BcryptSecretHasher
from src.adapter.services.in_memory_unit_of_work import InMemoryUnitOfWork
from src.adapter.services.jwt_credential_signer import JwtCredentialSigner
from src.adapter.services.refresh_secret_generator import RefreshSecretGenerator
from src.app.services.notification_dispatcher import NotificationDispatcher
from tests.fixtures.notifiers import RecordingNotifier

TEST_SIGNING_KEY = "very_secret_key"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.save = AsyncMock()
    uow.sessions.get = AsyncMock()
    uow.sessions.revoke = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def signer():
    return JwtCredentialSigner(TEST_SIGNING_KEY)


@pytest.fixture
def generator():
    return RefreshSecretGenerator()


@pytest.fixture
def hasher():
    # Minimum cost keeps the suite fast
    return BcryptSecretHasher(rounds=4)


@pytest.fixture
def session_store():
    return InMemorySessionRepository()


@pytest.fixture
def memory_uow(session_store):
    return InMemoryUnitOfWork(session_store)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def dispatcher(notifier):
    return NotificationDispatcher(notifier)
