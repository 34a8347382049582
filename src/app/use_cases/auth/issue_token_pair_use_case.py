"""
Issue Token Pair Use Case

Mints an access token and a refresh token bound to one new session.
"""

import asyncio
import logging

from src.app.services.credential_signer import ICredentialSigner
from src.app.services.refresh_secret_generator import IRefreshSecretGenerator
from src.app.services.secret_hasher import ISecretHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import generate_uuid
from src.domain.entities import Session
from src.domain.errors import PersistenceError, TokenServiceError
from src.libs.result import Error, Result, Return
from .dtos import TokenPairResponse
from .errors import BAD_REQUEST, ISSUANCE_FAILED_ERROR

logger = logging.getLogger(__name__)


class IssueTokenPairUseCase:
    """
    Use case for issuing a new access/refresh token pair.

    Business Rules:
    - Session ID doubles as the access token's jti
    - Refresh token is bcrypt-hashed before it is stored
    - Plaintext refresh token is only ever returned to the caller
    - Store write is the last step, so a signing or hashing failure
      leaves nothing persisted
    """

    def __init__(
        self,
        uow: UnitOfWork,
        signer: ICredentialSigner,
        generator: IRefreshSecretGenerator,
        hasher: ISecretHasher,
    ):
        self.uow = uow
        self.signer = signer
        self.generator = generator
        self.hasher = hasher

    async def execute(self, user_id: str, source_address: str) -> Result[TokenPairResponse]:
        """
        Execute issue token pair use case.

        Args:
            user_id: Subject of the access token
            source_address: Client address the session is bound to

        Returns:
            Result with TokenPairResponse, or Error
        """
        if not user_id:
            return Return.err(Error(BAD_REQUEST, "User ID is required"))

        session_id = generate_uuid()

        try:
            access_token, _ = self.signer.issue(session_id, user_id, source_address)
            refresh_token, expires_at = self.generator.generate()
            # bcrypt blocks; run it off the event loop
            refresh_token_hash = await asyncio.to_thread(self.hasher.hash, refresh_token)
        except TokenServiceError as e:
            logger.error(f"Failed to build token pair for session {session_id}: {e}")
            return Return.err(ISSUANCE_FAILED_ERROR)

        async with self.uow:
            try:
                await self.uow.sessions.save(
                    Session(
                        id=session_id,
                        refresh_secret_hash=refresh_token_hash,
                        ip_address=source_address,
                        is_revoked=False,
                        expires_at=expires_at,
                    )
                )
                await self.uow.commit()
            except PersistenceError as e:
                logger.error(f"Failed to persist session {session_id}: {e}")
                return Return.err(ISSUANCE_FAILED_ERROR)

        logger.info(f"Issued token pair for session {session_id}")
        return Return.ok(
            TokenPairResponse(access_token=access_token, refresh_token=refresh_token)
        )
