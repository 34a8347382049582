"""
Revoke Session Use Case

Ends the single session behind an access token (logout).
"""

import logging

from src.app.services.credential_signer import ICredentialSigner
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import InvalidSignatureError, NotFoundError, PersistenceError
from src.libs.result import Error, Result, Return
from .dtos import RevokeSessionResponse
from .errors import BAD_REQUEST, SERVER_ERROR, UNAUTHORIZED_ERROR

logger = logging.getLogger(__name__)


class RevokeSessionUseCase:
    """
    Use case for revoking one session.

    Business Rules:
    - Access token signature must be valid; an expired token still logs out
    - Revoking an already revoked session succeeds (idempotent)
    - Unknown sessions are reported as UNAUTHORIZED
    """

    def __init__(self, uow: UnitOfWork, signer: ICredentialSigner):
        self.uow = uow
        self.signer = signer

    async def execute(self, access_token: str) -> Result[RevokeSessionResponse]:
        if not access_token:
            return Return.err(Error(BAD_REQUEST, "Access token is required"))

        try:
            claims = self.signer.verify(access_token)
        except InvalidSignatureError as e:
            logger.info(f"Revoke rejected, bad access token: {e}")
            return Return.err(UNAUTHORIZED_ERROR)

        async with self.uow:
            try:
                session = await self.uow.sessions.get(claims.unique_id)
                session_id = session.id
                await self.uow.sessions.revoke(session_id)
                await self.uow.commit()
            except NotFoundError:
                return Return.err(UNAUTHORIZED_ERROR)
            except PersistenceError as e:
                logger.error(f"Failed to revoke session {claims.unique_id}: {e}")
                return Return.err(SERVER_ERROR)

        logger.info(f"Session {session_id} revoked")
        return Return.ok(RevokeSessionResponse(session_id=session_id, revoked=True))
