"""
Refresh Token Pair Use Case

Exchanges an access token and its refresh token for a new pair,
rotating the refresh token so each one works at most once.
"""

import asyncio
import logging

from src.app.services.credential_signer import ICredentialSigner
from src.app.services.notification_dispatcher import NotificationDispatcher
from src.app.services.refresh_secret_generator import IRefreshSecretGenerator
from src.app.services.secret_hasher import ISecretHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_timestamp
from src.domain.errors import InvalidSignatureError, NotFoundError, PersistenceError
from src.libs.result import Error, Result, Return
from .dtos import TokenPairResponse
from .errors import BAD_REQUEST, SERVER_ERROR, UNAUTHORIZED_ERROR
from .issue_token_pair_use_case import IssueTokenPairUseCase

logger = logging.getLogger(__name__)

ADDRESS_CHANGE_MESSAGE = (
    "Hey user {subject}, someone accessed your account from a new IP address"
)


class RefreshTokenPairUseCase:
    """
    Use case for refreshing a token pair.

    Business Rules:
    - Access token may be expired; its signature must still be valid
    - Session is looked up by the access token's jti only
    - Refresh token checked against the stored bcrypt hash (constant-time)
    - Revoked or expired sessions are terminal
    - Session is revoked and committed BEFORE the new pair is issued;
      a concurrent replay loses at the conditional update
    - A different client address only triggers a notification
    - Every rejection is reported as the same UNAUTHORIZED error
    """

    def __init__(
        self,
        uow: UnitOfWork,
        signer: ICredentialSigner,
        generator: IRefreshSecretGenerator,
        hasher: ISecretHasher,
        dispatcher: NotificationDispatcher,
        notify_destination: str,
    ):
        self.uow = uow
        self.signer = signer
        self.hasher = hasher
        self.dispatcher = dispatcher
        self.notify_destination = notify_destination
        self.issuer = IssueTokenPairUseCase(uow, signer, generator, hasher)

    async def execute(
        self, access_token: str, refresh_token: str, request_address: str
    ) -> Result[TokenPairResponse]:
        """
        Execute refresh token pair use case.

        Args:
            access_token: Access token the session was issued with
            refresh_token: Plaintext refresh token from the same pair
            request_address: Client address of this request

        Returns:
            Result with a new TokenPairResponse, or Error
        """
        if not access_token or not refresh_token:
            return Return.err(
                Error(BAD_REQUEST, "Access token and refresh token are required")
            )

        try:
            claims = self.signer.verify(access_token)
        except InvalidSignatureError as e:
            logger.info(f"Refresh rejected, bad access token: {e}")
            return Return.err(UNAUTHORIZED_ERROR)

        async with self.uow:
            try:
                session = await self.uow.sessions.get(claims.unique_id)
            except NotFoundError:
                await asyncio.to_thread(self.hasher.verify_against_dummy, refresh_token)
                logger.info(f"Refresh rejected, unknown session {claims.unique_id}")
                return Return.err(UNAUTHORIZED_ERROR)
            except PersistenceError as e:
                logger.error(f"Failed to load session {claims.unique_id}: {e}")
                return Return.err(SERVER_ERROR)

            matches = await asyncio.to_thread(
                self.hasher.verify, refresh_token, session.refresh_secret_hash
            )
            if not matches:
                logger.info(f"Refresh rejected, token mismatch for session {session.id}")
                return Return.err(UNAUTHORIZED_ERROR)

            if not session.is_active(utc_timestamp()):
                logger.info(f"Refresh rejected, session {session.id} revoked or expired")
                return Return.err(UNAUTHORIZED_ERROR)

            session_id, bound_address = session.id, session.ip_address

            try:
                revoked = await self.uow.sessions.revoke(session_id)
                await self.uow.commit()
            except PersistenceError as e:
                logger.error(f"Failed to revoke session {session_id}: {e}")
                return Return.err(SERVER_ERROR)

            if not revoked:
                logger.warning(f"Refresh token for session {session_id} was replayed")
                return Return.err(UNAUTHORIZED_ERROR)

        if request_address != bound_address:
            logger.warning(
                f"Session {session_id} refreshed from {request_address}, "
                f"issued to {bound_address}"
            )
            self.dispatcher.dispatch(
                self.notify_destination,
                ADDRESS_CHANGE_MESSAGE.format(subject=claims.subject),
            )

        return await self.issuer.execute(claims.subject, request_address)
