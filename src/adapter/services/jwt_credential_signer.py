from datetime import UTC, datetime, timedelta
from typing import Tuple

from jose import jwt
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError
from pydantic import ValidationError

from src.app.services.credential_signer import ICredentialSigner
from src.domain.entities import AccessClaims
from src.domain.errors import InvalidSignatureError, SigningError

HMAC_ALGORITHMS = (ALGORITHMS.HS256, ALGORITHMS.HS384, ALGORITHMS.HS512)


class JwtCredentialSigner(ICredentialSigner):
    """
    HMAC-signed JWT access tokens.

    Only symmetric algorithms are accepted, both for signing and when
    reading a token back; a token declaring any other "alg" (RS*, ES*,
    none) is rejected before its signature is looked at.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = ALGORITHMS.HS512,
        ttl: timedelta = timedelta(minutes=15),
    ):
        if algorithm not in HMAC_ALGORITHMS:
            raise SigningError(f"unsupported signing algorithm {algorithm}")
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(
        self, unique_id: str, subject: str, bound_address: str
    ) -> Tuple[str, AccessClaims]:
        """
        Sign a new access token

        Args:
            unique_id: Session ID, written as the jti claim
            subject: User ID, written as the sub claim
            bound_address: Client address at issuance

        Returns:
            (token, claims) with exp = now + ttl
        """
        if not self.secret:
            raise SigningError("signing key is not configured")

        expires_at = datetime.now(UTC) + self.ttl
        try:
            claims = AccessClaims(
                unique_id=unique_id,
                subject=subject,
                expires_at=int(expires_at.timestamp()),
                bound_address=bound_address,
            )
        except ValidationError as e:
            raise SigningError(f"invalid access token claims: {e}") from e
        try:
            token = jwt.encode(claims.to_payload(), self.secret, algorithm=self.algorithm)
        except (JOSEError, UnicodeError) as e:
            raise SigningError(f"failed to sign access token: {e}") from e
        return token, claims

    def verify(self, token: str) -> AccessClaims:
        """
        Verify signature and structure of an access token

        Expiry is deliberately not checked: a refresh request carries the
        access token that has just run out. Session expiry governs refresh.
        """
        try:
            header = jwt.get_unverified_header(token)
        except JOSEError as e:
            raise InvalidSignatureError("malformed token") from e

        alg = header.get("alg")
        if alg != self.algorithm:
            raise InvalidSignatureError(f"unexpected signing algorithm {alg}")

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JOSEError as e:
            raise InvalidSignatureError(f"invalid token: {e}") from e

        try:
            return AccessClaims.model_validate(payload)
        except ValidationError as e:
            raise InvalidSignatureError("invalid token claims") from e
