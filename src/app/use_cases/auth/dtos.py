"""
Token Use Case DTOs (Data Transfer Objects)

Response classes shared by the issue, refresh and revoke use cases.
"""

from pydantic import BaseModel


class TokenPairResponse(BaseModel):
    """Access token plus the plaintext refresh token, returned exactly once"""

    access_token: str
    refresh_token: str


class RevokeSessionResponse(BaseModel):
    """Response for single-session revocation"""

    session_id: str
    revoked: bool
