"""
Session Entity

Persisted unit of trust behind a refresh token.
"""

from sqlmodel import Field, Index, SQLModel


class Session(SQLModel, table=True):
    """
    Session entity - binds a hashed refresh token to its access token.

    Business Rules:
    - id equals the jti of the access token it was issued with
    - Refresh tokens are stored as bcrypt hashes, never plaintext
    - is_revoked only ever moves from False to True
    - Unusable once revoked or once expires_at has passed
    """

    __tablename__ = "sessions"

    id: str = Field(primary_key=True, max_length=36)

    refresh_secret_hash: str = Field(max_length=60)  # Bcrypt output
    ip_address: str = Field(max_length=255)
    is_revoked: bool = Field(default=False)

    # Unix seconds
    expires_at: int

    __table_args__ = (Index("idx_session_expires_at", "expires_at"),)

    def is_expired(self, now: int) -> bool:
        return now >= self.expires_at

    def is_active(self, now: int) -> bool:
        return not self.is_revoked and not self.is_expired(now)
