import secrets
from datetime import UTC, datetime, timedelta
from typing import Tuple

from src.app.services.refresh_secret_generator import IRefreshSecretGenerator
from src.domain.errors import GenerationError


class RefreshSecretGenerator(IRefreshSecretGenerator):
    """Opaque URL-safe refresh tokens from the OS CSPRNG"""

    def __init__(self, ttl: timedelta = timedelta(hours=24), nbytes: int = 32):
        self.ttl = ttl
        self.nbytes = nbytes

    def generate(self) -> Tuple[str, int]:
        try:
            secret = secrets.token_urlsafe(self.nbytes)
        except NotImplementedError as e:
            raise GenerationError("no randomness source available") from e
        expires_at = datetime.now(UTC) + self.ttl
        return secret, int(expires_at.timestamp())
