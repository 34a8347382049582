import bcrypt

from src.app.services.secret_hasher import ISecretHasher
from src.domain.errors import HashingError


class BcryptSecretHasher(ISecretHasher):
    """bcrypt hashing; rounds trade latency for online-guessing resistance"""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._dummy_hash = None

    def hash(self, secret: str) -> str:
        try:
            hashed = bcrypt.hashpw(secret.encode(), bcrypt.gensalt(self.rounds))
        except ValueError as e:
            raise HashingError(f"failed to hash refresh token: {e}") from e
        return hashed.decode()

    def verify(self, secret: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(secret.encode(), hashed.encode())
        except (ValueError, AttributeError):
            # Malformed stored hash
            return False

    def verify_against_dummy(self, secret: str) -> bool:
        # Same cost as a real check so a miss takes as long as a mismatch
        if self._dummy_hash is None:
            self._dummy_hash = self.hash("dummy_refresh_token")
        self.verify(secret, self._dummy_hash)
        return False
