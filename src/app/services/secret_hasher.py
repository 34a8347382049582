from abc import ABC, abstractmethod


class ISecretHasher(ABC):
    """One-way, salted hash for refresh tokens at rest"""

    @abstractmethod
    def hash(self, secret: str) -> str:
        pass

    @abstractmethod
    def verify(self, secret: str, hashed: str) -> bool:
        """Constant-time comparison; False on mismatch or malformed hash"""
        pass

    @abstractmethod
    def verify_against_dummy(self, secret: str) -> bool:
        """Run a full comparison that always fails, for lookups that found nothing"""
        pass
