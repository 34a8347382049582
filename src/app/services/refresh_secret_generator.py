from abc import ABC, abstractmethod
from typing import Tuple


class IRefreshSecretGenerator(ABC):
    """Refresh token generator interface - application layer"""

    @abstractmethod
    def generate(self) -> Tuple[str, int]:
        """Return (opaque secret, expiry as unix seconds). Raises GenerationError."""
        pass
