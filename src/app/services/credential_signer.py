from abc import ABC, abstractmethod
from typing import Tuple

from src.domain.entities import AccessClaims


class ICredentialSigner(ABC):
    """Access token signer interface - application layer"""

    @abstractmethod
    def issue(
        self, unique_id: str, subject: str, bound_address: str
    ) -> Tuple[str, AccessClaims]:
        """Sign a new access token. Raises SigningError."""
        pass

    @abstractmethod
    def verify(self, token: str) -> AccessClaims:
        """
        Check signature and structure, tolerating expiry.

        Raises InvalidSignatureError for anything other than an expired token.
        """
        pass
