"""
Use Cases

- auth/: Token issue, refresh and revoke flows
"""

from .auth import (
    IssueTokenPairUseCase,
    RefreshTokenPairUseCase,
    RevokeSessionUseCase,
)

__all__ = [
    "IssueTokenPairUseCase",
    "RefreshTokenPairUseCase",
    "RevokeSessionUseCase",
]
