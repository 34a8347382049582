"""
Token Use Cases

Issue, refresh and revoke of access/refresh token pairs.
"""

from .issue_token_pair_use_case import IssueTokenPairUseCase
from .refresh_token_pair_use_case import RefreshTokenPairUseCase
from .revoke_session_use_case import RevokeSessionUseCase
from .dtos import RevokeSessionResponse, TokenPairResponse

__all__ = [
    # Use Cases
    "IssueTokenPairUseCase",
    "RefreshTokenPairUseCase",
    "RevokeSessionUseCase",
    # DTOs - Responses
    "TokenPairResponse",
    "RevokeSessionResponse",
]
