"""
Token Service Domain Entities
"""

from .claims import AccessClaims
from .session import Session

__all__ = [
    "AccessClaims",
    "Session",
]
