"""
Error codes surfaced by the token use cases.

Every credential, token or session validity failure maps to the same
UNAUTHORIZED error so a caller cannot tell which check failed.
"""

from src.libs.result import Error

BAD_REQUEST = "BAD_REQUEST"
UNAUTHORIZED = "UNAUTHORIZED"
INTERNAL_ERROR = "INTERNAL_ERROR"
ISSUANCE_FAILED = "ISSUANCE_FAILED"

UNAUTHORIZED_ERROR = Error(UNAUTHORIZED, "Unauthorized")
SERVER_ERROR = Error(INTERNAL_ERROR, "Internal error")
ISSUANCE_FAILED_ERROR = Error(ISSUANCE_FAILED, "Failed to issue tokens")
