"""
Token Service Errors

Internal failure taxonomy raised by adapters (signer, generator, store).
Use cases translate these into result error codes before they reach a caller.
"""


class TokenServiceError(Exception):
    """Base class for token service failures"""


class SigningError(TokenServiceError):
    """Access credential could not be signed (e.g. misconfigured key)"""


class InvalidSignatureError(TokenServiceError):
    """Bad signature, disallowed algorithm or malformed credential"""


class GenerationError(TokenServiceError):
    """Refresh secret could not be generated"""


class PersistenceError(TokenServiceError):
    """Session storage fault"""


class NotFoundError(TokenServiceError):
    """Session does not exist"""


class HashingError(TokenServiceError):
    """Refresh secret could not be hashed"""
