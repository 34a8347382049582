from fastapi import status

from src.app.use_cases.auth.errors import BAD_REQUEST, UNAUTHORIZED
from src.libs.result import Error, Result

# Error codes a client may see with their own status; anything else is a 500
CLIENT_ERROR_STATUS = {
    BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def unwrap(result: Result):
    """Return the result value or raise the matching HTTP-layer error"""
    if result.is_err():
        error = result.error
        status_code = CLIENT_ERROR_STATUS.get(error.code)
        if status_code is not None:
            raise ClientError(error, status_code=status_code)
        raise ServerError(error)
    return result.value
