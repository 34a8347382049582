from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from src.api.error import ClientError, unwrap
from src.api.utils.timeout import with_request_timeout
from src.app.use_cases.auth import (
    IssueTokenPairUseCase,
    RefreshTokenPairUseCase,
    RevokeSessionResponse,
    RevokeSessionUseCase,
    TokenPairResponse,
)
from src.app.use_cases.auth.errors import UNAUTHORIZED_ERROR
from src.depends import (
    get_client_address,
    get_issue_use_case,
    get_refresh_use_case,
    get_revoke_use_case,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

bearer = HTTPBearer(auto_error=False)


class GenerateRequest(BaseModel):
    """
    Token generation HTTP request payload
    """

    user_id: str = Field(..., description="Subject the tokens are issued for")


@router.post(
    "/generate", status_code=status.HTTP_200_OK, response_model=TokenPairResponse
)
async def generate(
    request: Request,
    body: GenerateRequest,
    client_address: str = Depends(get_client_address),
    use_case: IssueTokenPairUseCase = Depends(get_issue_use_case),
):
    """
    Generate Token Pair

    Issues an access token (15 min) and a refresh token (24 h) bound to
    the caller's address.

    Raises:
        - 400 Bad Request: Empty user_id
        - 500 Internal Server Error: Signing, hashing or storage failure
    """
    result = await with_request_timeout(
        request, use_case.execute(body.user_id, client_address)
    )
    return unwrap(result)


class RefreshRequest(BaseModel):
    """
    Refresh HTTP request payload

    Both tokens must come from the same pair.
    """

    access_token: str = Field(..., description="Access token, may be expired")
    refresh_token: str = Field(..., description="Refresh token")


@router.post(
    "/refresh", status_code=status.HTTP_200_OK, response_model=TokenPairResponse
)
async def refresh(
    request: Request,
    body: RefreshRequest,
    client_address: str = Depends(get_client_address),
    use_case: RefreshTokenPairUseCase = Depends(get_refresh_use_case),
):
    """
    Refresh Token Pair

    Rotates the refresh token: the submitted pair stops working and a new
    pair is returned. A request from a different address than the one the
    session was issued to still succeeds and sends a notification.

    Raises:
        - 400 Bad Request: Empty token
        - 401 Unauthorized: Any token or session check failed
        - 500 Internal Server Error: Storage or signing failure
    """
    result = await with_request_timeout(
        request,
        use_case.execute(body.access_token, body.refresh_token, client_address),
    )
    return unwrap(result)


@router.post(
    "/revoke", status_code=status.HTTP_200_OK, response_model=RevokeSessionResponse
)
async def revoke(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    use_case: RevokeSessionUseCase = Depends(get_revoke_use_case),
):
    """
    Revoke Session (logout)

    Revokes the session behind the bearer access token. Idempotent.

    Raises:
        - 401 Unauthorized: Missing or invalid token, unknown session
        - 500 Internal Server Error: Storage failure
    """
    if credentials is None:
        raise ClientError(UNAUTHORIZED_ERROR, status_code=status.HTTP_401_UNAUTHORIZED)

    result = await with_request_timeout(request, use_case.execute(credentials.credentials))
    return unwrap(result)
