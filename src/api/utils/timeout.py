import asyncio
import logging
from typing import Awaitable, TypeVar

from fastapi import Request

from src.api.error import ServerError
from src.app.use_cases.auth.errors import INTERNAL_ERROR
from src.libs.result import Error

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def with_request_timeout(request: Request, awaitable: Awaitable[T]) -> T:
    """
    Await a use case within the configured request timeout.

    On timeout the use case is cancelled, which abandons any storage call
    it is waiting on.
    """
    timeout = request.app.state.request_timeout
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"{request.method} {request.url.path} timed out after {timeout}s")
        raise ServerError(Error(INTERNAL_ERROR, "Request timed out"))
