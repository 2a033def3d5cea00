"""Map the error taxonomy onto HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from roster.core.errors import (
    AccessDenied,
    BuilderFailed,
    CryptoFailure,
    EntryAlreadyExists,
    EntryNotFound,
    InvalidCredentials,
    InvalidInput,
    InvalidRole,
    RosterError,
    StorageFailure,
    Unauthorized,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[RosterError], int] = {
    EntryNotFound: status.HTTP_404_NOT_FOUND,
    EntryAlreadyExists: status.HTTP_409_CONFLICT,
    InvalidInput: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidRole: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ValidationFailed: status.HTTP_422_UNPROCESSABLE_ENTITY,
    BuilderFailed: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    AccessDenied: status.HTTP_403_FORBIDDEN,
    CryptoFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: RosterError) -> int:
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def roster_error_handler(request: Request, exc: RosterError) -> JSONResponse:
    """Render any RosterError as {"status": "error", "code", "message", "errors"}."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.code)
    body: dict[str, object] = {"status": "error", "code": exc.code, "message": exc.message}
    if isinstance(exc, ValidationFailed):
        body["errors"] = exc.errors
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthorized) else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)
