"""HTTP error handling.

Maps domain errors raised anywhere below the routes to JSON responses of
the form ``{"detail": "..."}``, the same shape FastAPI uses for
HTTPException.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from intranet.domain.error import (
    AccountInactiveError,
    AlreadyExistsError,
    BusinessRuleViolationError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    TransientStorageError,
    ValidationError,
)
from intranet.util.jwt import JWTError

logger = logging.getLogger(__name__)

# Most specific first; lookup walks the exception's MRO
ERROR_STATUS: dict[type[Exception], int] = {
    JWTError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    AccountInactiveError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    BusinessRuleViolationError: status.HTTP_400_BAD_REQUEST,
    TransientStorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
    DomainError: status.HTTP_400_BAD_REQUEST,
}


def status_for(error: Exception) -> int:
    for cls in type(error).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def _handle_error(request: Request, exc: Exception) -> JSONResponse:
    status_code = status_for(exc)
    if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        logger.error(f"Storage unavailable on {request.url.path}: {exc}")
        detail = "Temporarily unavailable, please try again"
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc}")
        detail = str(exc)
    return JSONResponse(status_code=status_code, content={"detail": detail})


def register_error_handlers(app: FastAPI) -> None:
    """Register domain error handlers with the FastAPI app."""
    app.add_exception_handler(DomainError, _handle_error)
    app.add_exception_handler(JWTError, _handle_error)
