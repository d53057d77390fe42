"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from hublink.domain.error import (
    DomainError,
    NotAuthenticatedError,
    NotFoundError,
    RegistrationDisabledError,
    StorageError,
)

_STATUS_CODES: dict[type[DomainError], int] = {
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    RegistrationDisabledError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(error: DomainError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_type, code in _STATUS_CODES.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_code_for(exc)
    if code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
            user_id=str(getattr(exc, "user_id", None) or ""),
        )
    return JSONResponse(status_code=code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handler on the application."""
    app.add_exception_handler(DomainError, domain_error_handler)
