"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from app.domain.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidSignatureError,
    InvalidSpecError,
    NotFoundError,
    UpstreamFailureError,
)

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (InvalidSpecError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (InvalidSignatureError, status.HTTP_400_BAD_REQUEST),
    (UpstreamFailureError, status.HTTP_502_BAD_GATEWAY),
)


def to_http_exception(exc: DomainError) -> HTTPException:
    """Return the HTTP error matching a domain failure."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
