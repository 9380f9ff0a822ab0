"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from desk.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    MaterialLockedError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
    SubmissionFailedError,
    ValidationError,
)

# Most specific first; InvalidReferenceError is covered by ValidationError
ERROR_RESPONSES: list[tuple[type[DomainError], str, int]] = [
    (NotAuthenticatedError, "not_authenticated", status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, "not_authorized", status.HTTP_403_FORBIDDEN),
    (NotFoundError, "not_found", status.HTTP_404_NOT_FOUND),
    (ValidationError, "validation_failed", status.HTTP_422_UNPROCESSABLE_ENTITY),
    (MaterialLockedError, "locked", status.HTTP_409_CONFLICT),
    (BusinessRuleViolationError, "conflict", status.HTTP_409_CONFLICT),
    (SubmissionFailedError, "submission_failed", status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def error_response(exc: DomainError) -> JSONResponse:
    """Build the JSON error response for a domain error.

    Domain errors without a mapping are answered with 500.
    """
    for error_type, code, status_code in ERROR_RESPONSES:
        if isinstance(exc, error_type):
            body = {"error": code, "detail": str(exc)}
            if isinstance(exc, MaterialLockedError):
                body["holder"] = exc.holder
            return JSONResponse(status_code=status_code, content=body)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "detail": str(exc)},
    )


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Exception handler for all domain errors."""
    response = error_response(exc)
    if response.status_code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    else:
        logfire.info(
            "Request rejected",
            path=request.url.path,
            error_type=type(exc).__name__,
            status_code=response.status_code,
        )
    return response


def register_error_handlers(app: FastAPI) -> None:
    """Register the domain error handler on an application."""
    app.add_exception_handler(DomainError, handle_domain_error)
