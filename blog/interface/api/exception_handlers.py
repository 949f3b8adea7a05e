"""Centralized exception handlers for the FastAPI application.

Domain errors are mapped to HTTP responses by their ``ErrorKind``:

    {
        "kind": "not_found",
        "message": "post not found: ..."
    }
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blog.domain.error import DomainError, ErrorKind

ERROR_KIND_TO_STATUS: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _create_error_response(status_code: int, kind: ErrorKind, message: str):
    return JSONResponse(
        status_code=status_code,
        content={"kind": kind.value, "message": message},
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance
    """

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = ERROR_KIND_TO_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)
        if status_code >= 500:
            logfire.error(
                "Domain error",
                method=request.method,
                path=request.url.path,
                kind=exc.kind.value,
                error=str(exc),
            )
        else:
            logfire.warn(
                "Domain error",
                method=request.method,
                path=request.url.path,
                kind=exc.kind.value,
                error=str(exc),
            )
        return _create_error_response(status_code, exc.kind, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _validation_message(exc)
        logfire.warn(
            "Request validation failed",
            method=request.method,
            path=request.url.path,
            error=message,
        )
        return _create_error_response(
            status.HTTP_400_BAD_REQUEST, ErrorKind.INVALID_ARGUMENT, message
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logfire.exception(
            "Unexpected error",
            method=request.method,
            path=request.url.path,
            error_type=type(exc).__name__,
        )
        return _create_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorKind.UNAVAILABLE,
            "Internal server error",
        )
