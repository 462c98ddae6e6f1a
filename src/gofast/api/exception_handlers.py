"""
Exception handlers for the FastAPI application.

All failures leave the API in the same envelope the run editor expects:
``{"success": false, "error": "...", "code": "...", "details": ...}``.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from ..exceptions import ErrorCode, GoFastError

logger = logging.getLogger("gofast.api")


def create_error_response(
    status_code: int,
    error: str,
    code: str | None = None,
    details: Any = None,
) -> JSONResponse:
    """Create a standardized failure response."""
    content: dict[str, Any] = {
        "success": False,
        "error": error,
    }
    if code:
        content["code"] = code
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def gofast_error_handler(
    request: Request,
    exc: GoFastError,
) -> JSONResponse:
    """Handle all GoFastError exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc!r} on {request.method} {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle malformed request bodies."""
    errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error["loc"])
        errors.append({
            "field": loc,
            "message": error["msg"],
            "type": error["type"],
        })

    return create_error_response(
        status_code=422,
        error="Request validation failed",
        code=ErrorCode.VALIDATION_ERROR.value,
        details={"errors": errors},
    )


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> JSONResponse:
    """Handle rate limit exceeded exceptions."""
    return create_error_response(
        status_code=429,
        error=f"Rate limit exceeded: {exc.detail}",
        code="RATE_LIMIT_EXCEEDED",
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return create_error_response(
        status_code=500,
        error="An unexpected error occurred",
        code=ErrorCode.INTERNAL_ERROR.value,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(GoFastError, gofast_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Must be last: catches everything else
    app.add_exception_handler(Exception, generic_exception_handler)
