"""Exception handlers producing the {"detail", "error_code"} error body."""

import logging

from fastapi import FastAPI
from starlette.exceptions import HTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from src.exceptions import ConflictError, PCPError, RecordNotFoundError
from src.models.errors import ErrorResponse

logger = logging.getLogger(__name__)

# Map HTTP status codes to machine-readable error codes for consistent API responses.
STATUS_ERROR_CODES = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "validation_error",
    429: "rate_limited",
    500: "internal_error",
    503: "service_unavailable",
}


def error_response(status_code: int, detail: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            detail=detail, error_code=STATUS_ERROR_CODES.get(status_code, "internal_error")
        ).model_dump(),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Enrich all HTTPException responses with a consistent error_code field."""
    return error_response(exc.status_code, exc.detail, headers=getattr(exc, "headers", None))


async def not_found_handler(request: Request, exc: RecordNotFoundError):
    return error_response(404, str(exc))


async def conflict_handler(request: Request, exc: ConflictError):
    logger.info("Conflict on %s %s: %s", request.method, request.url.path, exc)
    return error_response(409, str(exc))


async def pcp_error_handler(request: Request, exc: PCPError):
    logger.error("Application error: %s", exc)
    return error_response(500, "Internal server error")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Install the application's exception handlers on ``app``."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(PCPError, pcp_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# OpenAPI documentation for the error bodies routers can return.
ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Record not found"},
    409: {"model": ErrorResponse, "description": "Conflicts with catalog or lifecycle rules"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
}
