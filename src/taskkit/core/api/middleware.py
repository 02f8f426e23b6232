"""Error handlers rendering the response envelope, and request logging middleware."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from ulid import ULID

from taskkit.core.exceptions import InternalError, TaskkitError, ValidationError
from taskkit.core.logging import add_request_context, get_logger, reset_request_context
from taskkit.core.schemas import Envelope
from taskkit.core.validation import format_errors

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _envelope_response(
    status_code: int,
    message: str,
    *,
    errors: dict[str, list[str]] | None = None,
    error: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = Envelope[None](success=False, message=message, errors=errors, error=error)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
    )


def _include_details(request: Request) -> bool:
    return bool(getattr(request.app.state, "include_error_details", True))


async def taskkit_error_handler(request: Request, exc: TaskkitError) -> JSONResponse:
    """Render a TaskkitError subclass with its status code and envelope members."""
    errors = exc.errors if isinstance(exc, ValidationError) else None
    error = exc.error if _include_details(request) else None

    if isinstance(exc, InternalError):
        logger.error("request.failed", message=exc.message, error=exc.error, exc_info=exc.__cause__ or exc)
    else:
        logger.info("request.rejected", status_code=exc.status_code, message=exc.message)

    return _envelope_response(exc.status_code, exc.message, errors=errors, error=error)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI request validation failures as a 422 envelope with per-field messages."""
    errors = format_errors(exc.errors())
    logger.info("request.invalid", fields=sorted(errors))
    return _envelope_response(422, ValidationError.default_message, errors=errors)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Render database errors that escaped an operation as a 500 envelope."""
    logger.error("database.error", error=str(exc), exc_info=exc)
    error = str(exc) if _include_details(request) else None
    return _envelope_response(500, "Database error", error=error)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing-level HTTP errors (unknown path, wrong method) in the envelope."""
    return _envelope_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other exception as a generic 500 envelope."""
    logger.error("request.unhandled_error", error=str(exc), exc_info=exc)
    error = str(exc) if _include_details(request) else None
    return _envelope_response(500, InternalError.default_message, error=error)


def add_error_handlers(app: FastAPI, *, include_error_details: bool = True) -> None:
    """Install envelope-rendering exception handlers on the app."""
    app.state.include_error_details = include_error_details
    app.add_exception_handler(TaskkitError, taskkit_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


def add_logging_middleware(app: FastAPI) -> None:
    """Log each request with a request id bound into the structlog context."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(ULID())
        add_request_context(request_id=request_id, method=request.method, path=request.url.path)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("http.request.failed", duration_ms=round((time.perf_counter() - started) * 1000, 2))
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "http.request.completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            return response
        finally:
            reset_request_context("request_id", "method", "path", "user_id")
