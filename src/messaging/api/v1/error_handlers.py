"""
FastAPI exception handlers that map repository-level exceptions to HTTP responses.

The status code and payload come from the exception itself (`http_status()`,
`to_payload()`), so these handlers stay tiny.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging
from messaging.exceptions.base import (
    RepositoryError,
    NotFoundError,
    InvalidArgumentError,
    IntegrityViolationError,
)

logger = logging.getLogger(__name__)


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    logger.info("InvalidArgumentError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def integrity_violation_handler(request: Request, exc: IntegrityViolationError) -> JSONResponse:
    # Broken invariant upstream: worth an alert, unlike the client errors above.
    logger.error("IntegrityViolationError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # The driver already logged the traceback; never echo raw DB text to clients.
    logger.warning("Store failure for %s %s: %s", request.method, request.url.path, type(exc).__name__)
    return JSONResponse(
        status_code=503,
        content={"detail": "Message store unavailable", "code": "store_unavailable"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    # Most specific first
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InvalidArgumentError, invalid_argument_handler)
    app.add_exception_handler(IntegrityViolationError, integrity_violation_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
