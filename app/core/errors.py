# app/core/errors.py
import logging
from contextlib import contextmanager

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


@contextmanager
def persistence_guard(session: Session, failure_message: str):
    """
    Wrap a block of repository calls.

    A database error is rolled back, logged with its traceback and
    surfaced to the client as a 500 carrying only `failure_message`.
    """
    try:
        yield
    except SQLAlchemyError:
        session.rollback()
        logger.exception(failure_message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=failure_message,
        )


def _error_body(message: str) -> dict:
    return {"success": False, "error": message}


def _describe_validation_error(exc: RequestValidationError) -> str:
    """
    Flatten pydantic errors into 'field: reason, field: reason'.

    The location prefix ('body', 'query', 'path') is dropped.
    """
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return ", ".join(parts)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(f"Validation failed: {_describe_validation_error(exc)}"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error"),
    )
