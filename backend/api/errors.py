"""Uniform JSON error responses.

Every error leaves the API as ``{"error": ..., "details": ...}``.
Service exceptions carry their own status code; anything unexpected
inside a handler is converted by ``handler_errors`` into a 500 with the
handler's title as ``error``.
"""

import logging
from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from integrations.exceptions import ProviderError
from services.exceptions import ServiceError

logger = logging.getLogger(__name__)

# Statement text and parameters of database errors stay in the log
DATABASE_ERROR_DETAILS = "Database error"

# Validation error types that mean "the field was not supplied"
_MISSING_TYPES = {"missing", "string_too_short"}


def error_body(error: str, details: str | None = None) -> dict:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return body


@contextmanager
def handler_errors(title: str):
    """Convert unexpected exceptions raised in a handler body to ServiceError.

    ServiceErrors pass through unchanged so their status code survives.
    Provider errors already carry the message unwrapped from the upstream
    response, which becomes ``details``.
    """
    try:
        yield
    except (ServiceError, StarletteHTTPException):
        raise
    except ProviderError as e:
        logger.error("%s: %s", title, e)
        raise ServiceError(title, details=str(e)) from e
    except SQLAlchemyError as e:
        logger.exception("%s", title)
        raise ServiceError(title, details=DATABASE_ERROR_DETAILS) from e
    except Exception as e:
        logger.exception("%s", title)
        raise ServiceError(title, details=str(e)) from e


def _field_name(loc: tuple) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "body"


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.details),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    error_type = first.get("type", "")

    if error_type == "json_invalid":
        message = "Invalid JSON body"
    elif error_type in _MISSING_TYPES or first.get("input") in (None, ""):
        message = f"{_field_name(first.get('loc', ()))} is required"
    else:
        message = f"Invalid value for {_field_name(first.get('loc', ()))}"

    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content=error_body(message, first.get("msg")))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on ``app``."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
