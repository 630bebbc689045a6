"""
Error types for the MentorHub API.

Every error leaves the service as ``{"error": "<message>"}`` with a 400, 401
or 500 status; the handlers registered by ``register_exception_handlers``
take care of the rendering.
"""

from contextlib import contextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.core.logging_config import logger


class PortalError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationFailed(PortalError):
    status_code = 400


class Unauthorized(PortalError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ServiceFailure(PortalError):
    """Unexpected provider or storage failure; the message is safe to show."""

    status_code = 500


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def _http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message)


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if not errors or errors[0].get("type") == "json_invalid":
        return error_response(400, "Request body must be valid JSON")
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return error_response(400, f"{field}: {message}" if field else message)


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PortalError, _portal_error_handler)
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)


@contextmanager
def service_guard(message: str):
    """Turn anything unexpected inside the block into a logged 500 ``message``."""
    try:
        yield
    except PortalError:
        raise
    except Exception:
        logger.exception(message)
        raise ServiceFailure(message)
