# ---------------------------------------------------------------------------
# Author  : Blog API maintainers
# Version : 20261016v1
# ---------------------------------------------------------------------------
"""
Application error taxonomy and the FastAPI handlers that render it.

Services raise these exceptions; they never build HTTP responses
themselves.  ``register_error_handlers`` maps every error to its status
code and a JSON body of the shape ``{"error": "..."}`` (or
``{"errors": [...]}`` for field-level validation failures).

Anything that is not an ``AppError`` – database connectivity, constraint
violations that were not pre-checked, bugs – collapses to a generic 500.
The detail is logged server-side only.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logger import logger

_INTERNAL_MESSAGE = "Internal server error"


class AppError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = _INTERNAL_MESSAGE

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(AppError):
    """Malformed input.  Carries one entry per offending field."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation failed"

    def __init__(self, errors: List[Dict[str, str]]) -> None:
        super().__init__()
        self.errors = errors

    def to_dict(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class InternalError(AppError):
    pass


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _field_name(loc) -> str:
    # loc looks like ("body", "title") or ("path", "post_id")
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(err.get("loc", ())), "msg": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path
    )
    # Only the generic InternalError body reaches the caller
    return await _handle_app_error(request, InternalError())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _handle_app_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    # Store errors are handled explicitly so they never reach the server
    # error middleware, which re-raises after responding.
    app.add_exception_handler(SQLAlchemyError, _handle_unexpected)
    app.add_exception_handler(Exception, _handle_unexpected)
