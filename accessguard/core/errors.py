"""
=============================================================================
ACCESSGUARD - ERROR HANDLING MODULE
=============================================================================
Exception handlers for secure, user-friendly error responses.

Features:
- AuthError -> 401/403 with the rejection message (and, for authorization
  denials, the required/available values)
- ServiceError -> its status code with a short message
- Catches unhandled exceptions, logs the stack trace server-side and
  returns a sanitized message to the client
- Keeps the request's pending audit writes attached to error responses

Usage:
    # In main.py
    from accessguard.core.errors import register_exception_handlers
    register_exception_handlers(app)
=============================================================================
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from accessguard.core.config import settings
from accessguard.core.exceptions import AuthError, ServiceError, StoreError, Unauthenticated

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _pending_audit_writes(request: Request):
    return getattr(request.state, "audit_tasks", None)


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the FastAPI app."""

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response(),
            headers=headers,
            background=_pending_audit_writes(request),
        )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if isinstance(exc, StoreError):
            logger.error(
                "Store failure on %s %s: %s", request.method, request.url.path, exc
            )
            message = GENERIC_ERROR_MESSAGE
        else:
            message = exc.message
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": message},
            background=_pending_audit_writes(request),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all handler for unhandled exceptions.

        - Logs the full traceback for debugging
        - Returns a generic error message to prevent info leakage
        - In debug mode, includes more details
        """
        logger.error(
            "Unhandled exception on %s %s:\n%s",
            request.method,
            request.url.path,
            traceback.format_exc(),
        )

        if settings.DEBUG:
            content = {
                "detail": "Internal Server Error",
                "error_type": type(exc).__name__,
                "message": str(exc),
                "path": request.url.path,
            }
        else:
            content = {
                "detail": "Internal Server Error",
                "message": GENERIC_ERROR_MESSAGE,
            }
        return JSONResponse(
            status_code=500,
            content=content,
            background=_pending_audit_writes(request),
        )
