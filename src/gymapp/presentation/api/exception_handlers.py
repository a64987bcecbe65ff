"""Centralized exception handlers for the FastAPI application.

Auth errors are mapped to HTTP responses by their ``AuthErrorCode`` with a
consistent error format. Internal failures never leak their message.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Usage:
    from gymapp.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from gymapp_auth import AuthError, AuthErrorCode, InvalidTokenError

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[AuthErrorCode, int] = {
    # 400 Bad Request
    AuthErrorCode.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized
    AuthErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.INVALID_SIGNATURE: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.MALFORMED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.EXPIRED: status.HTTP_401_UNAUTHORIZED,
    # 404 Not Found (refresh tokens are handled separately)
    AuthErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict
    AuthErrorCode.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    # 500 Internal Server Error
    AuthErrorCode.SIGNING_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthErrorCode.PERSISTENCE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    AuthErrorCode.HASHING_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


def _get_status_for_exception(exc: AuthError) -> int:
    """Determine HTTP status code for an auth exception."""
    # An unknown refresh token is a rejected credential, not a missing resource
    if isinstance(exc, InvalidTokenError):
        return status.HTTP_401_UNAUTHORIZED
    return ERROR_CODE_TO_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST)


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle all auth exceptions with structured response."""
        status_code = _get_status_for_exception(exc)

        if exc.is_internal:
            logger.error(
                "Internal auth failure on %s %s: %s (code=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc_info=exc.cause or exc,
            )
            return _create_error_response(
                status_code=status_code,
                message=INTERNAL_ERROR_MESSAGE,
                code=exc.code.value,
            )

        logger.warning(
            "Auth exception on %s %s: %s (code=%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.code.value,
        )

        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            headers=headers,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        Catch-all for anything the auth handler above does not cover.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
            code="INTERNAL_ERROR",
        )
