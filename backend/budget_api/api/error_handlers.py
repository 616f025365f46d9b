"""Error Handlers — the single translator from raised errors to JSON envelope responses.

Invariants:
    - BudgetApiError → status chosen by its ErrorCategory (never by message text)
    - Client-facing categories (validation, not found, conflict, currency) keep their message
    - Database/provider/unclassified failures → 500 "Internal server error";
      the original error is logged, never sent to the client
    - RequestValidationError (body not a JSON object, bad path param) → 400
    - Exactly one response per request: routes never catch, handlers never re-raise

Design Decisions:
    - Four-layer handler: domain (BudgetApiError), validation (Pydantic),
      HTTP (unknown routes / methods), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from budget_api.core.envelope import format_response
from budget_api.core.errors import BudgetApiError, ErrorCategory

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_BODY_MESSAGE = "Invalid request body"

STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCategory.CURRENCY: status.HTTP_400_BAD_REQUEST,
}


def translate_error(exc: BudgetApiError) -> tuple[int, str]:
    """Map an error to (HTTP status, client-safe message)."""
    status_code = STATUS_BY_CATEGORY.get(exc.category)
    if status_code is None:
        return status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
    return status_code, exc.message


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_budget_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_budget_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BudgetApiError)
    async def budget_error_handler(request: Request, exc: BudgetApiError):
        status_code, message = translate_error(exc)
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": status_code,
            "project_id": exc.context.project_id,
            "currency": exc.context.currency,
        }
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"BudgetApiError: {exc.message}", extra=extra, exc_info=exc)
        else:
            logger.warning(f"BudgetApiError: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=status_code, content=format_response(False, error=message),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=format_response(False, error=INVALID_BODY_MESSAGE),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=format_response(False, error=str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=format_response(False, error=INTERNAL_ERROR_MESSAGE),
        )
