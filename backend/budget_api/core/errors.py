"""Error Hierarchy — typed, categorized exceptions for every budget API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Category is fixed at the raise site; callers classify by category, never by message text
    - Client-input errors (400/404/409) carry a client-safe message
    - Infrastructure errors (DATABASE, EXTERNAL_API) never expose their message to clients

Design Decisions:
    - Single hierarchy with BudgetApiError base: one translator in api/error_handlers.py
      maps category → HTTP status (ADR: uniform error envelope)
    - CurrencyError subclasses share the CURRENCY category so conversion, missing-rate and
      unsupported-currency failures all surface as 400
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Closed set of error kinds. The error translator switches on these."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    CURRENCY = "currency"
    EXTERNAL_API = "external_api"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for server-side logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    project_id: int | None = None
    currency: str | None = None
    debug_info: dict[str, Any] | None = None


class BudgetApiError(Exception):
    """Base exception for all budget API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()


# ─── Client Errors ──────────────────────────────────────────────

class ValidationError(BudgetApiError):
    """Request payload failed shape/type validation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context,
        )


class NotFoundError(BudgetApiError):
    """No project matched the lookup."""
    def __init__(
        self, message: str = "Project not found", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context,
        )


class DuplicateKeyError(BudgetApiError):
    """Insert collided with an existing projectId."""
    def __init__(self, project_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.project_id = project_id
        super().__init__(
            f"Project with projectId {project_id} already exists",
            "DUPLICATE_KEY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx,
        )
        self.project_id = project_id


class CurrencyError(BudgetApiError):
    """Base for currency failures the client can act on."""
    def __init__(
        self, message: str, code: str = "CURRENCY_ERROR",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CURRENCY, ErrorSeverity.ERROR, context,
        )


class RateNotFoundError(CurrencyError):
    """Provider answered, but its rate table has no entry for the target currency."""
    def __init__(self, currency: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.currency = currency
        super().__init__(f"Rate not found for {currency}", "RATE_NOT_FOUND", ctx)
        self.currency = currency


class CurrencyNotSupportedError(CurrencyError):
    """Provider does not know the base currency."""
    def __init__(self, currency: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.currency = currency
        super().__init__(
            f"Currency not supported: {currency}", "CURRENCY_NOT_SUPPORTED", ctx,
        )
        self.currency = currency


class ConversionError(CurrencyError):
    """Wraps any rate lookup failure raised during a conversion."""
    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            f"Currency conversion failed: {reason}", "CONVERSION_FAILED", context,
        )


# ─── Infrastructure Errors ──────────────────────────────────────

class ProviderError(BudgetApiError):
    """Exchange-rate provider unreachable or returned an unusable response."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RATE_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context,
        )


class PersistenceError(BudgetApiError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


class ConstraintViolationError(PersistenceError):
    """Store rejected a write because of an integrity constraint."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "commit", context)


# Rate lookup failures the converter wraps into ConversionError.
RateLookupError = (RateNotFoundError, CurrencyNotSupportedError, ProviderError)
