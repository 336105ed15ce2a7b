"""Error Hierarchy — typed, categorized exceptions for all Tastebud failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Caller-facing errors (400-level) are surfaced verbatim; infrastructure errors
      (500-level) are critical and let the trigger substrate redeliver
    - NoSignalError / NoMatchError are ResourceNotFoundError subclasses, so the
      recommendation selector's failures always surface as NOT_FOUND
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with TastebudError base: one FastAPI handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    PERMISSION = "permission"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    group_id: str | None = None
    trigger: str | None = None
    debug_info: dict[str, Any] | None = None


class TastebudError(Exception):
    """Base exception for all Tastebud errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "group_id": self.context.group_id,
                    "trigger": self.context.trigger,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(TastebudError):
    """Caller identity is absent."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You must be logged in.",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidArgumentError(TastebudError):
    """Malformed or missing required input."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class PermissionDeniedError(TastebudError):
    """Caller is authenticated but not allowed to act on the resource."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, context, 403,
        )


class FailedPreconditionError(TastebudError):
    """Structurally valid request that cannot be satisfied in the current state."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FAILED_PRECONDITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class ResourceNotFoundError(TastebudError):
    """Requested resource does not exist, or there is no data to aggregate."""
    def __init__(
        self, resource_type: str, resource_id: str,
        context: ErrorContext | None = None, message: str | None = None,
    ):
        super().__init__(
            message or f"{resource_type} '{resource_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class NoSignalError(ResourceNotFoundError):
    """Signature is empty — there is no top dimension to recommend on."""
    def __init__(self, subject_id: str = "", context: ErrorContext | None = None):
        super().__init__(
            "Signature", subject_id, context,
            message="Could not determine a top flavor: no taste data yet.",
        )


class NoMatchError(ResourceNotFoundError):
    """No candidate subject has the selected dimension populated."""
    def __init__(self, dimension: str, context: ErrorContext | None = None):
        super().__init__(
            "Restaurant", dimension, context,
            message=f"No restaurants found that match the top flavor: {dimension}.",
        )
        self.dimension = dimension


class MalformedDocumentError(TastebudError):
    """Trigger document is missing required fields — redelivery will not fix it."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_DOCUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TastebudError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
