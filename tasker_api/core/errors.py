"""Error Hierarchy — typed, categorized exceptions for all Tasker API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the fixed envelope {"success": false, "error": message}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskerError base: one global handler renders all of them
    - Ownership denials answer 401 (wire contract of the v2 API); role denials answer 403
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
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Diagnostic context attached to an error (logged, never rendered)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    requester_id: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskerError(Exception):
    """Base exception for all Tasker API errors."""

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
        """Convert to the standard error envelope."""
        return {"success": False, "error": self.message}

    def log_extra(self) -> dict:
        """Structured fields for the JSON log formatter."""
        return {
            "error_code": self.code,
            "request_user": self.context.requester_id,
            "resource_id": self.context.resource_id,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(TaskerError):
    """Field constraints violated on persist."""
    def __init__(self, message: str, fields: list[str] | None = None,
                 context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields or []


class DuplicateFieldError(TaskerError):
    """Unique field already taken by another record."""
    def __init__(self, field_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Duplicate field value entered for '{field_name}'",
            "DUPLICATE_FIELD", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field_name


class InvalidStatusTransitionError(TaskerError):
    """Payment status change outside Init -> Paid | Cancelled."""
    def __init__(self, current: str, requested: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot change payment status from {current} to {requested}",
            "INVALID_STATUS_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.current = current
        self.requested = requested


class GeocodingError(TaskerError):
    """Address could not be resolved to a location."""
    def __init__(self, address: str, reason: str = "no results",
                 context: ErrorContext | None = None):
        super().__init__(
            f"Could not geocode address '{address}': {reason}",
            "GEOCODING_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 400,
        )
        self.address = address


class ResourceNotFoundError(TaskerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = str(resource_id)
        super().__init__(
            f"No {resource_type.lower()} with id of {resource_id}",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type


class ParentNotFoundError(ResourceNotFoundError):
    """Referenced parent record missing at create time."""
    def __init__(
        self, parent_type: str, parent_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(parent_type, parent_id, context)
        self.code = "PARENT_NOT_FOUND"


class AuthenticationError(TaskerError):
    """Missing, malformed or expired credentials."""
    def __init__(self, message: str = "Not authorized to access this route",
                 context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(TaskerError):
    """Requester is neither the resource owner nor an Admin."""
    def __init__(
        self, requester_id: str, action: str, resource_type: str, resource_id: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.requester_id = str(requester_id)
        ctx.resource_id = str(resource_id)
        super().__init__(
            f"User {requester_id} is not authorized to {action} "
            f"{resource_type.lower()} {resource_id}",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, ctx, 401,
        )
        self.action = action


class RoleNotAllowedError(TaskerError):
    """Requester role is not permitted on the route."""
    def __init__(self, role: str, context: ErrorContext | None = None):
        super().__init__(
            f"User role {role} is not authorized to access this route",
            "ROLE_NOT_ALLOWED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.role = role


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TaskerError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
