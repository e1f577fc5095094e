"""Error Hierarchy — typed, categorized exceptions for all dashboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; storage faults are recoverable by resubmitting
    - to_response() produces the REST envelope
    - No raw storage or provider detail leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DashboardError base: FastAPI global handler catches all
    - ErrorContext as dataclass: operation/target_id travel with the error, not with the logger
    - IdentityProviderError sits outside the hierarchy: it is the provider's taxonomy,
      which the Auth Classifier maps onto AuthClassificationError
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    target_id: str | None = None
    debug_info: dict[str, Any] | None = None


class DashboardError(Exception):
    """Base exception for all dashboard errors."""

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
                    "operation": self.context.operation,
                    "target_id": self.context.target_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DomainRuleError(DashboardError):
    """Business rule violated before any write was attempted."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


class DuplicateEmailError(DomainRuleError):
    """A user with the submitted email is already stored."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            "A user with this email already exists.", "DUPLICATE_EMAIL", context,
        )
        self.email = email


class ResourceNotFoundError(DashboardError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AuthClassificationError(DashboardError):
    """Identity provider failure, reduced to one user-facing message."""
    def __init__(
        self, user_message: str, error_type: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            user_message, "AUTH_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 401,
        )
        self.error_type = error_type


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageFaultError(DashboardError):
    """Store read/write failed. Carries operation and target, never the raw fault."""
    def __init__(
        self, operation: str, target_id: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        ctx.target_id = target_id
        target = f" {target_id}" if target_id else ""
        super().__init__(
            f"Database Error: Failed to {operation}{target}.",
            "STORAGE_FAULT", ErrorCategory.DATABASE,
            ErrorSeverity.ERROR, ctx, 503,
        )
        self.operation = operation
        self.target_id = target_id


class IllegalTransitionError(DashboardError):
    """Action state machine asked to take an edge that is not in the table."""
    def __init__(self, current: str, requested: str, context: ErrorContext | None = None):
        super().__init__(
            f"Illegal action transition {current} -> {requested}",
            "ILLEGAL_TRANSITION", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.current = current
        self.requested = requested


# ─── Identity provider taxonomy ─────────────────────────────────

class IdentityProviderError(Exception):
    """Typed failure raised by an identity provider client."""

    def __init__(self, error_type: str, detail: str = ""):
        super().__init__(f"{error_type}: {detail}" if detail else error_type)
        self.error_type = error_type
        self.detail = detail


class CredentialsSignin(IdentityProviderError):
    """Submitted credentials did not match a known identity."""

    def __init__(self, detail: str = ""):
        super().__init__("CredentialsSignin", detail)
