"""Error Hierarchy — typed, categorized exceptions for all payouts failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Authentication errors are 401, business-rule errors 400, lookups 404,
      persistence failures 500
    - to_response() produces the REST envelope; no internal details in messages
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Identifiers attached to an error for logs and the response body."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    restaurant_id: str | None = None
    admin_id: str | None = None
    withdrawal_request_id: str | None = None


class PayoutsError(Exception):
    """Base exception for all payouts errors."""

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
                    "restaurant_id": self.context.restaurant_id,
                    "admin_id": self.context.admin_id,
                    "withdrawal_request_id": self.context.withdrawal_request_id,
                },
            }
        }


# ─── Authentication Errors (401) ────────────────────────────────

class AuthenticationRequiredError(PayoutsError):
    """Caller identity missing or unknown."""
    def __init__(self, principal: str, context: ErrorContext | None = None):
        super().__init__(
            f"{principal} authentication required",
            "AUTHENTICATION_REQUIRED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.principal = principal


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidAmountError(PayoutsError):
    """Withdrawal amount is not a positive finite number."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Valid withdrawal amount is required",
            "INVALID_AMOUNT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class PendingRequestExistsError(PayoutsError):
    """Restaurant already has a withdrawal request awaiting review."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You already have a pending withdrawal request",
            "PENDING_REQUEST_EXISTS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class InsufficientBalanceError(PayoutsError):
    """Requested amount exceeds the effective available balance."""
    def __init__(self, available: float, context: ErrorContext | None = None):
        super().__init__(
            f"Insufficient balance. Available balance: Rs {available:.2f}",
            "INSUFFICIENT_BALANCE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.available = available


class InvalidStatusTransitionError(PayoutsError):
    """Approve/reject attempted on a request that is no longer Pending."""
    def __init__(self, current_status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Withdrawal request is already {current_status}",
            "INVALID_STATUS_TRANSITION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.current_status = current_status


class ResourceNotFoundError(PayoutsError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PayoutsError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
