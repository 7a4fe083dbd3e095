"""Error Hierarchy — typed, categorized exceptions for all training-backend failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400/404) are raised by the core and services; infrastructure errors are 503
    - to_response() produces the REST envelope consumed by the API error handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TrainingHubError base: one FastAPI handler maps all of them
    - NotFound -> 404, Conflict/CapacityExceeded/InvalidInput -> 400,
      bad credentials -> 401, anything else -> 500
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from app.core.domain_types import RequestId, TrainingSessionId, UserId


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
    STORAGE = "storage"
    INTERNAL = "internal"
    CONFLICT = "conflict"
    AUTHENTICATION = "authentication"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: UserId | None = None
    session_id: TrainingSessionId | None = None
    request_id: RequestId | None = None
    debug_info: dict[str, Any] | None = None


class TrainingHubError(Exception):
    """Base exception for all training-backend errors."""

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
                    "session_id": self.context.session_id,
                    "request_id": self.context.request_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(TrainingHubError):
    """Referenced id does not exist."""
    def __init__(
        self, resource_type: str, resource_id: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class RegistrationConflictError(TrainingHubError):
    """User already holds an active registration for the session."""
    def __init__(
        self, user_id: UserId, session_id: TrainingSessionId,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        ctx.session_id = session_id
        super().__init__(
            "User is already registered for this session",
            "ALREADY_REGISTERED", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 400,
        )


class CapacityExceededError(TrainingHubError):
    """Session has no free seat left."""
    def __init__(
        self, session_id: TrainingSessionId, max_participants: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.session_id = session_id
        super().__init__(
            f"Training session is full ({max_participants}/{max_participants})",
            "SESSION_FULL", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.max_participants = max_participants


class InvalidInputError(TrainingHubError):
    """Malformed filter, status value or entity field."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class AuthenticationError(TrainingHubError):
    """Credentials did not match any account for the requested role."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        super().__init__(
            "Invalid email, password or role",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.email = email


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TrainingHubError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class StoreError(TrainingHubError):
    """File-backed entity store could not read or write a collection."""
    def __init__(self, message: str, collection: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store '{collection}' failed: {message}",
            "STORE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.collection = collection
