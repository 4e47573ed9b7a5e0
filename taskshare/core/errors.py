"""Error Hierarchy — typed, categorized exceptions for every task-service failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (4xx) leave stored state untouched; infrastructure errors are 5xx
    - ResourceNotFoundError message is identical for absent and invisible tasks
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskShareError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Core check_* functions RETURN these instances; the shell raises them
"""

from dataclasses import dataclass, field
from enum import Enum
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
    PERMISSION = "permission"
    RESOURCE_NOT_FOUND = "resource_not_found"
    PRECONDITION = "precondition"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    task_id: str | None = None
    field: str | None = None
    details: list[dict[str, str]] | None = None


class TaskShareError(Exception):
    """Base exception for all task-service errors."""

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
        error = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "task_id": self.context.task_id,
                "field": self.context.field,
            },
        }
        if self.context.details:
            error["details"] = self.context.details
        return {"error": error}


# ─── Domain Errors (400-level) ──────────────────────────────────

class TaskValidationError(TaskShareError):
    """Request input failed a domain rule (e.g. blank title)."""
    def __init__(
        self, message: str, field: str,
        code: str = "VALIDATION_ERROR", context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        ctx.details = [{"field": field, "message": message}]
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class InvalidETagError(TaskValidationError):
    """If-Match header is not a weak entity tag of the form W/"<n>"."""
    def __init__(self, token: str, context: ErrorContext | None = None):
        super().__init__(
            f"Malformed entity tag: {token!r}. Expected W/\"<version>\".",
            "If-Match", "INVALID_ETAG", context,
        )
        self.token = token


class AuthenticationError(TaskShareError):
    """No verified requester identity reached the service."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(TaskShareError):
    """Requester can see the task but its role lacks the capability."""
    def __init__(self, task_id: str, capability: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__(
            f"Not allowed to {capability.replace('_', ' ')} on this task",
            "FORBIDDEN", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, ctx, 403,
        )
        self.capability = capability


class ResourceNotFoundError(TaskShareError):
    """Requested resource does not exist (or is not visible to the requester)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        if resource_type == "Task":
            ctx.task_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type


class PreconditionRequiredError(TaskShareError):
    """Mutating call arrived without an If-Match version."""
    def __init__(self, task_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__(
            "If-Match header is required for this operation",
            "PRECONDITION_REQUIRED", ErrorCategory.PRECONDITION,
            ErrorSeverity.WARNING, ctx, 428,
        )


class PreconditionFailedError(TaskShareError):
    """Supplied version is stale, or a concurrent commit won the race."""
    def __init__(
        self, task_id: str, expected_version: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.task_id = task_id
        super().__init__(
            f"Task was modified concurrently (If-Match version {expected_version} is stale). "
            "Re-fetch the task and retry.",
            "PRECONDITION_FAILED", ErrorCategory.PRECONDITION,
            ErrorSeverity.WARNING, ctx, 412,
        )
        self.expected_version = expected_version


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TaskShareError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
