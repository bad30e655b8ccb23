"""Error Hierarchy: typed, categorized exceptions for all Users API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - HTTP status derives from category via http_status_for(): nowhere else
    - to_response() produces the flat {"error": "<message>"} envelope
    - Only DATABASE errors increment the error counter
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UsersApiError base: FastAPI global handler catches all
    - DatabaseError public message chosen by StoreOperation, so each endpoint
      reports its own failure text while the repository stays endpoint-agnostic
"""

from enum import Enum

from users_api.core.domain_types import StoreOperation


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


_HTTP_STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.PAYLOAD_TOO_LARGE: 413,
    ErrorCategory.RESOURCE_NOT_FOUND: 404,
    ErrorCategory.TIMEOUT: 408,
    ErrorCategory.DATABASE: 500,
    ErrorCategory.INTERNAL: 500,
}

_STORE_FAILURE_MESSAGES: dict[StoreOperation, str] = {
    StoreOperation.FETCH_ONE: "Database error",
    StoreOperation.FETCH_ALL: "Failed to fetch users",
    StoreOperation.CREATE: "Failed to create user",
    StoreOperation.DELETE: "Failed to delete user",
}


def http_status_for(category: ErrorCategory) -> int:
    """Translate an error category into its HTTP status code."""
    return _HTTP_STATUS_BY_CATEGORY[category]


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity

    @property
    def http_status(self) -> int:
        return http_status_for(self.category)

    @property
    def counts_as_error(self) -> bool:
        """True when the failure belongs in the metrics error counter."""
        return self.category is ErrorCategory.DATABASE

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


# ─── Request Errors (400-level) ─────────────────────────────────

class InvalidUserIdError(UsersApiError):
    """Path id segment is not a signed 32-bit integer."""
    def __init__(self, raw_value: str):
        super().__init__(
            "Invalid user ID", "INVALID_USER_ID",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
        )
        self.raw_value = raw_value


class InvalidJsonError(UsersApiError):
    """Request body did not decode into the expected JSON payload."""
    def __init__(self, detail: str = ""):
        super().__init__(
            "Invalid JSON format", "INVALID_JSON",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
        )
        self.detail = detail


class PayloadTooLargeError(UsersApiError):
    """Request body exceeded the configured byte limit."""
    def __init__(self, limit: int):
        super().__init__(
            "Payload too large", "PAYLOAD_TOO_LARGE",
            ErrorCategory.PAYLOAD_TOO_LARGE, ErrorSeverity.WARNING,
        )
        self.limit = limit


class UserNotFoundError(UsersApiError):
    """No user row matches the requested id."""
    def __init__(self, user_id: int):
        super().__init__(
            "User not found", "USER_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.WARNING,
        )
        self.user_id = user_id


class RouteNotFoundError(UsersApiError):
    """No route matches the request method and path."""
    def __init__(self, method: str, path: str):
        super().__init__(
            "Not found", "ROUTE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO,
        )
        self.method = method
        self.path = path


class RequestTimeoutError(UsersApiError):
    """Request did not complete within the per-request deadline."""
    def __init__(self, timeout_seconds: float):
        super().__init__(
            "Request timed out", "REQUEST_TIMEOUT",
            ErrorCategory.TIMEOUT, ErrorSeverity.WARNING,
        )
        self.timeout_seconds = timeout_seconds


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(UsersApiError):
    """Store operation failed (connectivity, query or constraint violation)."""
    def __init__(self, detail: str, operation: StoreOperation):
        super().__init__(
            _STORE_FAILURE_MESSAGES.get(operation, "Database error"),
            "DATABASE_ERROR", ErrorCategory.DATABASE, ErrorSeverity.CRITICAL,
        )
        self.detail = detail
        self.operation = operation

    def __str__(self) -> str:
        return f"Database {self.operation.value} failed: {self.detail}"
