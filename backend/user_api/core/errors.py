"""Error Hierarchy — typed, categorized exceptions for every user service failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status (int)
    - message is the exact human-readable text surfaced in the Error Body
      (rendered by schemas/user.ErrorBody at the boundary)
    - Domain errors are client-correctable (400); only MethodNotAllowedError is 405

Design Decisions:
    - Single hierarchy with UserServiceError base: dispatcher catches one type
      (ADR: uniform error shape)
    - Store errors live outside the UserServiceError tree: the store never decides
      what the caller sees, operations translate them (ADR: boundary mapping)
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for routing and observability."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    STORE = "store"
    TIMEOUT = "timeout"
    ROUTING = "routing"


class UserServiceError(Exception):
    """Base exception for all user service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 400,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status


# ─── Client Input Errors ────────────────────────────────────────

class InvalidUserDataError(UserServiceError):
    """Request body is not a valid User document."""
    def __init__(self):
        super().__init__(
            "invalid user data", "INVALID_USER_DATA", ErrorCategory.VALIDATION,
        )


class InvalidEmailError(UserServiceError):
    """Email fails address syntax validation."""
    def __init__(self):
        super().__init__(
            "invalid email", "INVALID_EMAIL", ErrorCategory.VALIDATION,
        )


class MissingEmailError(UserServiceError):
    """Operation requires an email query parameter that was absent or empty."""
    def __init__(self):
        super().__init__(
            "email is required", "MISSING_EMAIL", ErrorCategory.VALIDATION,
        )


# ─── Conflict Errors ────────────────────────────────────────────

class UserAlreadyExistsError(UserServiceError):
    """Create attempted on an email that already has a record."""
    def __init__(self):
        super().__init__(
            "user already exists", "USER_ALREADY_EXISTS", ErrorCategory.CONFLICT,
        )


class UserDoesNotExistError(UserServiceError):
    """Update attempted on an email with no record."""
    def __init__(self):
        super().__init__(
            "user does not exist", "USER_DOES_NOT_EXIST", ErrorCategory.CONFLICT,
        )


# ─── Store Communication Errors ─────────────────────────────────

class FetchRecordError(UserServiceError):
    def __init__(self):
        super().__init__(
            "failed to fetch record", "FETCH_FAILED", ErrorCategory.STORE,
        )


class UnmarshalRecordError(UserServiceError):
    def __init__(self):
        super().__init__(
            "failed to unmarshal record", "UNMARSHAL_FAILED", ErrorCategory.STORE,
        )


class PutItemError(UserServiceError):
    """Write rejected by the store: lost conditional race or communication failure."""
    def __init__(self):
        super().__init__(
            "could not put item", "PUT_FAILED", ErrorCategory.STORE,
        )


class DeleteItemError(UserServiceError):
    """Delete rejected: record absent or communication failure (not distinguished)."""
    def __init__(self):
        super().__init__(
            "could not delete item", "DELETE_FAILED", ErrorCategory.STORE,
        )


class RequestTimeoutError(UserServiceError):
    """Operation exceeded the per-call timeout."""
    def __init__(self, timeout_seconds: float):
        super().__init__(
            "request timed out", "REQUEST_TIMEOUT", ErrorCategory.TIMEOUT,
        )
        self.timeout_seconds = timeout_seconds


class MethodNotAllowedError(UserServiceError):
    """HTTP method has no operation bound to it."""
    def __init__(self, method: str):
        super().__init__(
            "method not allowed", "METHOD_NOT_ALLOWED", ErrorCategory.ROUTING, 405,
        )
        self.method = method


# ─── Store Errors (raised by the store, translated by operations) ─

class StoreError(Exception):
    """Key-value store call failed (network, timeout, throttling, serialization)."""

    def __init__(self, operation: str, detail: str = ""):
        super().__init__(f"store {operation} failed: {detail}" if detail else f"store {operation} failed")
        self.operation = operation
        self.detail = detail


class ConditionCheckFailedError(StoreError):
    """Conditional write/delete rejected because its predicate did not hold."""
