"""Error Taxonomy — one exception type per way a catalog request can fail.

Invariants:
    - Every error has a stable code, an ErrorKind, and a category derived from the kind
    - kind is what routes look up in their status tables (api/status_tables.py)
    - http_status is only the fallback the global handler uses for raised errors
    - to_response() is the single envelope shape for every failure body
    - Envelope context lists only the identifiers that were actually known

Design Decisions:
    - Services return these as values; the store raises them and the service
      converts back to values, so one hierarchy serves both paths
    - Category is a function of kind: two errors of the same kind can never
      disagree on how clients should group them
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Coarse grouping echoed to clients."""
    VALIDATION = "validation"
    SECURITY = "security"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class ErrorKind(str, Enum):
    """Closed set of failure kinds; every route status table maps all of them."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORE = "store"


CATEGORY_BY_KIND: dict[ErrorKind, ErrorCategory] = {
    ErrorKind.VALIDATION: ErrorCategory.VALIDATION,
    ErrorKind.AUTHENTICATION: ErrorCategory.SECURITY,
    ErrorKind.AUTHORIZATION: ErrorCategory.SECURITY,
    ErrorKind.NOT_FOUND: ErrorCategory.RESOURCE_NOT_FOUND,
    ErrorKind.CONFLICT: ErrorCategory.CONFLICT,
    ErrorKind.STORE: ErrorCategory.DATABASE,
}


@dataclass
class ErrorContext:
    """Where the failure happened; mutable so outer layers can fill in operation."""
    product_id: str | None = None
    slug: str | None = None
    principal_id: str | None = None
    operation: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def identifiers(self) -> dict[str, str]:
        known = asdict(self)
        known.pop("timestamp")
        return {k: v for k, v in known.items() if v is not None}


class CatalogError(Exception):
    """Base of every catalog failure."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: ErrorKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def category(self) -> ErrorCategory:
        return CATEGORY_BY_KIND[self.kind]

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": self.context.identifiers(),
            }
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ─── Caller errors ──────────────────────────────────────────────

class ValidationError(CatalogError):
    """Input rejected before any catalog rule ran."""

    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorKind.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class AuthenticationError(CatalogError):
    """Bearer credential missing, malformed, expired or forged."""

    def __init__(
        self, message: str = "Authentication required", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTHENTICATION_REQUIRED", ErrorKind.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class AuthorizationError(CatalogError):
    """Authenticated principal lacks the permission the action needs."""

    def __init__(self, role: str | None, permission: str, context: ErrorContext | None = None):
        super().__init__(
            f"Role '{role or 'none'}' is not allowed to perform '{permission}'",
            "PERMISSION_DENIED", ErrorKind.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.role = role
        self.permission = permission


class NotFoundError(CatalogError):
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorKind.NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(CatalogError):
    """Duplicate slug or a lifecycle transition that is not allowed."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorKind.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Store errors ───────────────────────────────────────────────

class StoreError(CatalogError):
    """The persistence provider could not complete the operation."""

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorKind.STORE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
