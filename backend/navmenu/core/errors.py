"""Error Hierarchy - typed, categorized exceptions for all menu-item failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() produces the REST error envelope
    - Messages name at most the offending field or id, never internal state

Design Decisions:
    - Single hierarchy with NavMenuError base: one FastAPI handler catches all
    - StorageFailure is NOT a NavMenuError: it is the raw failure reported by the
      storage engine, classified into a tagged HTTP error by the controller
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    STORAGE = "storage"
    METADATA = "metadata"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    item_id: int | None = None
    menu_id: int | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class NavMenuError(Exception):
    """Base exception for all menu-item API errors."""

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
        """Convert to standardized REST error response.

        Details attached to the error (storage failure data) are emitted
        under `data`.
        """
        response = {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "status": self.http_status,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "item_id": self.context.item_id,
                    "menu_id": self.context.menu_id,
                    "field": self.context.field,
                },
            }
        }
        if self.context.debug_info is not None:
            response["error"]["data"] = self.context.debug_info
        return response


# ─── Storage engine failure (raw) ───────────────────────────────

class StorageFailure(Exception):
    """Failure reported by the storage engine's write operation.

    `code` distinguishes insert/update-class failures (db_insert_error,
    db_update_error) from rejections such as invalid_menu_id.
    """

    def __init__(self, code: str, message: str, data: dict | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data or {}


# ─── Request Errors (400-level) ─────────────────────────────────

class FieldValidationError(NavMenuError):
    """Request field is malformed or has the wrong type."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "rest_invalid_param", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class PostExistsError(NavMenuError):
    """Create called with a client-supplied id."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Cannot create existing post.",
            "rest_post_exists", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 400,
        )


class ResourceNotFoundError(NavMenuError):
    """Requested menu item does not exist."""
    def __init__(self, item_id: int | str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid post ID '{item_id}'.",
            "rest_post_invalid_id", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class StorageRejectedError(NavMenuError):
    """Storage engine rejected the write (validation-class failure)."""
    def __init__(self, failure: StorageFailure, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = dict(failure.data)
        super().__init__(
            failure.message, failure.code, ErrorCategory.STORAGE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.failure = failure


class MetadataUpdateError(NavMenuError):
    """Metadata store refused a meta update."""
    def __init__(
        self, message: str, key: str, http_status: int = 400,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = f"meta.{key}"
        super().__init__(
            message, "rest_invalid_meta", ErrorCategory.METADATA,
            ErrorSeverity.ERROR, ctx, http_status,
        )
        self.key = key


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageInternalError(NavMenuError):
    """Storage engine failed to insert or update the record."""
    def __init__(self, failure: StorageFailure, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.debug_info = dict(failure.data)
        super().__init__(
            failure.message, failure.code, ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.failure = failure


class DatabaseError(NavMenuError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


def classify_storage_failure(
    failure: StorageFailure, fatal_code: str, context: ErrorContext | None = None,
) -> NavMenuError:
    """Map a raw storage failure to its HTTP-tagged error.

    `fatal_code` is db_insert_error on create and db_update_error on update;
    only that code is a 500, every other rejection is a 400.
    """
    if failure.code == fatal_code:
        return StorageInternalError(failure, context)
    return StorageRejectedError(failure, context)
