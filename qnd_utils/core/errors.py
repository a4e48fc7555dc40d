"""Error Hierarchy: typed, categorized exceptions for the few hard failures in qnd-utils.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are 400-level; storage errors are 500-level
    - RestResponseError carries the upstream status and the best-effort parsed body
    - to_response() produces the REST envelope used by api/error_handlers.py

Design Decisions:
    - Single hierarchy with QndError base: one FastAPI handler catches all
    - Everything else in core fails soft and returns a sentinel instead of raising
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
    EXTERNAL_API = "external_api"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Extra context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class QndError(Exception):
    """Base exception for all qnd-utils errors."""

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
                },
            }
        }


# ─── Validation Errors (400-level) ──────────────────────────────

class UnparseableDateError(QndError):
    """A date string matched none of the supported formats."""
    def __init__(self, value: str, context: ErrorContext | None = None):
        super().__init__(
            f"Date string {value!r} could not be parsed as ISO 8601, SQL or RFC 2822; "
            "convert it to a datetime before formatting",
            "UNPARSEABLE_DATE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.value = value


class RequestDataError(QndError):
    """Request parameters failed validation; details name each offending field."""
    def __init__(
        self, details: list[dict[str, str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.details = details

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response


# ─── External API Errors ────────────────────────────────────────

class RestResponseError(QndError):
    """An HTTP response came back with status >= 400."""
    def __init__(
        self, status: int, body: Any, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"REST request failed with status {status}",
            "REST_RESPONSE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, status,
        )
        self.status = status
        self.body = body

    def to_dict(self) -> dict:
        """The rejection payload: {"status": ..., "body": ...}."""
        return {"status": self.status, "body": self.body}

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["body"] = self.body
        return response


class ResponseDecodeError(QndError):
    """A successful HTTP response carried a body that is not valid JSON."""
    def __init__(
        self, status: int, body: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Response with status {status} did not contain valid JSON",
            "RESPONSE_DECODE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
        self.status = status
        self.body = body


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(QndError):
    """Key/value storage backend failed."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
