"""Error Hierarchy: typed, categorized exceptions for message search failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are the caller's fault; infrastructure errors (500-level) are not
    - to_response() produces the REST envelope
    - Only InvalidIdentifierError escapes query composition; bad dates and unknown
      filter keys degrade to "no constraint" and never reach this module

Design Decisions:
    - Single hierarchy with MessageSearchError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    filter_key: str | None = None
    organization_id: int | None = None
    debug_info: dict[str, Any] | None = None


class MessageSearchError(Exception):
    """Base exception for all message search errors."""

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
                    "filter_key": self.context.filter_key,
                    "organization_id": self.context.organization_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidIdentifierError(MessageSearchError):
    """A filter identifier could not be parsed as an integer."""
    def __init__(
        self, value: object, filter_key: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.filter_key = filter_key
        super().__init__(
            f"Invalid identifier {value!r} in '{filter_key}': expected an integer",
            "INVALID_IDENTIFIER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.value = value


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MessageSearchError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
