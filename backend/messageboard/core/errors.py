"""Error Hierarchy - typed, categorized exceptions for message board failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Not-found from the store is a value (None / zero counts), never an exception;
      the service layer turns it into ResourceNotFoundError
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MessageBoardError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    board: str | None = None
    thread_id: str | None = None
    reply_id: str | None = None


class MessageBoardError(Exception):
    """Base exception for all message board errors."""

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
                    "board": self.context.board,
                    "thread_id": self.context.thread_id,
                    "reply_id": self.context.reply_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(MessageBoardError):
    """Requested thread or reply does not exist."""
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


# ─── Infrastructure Errors (500-level) ──────────────────────────

class InvalidUpdateError(MessageBoardError):
    """An update operator met a stored value it cannot apply to."""
    def __init__(self, message: str, field_name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid update on '{field_name}': {message}",
            "STORE_UPDATE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.field_name = field_name
