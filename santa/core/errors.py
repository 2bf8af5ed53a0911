"""Error Hierarchy — typed, categorized exceptions for Secret Santa failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - The pairing engine itself never raises: it returns a DrawResult and the
      service layer converts failures into these exceptions
    - Single hierarchy with SantaError base: FastAPI global handler catches all
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_id: str | None = None
    participant_id: str | None = None
    attempts: int | None = None
    debug_info: dict[str, Any] | None = None


class SantaError(Exception):
    """Base exception for all Secret Santa errors."""

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
                    "event_id": self.context.event_id,
                    "participant_id": self.context.participant_id,
                    "attempts": self.context.attempts,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InsufficientParticipantsError(SantaError):
    """Draw requested with fewer than 2 participants."""
    def __init__(self, count: int, context: ErrorContext | None = None):
        super().__init__(
            f"A draw needs at least 2 participants (got {count}).",
            "INSUFFICIENT_PARTICIPANTS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 422,
        )
        self.count = count


class DrawExhaustedError(SantaError):
    """No valid assignment found within the retry bound."""
    def __init__(self, max_attempts: int, context: ErrorContext | None = None):
        super().__init__(
            f"Unable to generate a valid draw after {max_attempts} attempts. "
            "Try different exclusion groups or add more participants.",
            "DRAW_EXHAUSTED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 422,
        )
        self.max_attempts = max_attempts


class InvalidTicketError(SantaError):
    """Ticket code could not be decoded."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid ticket code",
            "INVALID_TICKET", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidEventError(SantaError):
    """Event payload or identifier is unusable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_EVENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class StaleDrawError(SantaError):
    """Stored pairings no longer cover the participant list."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Participants changed since the last draw. Run the draw again.",
            "STALE_DRAW", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


class ResourceNotFoundError(SantaError):
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

class StorageError(SantaError):
    """Event store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
        self.reason = message
