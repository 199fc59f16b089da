"""Error Hierarchy — typed, categorized exceptions for all Memento failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Configuration and grid errors are caller mistakes; clock and calendar errors are fatal
    - to_response() produces a flat dict envelope for logs and renderers
    - Errors are raised from the triggering call, chained with `from`, never swallowed

Design Decisions:
    - Single hierarchy with MementoError base: one except clause catches the whole core
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    CLOCK = "clock"
    CALENDAR = "calendar"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    component: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class MementoError(Exception):
    """Base exception for all Memento errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "recoverable": self.recoverable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "component": self.context.component,
                    "operation": self.context.operation,
                    "debug_info": self.context.debug_info,
                },
            }
        }


# ─── Caller Errors ──────────────────────────────────────────────

class InvalidConfigurationError(MementoError):
    """Engine constructed with a missing or out-of-range setting."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_CONFIGURATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class GridIndexError(MementoError):
    """Week grid cell requested outside lifeExpectancyYears x weeksPerYear."""
    def __init__(
        self, axis: str, value: int, upper: int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{axis}={value} outside grid range [0, {upper})",
            "GRID_INDEX_OUT_OF_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.axis = axis
        self.value = value
        self.upper = upper


class PastEndOfLifeError(MementoError):
    """initialize() found end-of-life already elapsed under the raise policy."""
    def __init__(self, end_of_life: datetime, now: datetime, context: ErrorContext | None = None):
        super().__init__(
            f"End of life {end_of_life.isoformat()} is not after {now.isoformat()}",
            "PAST_END_OF_LIFE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context,
        )
        self.end_of_life = end_of_life
        self.now = now


# ─── Host Errors ────────────────────────────────────────────────

class ClockUnavailableError(MementoError):
    """Host clock could not be read."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Host clock unavailable: {message}",
            "CLOCK_UNAVAILABLE", ErrorCategory.CLOCK,
            ErrorSeverity.CRITICAL, context,
        )


class CalendarArithmeticOverflowError(MementoError):
    """Calendar arithmetic left the representable date range."""
    def __init__(self, operation: str, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Calendar {operation} overflowed: {message}",
            "CALENDAR_OVERFLOW", ErrorCategory.CALENDAR,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


class CountdownNotInitializedError(MementoError):
    """tick() called before initialize() anchored the counter to a wall-clock instant."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Countdown must be initialized before it can tick",
            "COUNTDOWN_NOT_INITIALIZED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
