"""Domain Types — enums, unit constants and value types shared by the engines.

Invariants:
    - Unit constants are the single source of truth for decompose() divisors
    - WEEKS_PER_YEAR is fixed at 52 (53-week ISO years are ignored by the grid)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - NewType for fractions: zero runtime cost, full type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

Fraction = NewType("Fraction", float)   # 0.0 <= x < 1.0


# ─── Unit Constants ──────────────────────────────────────────────

SECONDS_PER_MINUTE: int = 60
SECONDS_PER_HOUR: int = 3600
SECONDS_PER_DAY: int = 86_400
DAYS_PER_WEEK: int = 7
SECONDS_PER_WEEK: int = SECONDS_PER_DAY * DAYS_PER_WEEK
WEEKS_PER_MONTH: int = 4
MONTHS_PER_YEAR: int = 12
MILLISECONDS_PER_SECOND: int = 1000
MICROSECONDS_PER_MILLISECOND: int = 1000

WEEKS_PER_YEAR: int = 52
DEFAULT_LIFE_EXPECTANCY_YEARS: int = 75


# ─── Enums ───────────────────────────────────────────────────────

class CountdownState(str, Enum):
    """Countdown lifecycle. ACTIVE → EXPIRED only, never back."""
    ACTIVE = "active"
    EXPIRED = "expired"


class WeekClassification(str, Enum):
    """Life-in-weeks grid cell classes."""
    PAST = "past"
    CURRENT = "current"
    FUTURE = "future"


class Granularity(str, Enum):
    """The seven countdown units, coarsest first."""
    YEARS = "years"
    MONTHS = "months"
    WEEKS = "weeks"
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"


class ExpiryPolicy(str, Enum):
    """What initialize() does when end-of-life is already behind us."""
    CLAMP = "clamp"
    RAISE = "raise"
