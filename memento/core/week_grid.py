"""Week Grid — past/current/future classification for the life-in-weeks grid.

Invariants:
    - classify() is pure: same (grid year, week, now, birth) → same classification
    - Grid year N is the calendar year of birth + N calendar years
    - weekIndex (0-based) is compared directly against the 1-based week-of-year of now,
      and "current year" is the calendar year of now, not the week-based year
    - The grid is life_expectancy_years rows × weeks_per_year columns (52, 53-week years ignored)

Design Decisions:
    - WeekGridClassifier memoizes per (grid year, week index, current year, current week);
      results change at most once per week, so the cache is bounded by one grid pass
"""

from dataclasses import dataclass
from datetime import datetime

from memento.core.domain_types import WEEKS_PER_YEAR, WeekClassification
from memento.core.errors import ErrorContext, GridIndexError, InvalidConfigurationError
from memento.core.protocols import CalendarLike


@dataclass(frozen=True)
class WeekCell:
    grid_year_index: int
    week_index: int
    classification: WeekClassification


def classify_week(
    year_of_grid: int, week_index: int, current_year: int, current_week_of_year: int,
) -> WeekClassification:
    """Decision table on already-resolved calendar components."""
    if current_year > year_of_grid or (
        current_year == year_of_grid and week_index < current_week_of_year
    ):
        return WeekClassification.PAST
    if current_year == year_of_grid and week_index == current_week_of_year:
        return WeekClassification.CURRENT
    return WeekClassification.FUTURE


def classify(
    grid_year_index: int,
    week_index: int,
    now: datetime,
    birth_instant: datetime,
    calendar: CalendarLike,
) -> WeekClassification:
    year_of_grid = calendar.year_of(calendar.add_years(birth_instant, grid_year_index))
    return classify_week(
        year_of_grid, week_index, calendar.year_of(now), calendar.week_of_year(now),
    )


class WeekGridClassifier:
    """Bound to one birth instant and grid shape; validates indices and caches results."""

    def __init__(
        self,
        birth_instant: datetime | None,
        life_expectancy_years: int,
        calendar: CalendarLike,
        weeks_per_year: int = WEEKS_PER_YEAR,
    ):
        ctx = ErrorContext(component="week_grid", operation="construct")
        if birth_instant is None:
            raise InvalidConfigurationError("birth_instant must be set", "birth_instant", ctx)
        if life_expectancy_years <= 0:
            raise InvalidConfigurationError(
                f"life_expectancy_years must be positive, got {life_expectancy_years}",
                "life_expectancy_years", ctx,
            )
        if weeks_per_year <= 0:
            raise InvalidConfigurationError(
                f"weeks_per_year must be positive, got {weeks_per_year}",
                "weeks_per_year", ctx,
            )
        self._calendar = calendar
        self._birth_instant = calendar.localize(birth_instant)
        self.life_expectancy_years = life_expectancy_years
        self.weeks_per_year = weeks_per_year
        self._grid_years: dict[int, int] = {}
        self._cache: dict[tuple[int, int, int, int], WeekClassification] = {}
        self._cache_week: tuple[int, int] | None = None

    def year_of_grid(self, grid_year_index: int) -> int:
        if grid_year_index not in self._grid_years:
            shifted = self._calendar.add_years(self._birth_instant, grid_year_index)
            self._grid_years[grid_year_index] = self._calendar.year_of(shifted)
        return self._grid_years[grid_year_index]

    def _check(self, grid_year_index: int, week_index: int) -> None:
        ctx = ErrorContext(component="week_grid", operation="classify")
        if not 0 <= grid_year_index < self.life_expectancy_years:
            raise GridIndexError(
                "grid_year_index", grid_year_index, self.life_expectancy_years, ctx,
            )
        if not 0 <= week_index < self.weeks_per_year:
            raise GridIndexError("week_index", week_index, self.weeks_per_year, ctx)

    def classify(self, grid_year_index: int, week_index: int, now: datetime) -> WeekClassification:
        self._check(grid_year_index, week_index)
        current = (self._calendar.year_of(now), self._calendar.week_of_year(now))
        if current != self._cache_week:
            self._cache.clear()
            self._cache_week = current
        key = (grid_year_index, week_index, *current)
        if key not in self._cache:
            self._cache[key] = classify_week(
                self.year_of_grid(grid_year_index), week_index, *current,
            )
        return self._cache[key]

    def build_grid(self, now: datetime) -> list[list[WeekCell]]:
        """Classify every cell; one row per grid year."""
        return [
            [
                WeekCell(year, week, self.classify(year, week, now))
                for week in range(self.weeks_per_year)
            ]
            for year in range(self.life_expectancy_years)
        ]
