"""Snapshot Schemas — Pydantic models for everything the renderer draws in one frame.

Invariants:
    - DialReading.proportion is bounded 0.0–1.0; remaining counts are non-negative
    - LifeClockSnapshot.dials holds exactly seven readings, years → seconds
    - grid rows are optional (classifying every cell is only needed once per week)

Design Decisions:
    - from_core classmethods convert frozen core dataclasses; core never imports pydantic
"""

from datetime import datetime

from pydantic import BaseModel, Field

from memento.core.dials import Dial
from memento.core.domain_types import CountdownState, Granularity, WeekClassification
from memento.core.life_summary import LifeSummary
from memento.core.week_grid import WeekCell


class DialReading(BaseModel):
    """One timer box: remaining count plus the period fill fraction."""
    unit: Granularity
    remaining: int = Field(ge=0)
    proportion: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_core(cls, dial: Dial) -> "DialReading":
        return cls(unit=dial.granularity, remaining=dial.remaining, proportion=dial.proportion)


class WeekCellReading(BaseModel):
    year: int = Field(ge=0)
    week: int = Field(ge=0)
    classification: WeekClassification

    @classmethod
    def from_core(cls, cell: WeekCell) -> "WeekCellReading":
        return cls(
            year=cell.grid_year_index, week=cell.week_index,
            classification=cell.classification,
        )


class LifeSummaryReading(BaseModel):
    age_years: int = Field(ge=0)
    calendar_years_remaining: int = Field(ge=0)
    calendar_days_remaining: int = Field(ge=0)
    weeks_lived: int = Field(ge=0)
    total_weeks: int = Field(gt=0)
    fraction_lived: float = Field(ge=0.0, le=1.0)

    @classmethod
    def from_core(cls, summary: LifeSummary) -> "LifeSummaryReading":
        return cls(
            age_years=summary.age_years,
            calendar_years_remaining=summary.calendar_years_remaining,
            calendar_days_remaining=summary.calendar_days_remaining,
            weeks_lived=summary.weeks_lived,
            total_weeks=summary.total_weeks,
            fraction_lived=summary.fraction_lived,
        )


class LifeClockSnapshot(BaseModel):
    """Full frame handed to the rendering layer."""
    taken_at: datetime
    birth_instant: datetime
    end_of_life: datetime
    state: CountdownState
    total_seconds_remaining: int = Field(ge=0)
    dials: list[DialReading] = Field(min_length=7, max_length=7)
    summary: LifeSummaryReading
    grid: list[list[WeekCellReading]] | None = None
