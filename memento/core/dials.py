"""Dials — one (remaining count, period proportion) pair per countdown unit.

Invariants:
    - Always seven dials, ordered years → seconds (Granularity declaration order)
    - The seconds dial is animated by the sub-second fraction, every other unit by its own period
"""

from dataclasses import dataclass

from memento.core.countdown import RemainingBreakdown
from memento.core.domain_types import Fraction, Granularity
from memento.core.proportions import ProportionSet


@dataclass(frozen=True)
class Dial:
    granularity: Granularity
    remaining: int
    proportion: Fraction


def compose_dials(breakdown: RemainingBreakdown, proportions: ProportionSet) -> list[Dial]:
    return [
        Dial(g, breakdown.value(g), proportions.for_granularity(g))
        for g in Granularity
    ]
