"""
streakstats/models/contributions.py
Read models for contribution statistics: StreakRange, ContributionStats.
Both are computed fresh from a finished ledger and frozen once built.
"""

from datetime import date
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Calendar date -> contribution count, iterated in ascending date order.
Ledger = Dict[date, int]


class StreakRange(BaseModel):
    """A run of consecutive contribution days."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date
    length: int = Field(ge=0, description="Days with contributions in the run")


class ContributionStats(BaseModel):
    """Totals and streaks for one user over the fetched years."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_contributions: int = Field(ge=0)
    longest_streak: StreakRange
    current_streak: StreakRange
