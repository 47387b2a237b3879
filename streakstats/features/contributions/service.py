from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from streakstats.core.config import Settings, settings
from streakstats.core.errors import ValidationError
from streakstats.core.logging import log_event
from streakstats.features.contributions.extractor import extract
from streakstats.features.contributions.ledger import merge_all
from streakstats.features.contributions.source import GitHubContributionSource
from streakstats.features.contributions.streaks import analyze
from streakstats.models.contributions import ContributionStats, Ledger

logger = logging.getLogger("streakstats")


def years_for(starting_year: Optional[int] = None, current_year: Optional[int] = None) -> List[int]:
    """Inclusive year range from ``starting_year`` (default: this year) to now."""
    current = current_year if current_year is not None else date.today().year
    start = starting_year if starting_year is not None else current
    if start > current:
        raise ValidationError(f"starting_year {start} is after the current year {current}")
    return list(range(start, current + 1))


class ContributionStatsService:
    """Fetch -> extract -> merge -> analyze for one user."""

    def __init__(self, source: GitHubContributionSource, *, settings_obj: Optional[Settings] = None):
        self._source = source
        self._settings = settings_obj or settings

    def close(self) -> None:
        self._source.close()

    def get_ledger(self, user: str, starting_year: Optional[int] = None, *, current_year: Optional[int] = None) -> Ledger:
        if starting_year is None:
            starting_year = self._settings.STARTING_YEAR
        years = years_for(starting_year, current_year)
        documents = self._source.fetch(user, years)
        missing = [year for year in years if year not in documents]
        if missing:
            log_event("warning", f"[stats] {user}: no data for years {missing}", user=user, event_type="years_missing", extra={"years": missing})

        ledger = merge_all(extract(documents[year], year) for year in sorted(documents))
        logger.info(
            f"[stats] {user}: merged {len(documents)}/{len(years)} years, {len(ledger)} days",
            extra={"user": user, "years": sorted(documents)},
        )
        return ledger

    def get_stats(
        self,
        user: str,
        starting_year: Optional[int] = None,
        grace_days: Optional[int] = None,
        *,
        current_year: Optional[int] = None,
    ) -> ContributionStats:
        ledger = self.get_ledger(user, starting_year, current_year=current_year)
        grace = self._settings.GRACE_DAYS if grace_days is None else grace_days
        return analyze(ledger, grace)
