from __future__ import annotations

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Query

from streakstats.features.contributions.ledger import to_iso
from streakstats.features.contributions.service import ContributionStatsService
from streakstats.features.contributions.source import GitHubContributionSource
from streakstats.models.contributions import ContributionStats

router = APIRouter()


@lru_cache(maxsize=1)
def get_stats_service() -> ContributionStatsService:
    return ContributionStatsService(GitHubContributionSource())


@router.get("/v1/stats", response_model=ContributionStats)
def get_stats(
    user: str = Query(..., min_length=1),
    starting_year: Optional[int] = Query(None, ge=2005),
    grace_days: Optional[int] = Query(None, ge=0),
    service: ContributionStatsService = Depends(get_stats_service),
):
    """Total contributions plus longest and current streak for a user."""
    return service.get_stats(user, starting_year, grace_days)


@router.get("/v1/stats/calendar")
def get_calendar(
    user: str = Query(..., min_length=1),
    starting_year: Optional[int] = Query(None, ge=2005),
    service: ContributionStatsService = Depends(get_stats_service),
):
    return {"user": user, "contributions": to_iso(service.get_ledger(user, starting_year))}
