"""
Turn one year's GitHub contributionsCollection document into a partial ledger.

The calendar view undercounts commits made to forked repositories, so
fork commit contributions are added on top of the calendar counts.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional

from streakstats.core.errors import MalformedDocumentError
from streakstats.models.contributions import Ledger


def _collection(document: Dict[str, Any]) -> Dict[str, Any]:
    try:
        collection = document["data"]["user"]["contributionsCollection"]
    except (KeyError, TypeError) as exc:
        raise MalformedDocumentError(f"document has no contributionsCollection: {exc!r}") from exc
    if not isinstance(collection, dict):
        raise MalformedDocumentError("contributionsCollection is not an object")
    return collection


def _parse_day(value: Any) -> date:
    # occurredAt arrives as a full timestamp, calendar days as bare dates
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError as exc:
        raise MalformedDocumentError(f"invalid contribution date: {value!r}") from exc


def _add(ledger: Dict[date, int], day: date, count: Any) -> None:
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise MalformedDocumentError(f"invalid contribution count for {day.isoformat()}: {count!r}")
    ledger[day] = ledger.get(day, 0) + count


def extract(document: Dict[str, Any], year: Optional[int] = None) -> Ledger:
    """
    Build a date -> count ledger from one raw year document.

    Args:
        document: Decoded GraphQL response for a single year
        year: When given, days outside this calendar year are dropped

    Returns:
        New ledger sorted ascending by date

    Raises:
        MalformedDocumentError if required fields are missing or invalid.
    """
    collection = _collection(document)
    ledger: Dict[date, int] = {}

    try:
        weeks = collection["contributionCalendar"]["weeks"]
        repositories = collection["commitContributionsByRepository"]
        for week in weeks:
            for day in week["contributionDays"]:
                _add(ledger, _parse_day(day["date"]), day["contributionCount"])

        for repo_contributions in repositories:
            if not repo_contributions["repository"]["isFork"]:
                continue
            for contribution in repo_contributions["contributions"]:
                count = contribution.get("commitCount")
                _add(ledger, _parse_day(contribution["occurredAt"]), 1 if count is None else count)
    except (KeyError, TypeError, AttributeError) as exc:
        raise MalformedDocumentError(f"malformed contribution document: {exc!r}") from exc

    if year is not None:
        ledger = {day: count for day, count in ledger.items() if day.year == year}

    return dict(sorted(ledger.items()))
