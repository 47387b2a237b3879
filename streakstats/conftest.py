# streakstats/conftest.py
import sys
from datetime import date, timedelta
from typing import Dict, Iterable, List

import pytest

from streakstats.core.logging import configure_logging

# Configure before any test captures stdout; results printed by the CLI go there.
configure_logging("development", stream=sys.stderr)


def _document(
    days: Dict[str, int],
    forks: Iterable[dict] = (),
    non_forks: Iterable[dict] = (),
) -> dict:
    """Shape a GraphQL contributionsCollection response the way GitHub returns it."""
    ordered = sorted(days.items())
    weeks = [
        {"contributionDays": [{"date": d, "contributionCount": c} for d, c in ordered[i:i + 7]]}
        for i in range(0, len(ordered), 7)
    ]
    repositories = [
        {"repository": {"isFork": True, "name": f"fork-{i}"}, "contributions": list(contribs)}
        for i, contribs in enumerate(forks)
    ] + [
        {"repository": {"isFork": False, "name": f"repo-{i}"}, "contributions": list(contribs)}
        for i, contribs in enumerate(non_forks)
    ]
    collection = {
        "contributionCalendar": {"weeks": weeks},
        "commitContributionsByRepository": repositories,
    }
    return {"data": {"user": {"contributionsCollection": collection}}}


@pytest.fixture
def make_document():
    return _document


@pytest.fixture
def ledger_from():
    """Build a ledger from ISO-keyed counts."""

    def build(counts: Dict[str, int]):
        return {date.fromisoformat(k): v for k, v in sorted(counts.items())}

    return build


@pytest.fixture
def dense_days():
    """Every day of ``year`` with the given count, as ISO keys."""

    def build(year: int, count: int = 0) -> Dict[str, int]:
        day = date(year, 1, 1)
        out = {}
        while day.year == year:
            out[day.isoformat()] = count
            day += timedelta(days=1)
        return out

    return build


class FakeSource:
    """Stand-in for the GitHub source: serves canned documents, records calls."""

    def __init__(self, documents: Dict[int, dict]):
        self.documents = documents
        self.calls: List[tuple] = []
        self.closed = False

    def fetch(self, user, years):
        years = sorted(set(years))
        self.calls.append((user, years))
        return {year: self.documents[year] for year in years if year in self.documents}

    def close(self):
        self.closed = True


@pytest.fixture
def fake_source_factory():
    return FakeSource
