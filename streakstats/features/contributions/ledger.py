"""
Pure merge helpers for contribution ledgers.

Years are fetched independently and complete in any order, so merging is
a commutative, associative sum keyed by date. Inputs are never mutated.
"""

from __future__ import annotations

from typing import Dict, Iterable

from streakstats.models.contributions import Ledger


def merge(base: Ledger, addition: Ledger) -> Ledger:
    """Sum ``addition`` into a copy of ``base`` and return it sorted by date."""
    merged = dict(base)
    for day, count in addition.items():
        merged[day] = merged.get(day, 0) + count
    return dict(sorted(merged.items()))


def merge_all(partials: Iterable[Ledger]) -> Ledger:
    ledger: Ledger = {}
    for partial in partials:
        ledger = merge(ledger, partial)
    return ledger


def to_iso(ledger: Ledger) -> Dict[str, int]:
    """JSON-friendly view: ISO date string -> count, ascending."""
    return {day.isoformat(): count for day, count in ledger.items()}
