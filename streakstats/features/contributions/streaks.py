from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from streakstats.core.errors import EmptyLedgerError, ValidationError
from streakstats.models.contributions import ContributionStats, Ledger, StreakRange

ONE_DAY = timedelta(days=1)


def analyze(ledger: Ledger, grace_days: int = 1) -> ContributionStats:
    """
    Single ascending pass over the ledger producing totals and streaks.

    Only dates absent from the ledger count as missed days: a zero entry is
    a miss when the day before it is also absent. Once more than
    ``grace_days`` misses pile up the current streak restarts, anchored at
    the ledger's last date rather than at the break. A streak's start is
    only ever set when it is created, and the longest streak is replaced
    on a strictly greater length, so the earliest of equal runs wins.

    Raises:
        EmptyLedgerError: the ledger has no entries
        ValidationError: grace_days is negative
    """
    if not ledger:
        raise EmptyLedgerError()
    if grace_days < 0:
        raise ValidationError(f"grace_days must be >= 0, got {grace_days}")

    days = sorted(ledger)
    first, today = days[0], days[-1]

    total = 0
    current_start, current_end, current_length = first, first, 0
    longest = StreakRange(start=first, end=first, length=0)
    missed_days = 0
    previous: Optional[date] = None

    for day in days:
        count = ledger[day]
        total += count
        if count > 0:
            missed_days = 0
            current_length += 1
            current_end = day
            if current_length > longest.length:
                longest = StreakRange(start=current_start, end=current_end, length=current_length)
        elif previous is not None and day - previous > ONE_DAY:
            missed_days += 1
            if missed_days > grace_days:
                current_start, current_end, current_length = today, today, 0
                missed_days = 0
        previous = day

    return ContributionStats(
        total_contributions=total,
        longest_streak=longest,
        current_streak=StreakRange(start=current_start, end=current_end, length=current_length),
    )
