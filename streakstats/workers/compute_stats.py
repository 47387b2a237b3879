"""
Compute contribution stats for one user from the command line.

Prints the stats (or the raw calendar with --calendar) as JSON. Exits with
status 2 when no contribution days could be fetched and 1 on invalid
arguments.
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

from streakstats.core.config import settings, validate_config
from streakstats.core.errors import EmptyLedgerError, ValidationError
from streakstats.core.logging import configure_logging
from streakstats.features.contributions.ledger import to_iso
from streakstats.features.contributions.service import ContributionStatsService
from streakstats.features.contributions.source import GitHubContributionSource


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute GitHub contribution streaks for a user.")
    parser.add_argument("user", help="GitHub login.")
    parser.add_argument("--starting-year", dest="starting_year", type=int, default=settings.STARTING_YEAR,
                        help="First year to fetch (defaults to the current year).")
    parser.add_argument("--grace-days", dest="grace_days", type=int, default=settings.GRACE_DAYS,
                        help="Wholly missing days tolerated before a streak breaks.")
    parser.add_argument("--calendar", action="store_true", help="Print the merged calendar instead of stats.")
    return parser


def run(argv: Optional[List[str]] = None, service: Optional[ContributionStatsService] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.grace_days < 0:
        print("--grace-days must be >= 0", file=sys.stderr)
        return 1

    owned = service is None
    service = service or ContributionStatsService(GitHubContributionSource())
    try:
        if args.calendar:
            payload = to_iso(service.get_ledger(args.user, args.starting_year))
        else:
            stats = service.get_stats(args.user, args.starting_year, args.grace_days)
            payload = stats.model_dump(mode="json", by_alias=True)
    except EmptyLedgerError as exc:
        print(json.dumps({"error": exc.message, "code": exc.error_number}), file=sys.stderr)
        return 2
    except ValidationError as exc:
        print(exc.message, file=sys.stderr)
        return 1
    finally:
        if owned:
            service.close()

    print(json.dumps(payload, indent=2))
    return 0


def main() -> int:
    # stdout carries the JSON result
    configure_logging(os.getenv("ENV", settings.ENV), stream=sys.stderr)
    validate_config()
    return run()


if __name__ == "__main__":
    raise SystemExit(main())
