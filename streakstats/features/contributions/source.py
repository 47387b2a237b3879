"""
GitHub GraphQL contribution source.

Best-effort: every year is requested independently on a thread pool and a
year whose response fails or carries errors is logged and left out.
"""
from __future__ import annotations

import contextvars
import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Optional

import httpx

from streakstats.core.config import Settings, settings

logger = logging.getLogger("streakstats")

CONTRIBUTIONS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
    user(login: $login) {
        contributionsCollection(from: $from, to: $to) {
            contributionCalendar {
                weeks {
                    contributionDays {
                        contributionCount
                        date
                    }
                }
            }
            commitContributionsByRepository {
                repository {
                    isFork
                    name
                }
                contributions {
                    occurredAt
                    commitCount
                }
            }
        }
    }
}
"""


def build_query(user: str, year: int) -> Dict:
    """GraphQL request body covering one calendar year for ``user``."""
    return {
        "query": CONTRIBUTIONS_QUERY,
        "variables": {
            "login": user,
            "from": f"{year}-01-01T00:00:00Z",
            "to": f"{year}-12-31T23:59:59Z",
        },
    }


class TokenPool:
    """Round-robin API tokens shared by concurrent fetches."""

    def __init__(self, tokens: Iterable[str]):
        self._tokens = [t for t in tokens if t]
        self._cycle = itertools.cycle(self._tokens) if self._tokens else None
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._tokens)

    def next(self) -> Optional[str]:
        if self._cycle is None:
            return None
        with self._lock:
            return next(self._cycle)


class GitHubContributionSource:
    def __init__(
        self,
        *,
        tokens: Optional[List[str]] = None,
        client: Optional[httpx.Client] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_workers: Optional[int] = None,
        settings_obj: Optional[Settings] = None,
    ):
        cfg = settings_obj or settings
        self._tokens = TokenPool(tokens if tokens is not None else cfg.github_tokens)
        self._url = url or cfg.GITHUB_GRAPHQL_URL
        self._max_workers = max_workers or cfg.FETCH_MAX_WORKERS
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout or cfg.GITHUB_REQUEST_TIMEOUT_SECONDS)

    def __enter__(self) -> "GitHubContributionSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self._tokens.next()
        if token:
            headers["Authorization"] = f"bearer {token}"
        return headers

    def fetch_year(self, user: str, year: int) -> Optional[Dict]:
        """Return the decoded document for one year, or None when unavailable."""
        try:
            response = self._client.post(self._url, headers=self._headers(), json=build_query(user, year))
            response.raise_for_status()
            decoded = response.json()
        except Exception as exc:
            # transport, status and decode failures alike drop only this year
            logger.warning(
                f"Failed to decode response for {user}'s {year} contributions.",
                exc_info=True,
                extra={"user": user, "year": year, "error_code": type(exc).__name__},
            )
            return None

        if not isinstance(decoded, dict) or not decoded.get("data") or decoded.get("errors"):
            logger.warning(
                f"Failed to decode response for {user}'s {year} contributions.",
                extra={"user": user, "year": year, "error_code": "graphql_error"},
            )
            return None
        return decoded

    def fetch(self, user: str, years: Iterable[int]) -> Dict[int, Dict]:
        """Fetch every year concurrently; years that fail are omitted."""
        wanted = sorted(set(years))
        if not wanted:
            return {}
        workers = min(self._max_workers, len(wanted))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="contrib-fetch") as pool:
            # a fresh context copy per task keeps request_id on worker log lines
            futures = {
                year: pool.submit(contextvars.copy_context().run, self.fetch_year, user, year)
                for year in wanted
            }
            results = {year: future.result() for year, future in futures.items()}
        return {year: doc for year, doc in results.items() if doc is not None}
