"""Tests for the stats HTTP routes and their error contract."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from streakstats.api.stats import get_stats_service
from streakstats.core.config import Settings
from streakstats.features.contributions.service import ContributionStatsService
from streakstats.main import app

THIS_YEAR = date.today().year


@pytest.fixture
def client_with(fake_source_factory):
    def build(documents):
        source = fake_source_factory(documents)
        service = ContributionStatsService(source, settings_obj=Settings(GRACE_DAYS=1))
        app.dependency_overrides[get_stats_service] = lambda: service
        return TestClient(app), source

    yield build
    app.dependency_overrides.clear()


def test_stats_payload_is_camel_case(client_with, make_document):
    client, source = client_with({
        THIS_YEAR: make_document({f"{THIS_YEAR}-01-01": 2, f"{THIS_YEAR}-01-02": 1}),
    })

    resp = client.get("/v1/stats", params={"user": "octocat"})

    assert resp.status_code == 200
    assert resp.json() == {
        "totalContributions": 3,
        "longestStreak": {"start": f"{THIS_YEAR}-01-01", "end": f"{THIS_YEAR}-01-02", "length": 2},
        "currentStreak": {"start": f"{THIS_YEAR}-01-01", "end": f"{THIS_YEAR}-01-02", "length": 2},
    }
    assert source.calls == [("octocat", [THIS_YEAR])]


def test_stats_honours_starting_year_and_grace(client_with, make_document):
    last = THIS_YEAR - 1
    client, source = client_with({
        last: make_document({f"{last}-12-28": 1, f"{last}-12-29": 0, f"{last}-12-31": 0}),
        THIS_YEAR: make_document({f"{THIS_YEAR}-01-01": 1}),
    })

    strict = client.get("/v1/stats", params={"user": "octocat", "starting_year": last, "grace_days": 0}).json()
    lenient = client.get("/v1/stats", params={"user": "octocat", "starting_year": last, "grace_days": 1}).json()

    assert strict["currentStreak"] == {"start": f"{THIS_YEAR}-01-01", "end": f"{THIS_YEAR}-01-01", "length": 1}
    assert lenient["currentStreak"]["length"] == 2
    assert source.calls[0] == ("octocat", [last, THIS_YEAR])


def test_no_contributions_has_distinct_error(client_with):
    client, _ = client_with({})

    resp = client.get("/v1/stats", params={"user": "ghost"})

    assert resp.status_code == 404
    body = resp.json()
    assert body["error"]["code"] == "no_contributions"
    assert body["error"]["error_number"] == 204
    assert body["error"]["request_id"] == resp.headers.get("x-request-id")


def test_future_starting_year_is_validation_error(client_with):
    client, _ = client_with({})

    resp = client.get("/v1/stats", params={"user": "octocat", "starting_year": THIS_YEAR + 1})

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "validation_error"


@pytest.mark.parametrize("params", [{}, {"user": ""}, {"user": "octocat", "grace_days": -1}])
def test_bad_query_rejected(client_with, params):
    client, source = client_with({})

    resp = client.get("/v1/stats", params=params)

    assert resp.status_code == 422
    assert source.calls == []


def test_calendar_route(client_with, make_document):
    client, _ = client_with({
        THIS_YEAR: make_document({f"{THIS_YEAR}-01-02": 0, f"{THIS_YEAR}-01-01": 4}),
    })

    resp = client.get("/v1/stats/calendar", params={"user": "octocat"})

    assert resp.status_code == 200
    assert resp.json() == {
        "user": "octocat",
        "contributions": {f"{THIS_YEAR}-01-01": 4, f"{THIS_YEAR}-01-02": 0},
    }


def test_malformed_document_is_internal_error(client_with):
    client, _ = client_with({THIS_YEAR: {"data": {"user": {}}}})

    resp = client.get("/v1/stats", params={"user": "octocat"})

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "malformed_document"


def test_healthz():
    resp = TestClient(app).get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
