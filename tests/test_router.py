"""Tests for the /api routes in api.router."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

import api.router as router_module
from api.clients.elpriser import ElpriserClient, ElpriserError
from api.services.price_summary import PriceSummaryService
from lib.types import PriceSample


TODAY = date(2025, 10, 19)


def quarter_hours(day: date, prices: list[float]) -> list[PriceSample]:
    start = datetime.combine(day, datetime.min.time())
    return [
        PriceSample(
            sek_per_kwh=p,
            eur_per_kwh=p / 11.0,
            exchange_rate=11.0,
            time_start=start + timedelta(minutes=15 * i),
            time_end=start + timedelta(minutes=15 * (i + 1)),
        )
        for i, p in enumerate(prices)
    ]


class StubClient:
    def __init__(self, prices: dict[date, list[PriceSample]], error: Exception | None = None) -> None:
        self.prices = prices
        self.error = error

    def get_prices(self, day: date, zone: str) -> list[PriceSample]:
        if self.error is not None:
            raise self.error
        return self.prices.get(day, [])

    def close(self) -> None:
        pass


@pytest.fixture
def client_factory(monkeypatch):
    def factory(prices: dict[date, list[PriceSample]] | None = None, error: Exception | None = None) -> TestClient:
        service = PriceSummaryService(client=StubClient(prices or {}, error), cache=False)
        monkeypatch.setattr(router_module, "_price_service", service)
        app = FastAPI()
        app.include_router(router_module.router, prefix="/api")
        return TestClient(app)

    return factory


# ---------------------------------------------------------------------------
# /zones
# ---------------------------------------------------------------------------


def test_list_zones(client_factory):
    response = client_factory().get("/api/zones")
    assert response.status_code == 200
    assert response.json() == ["SE1", "SE2", "SE3", "SE4"]


# ---------------------------------------------------------------------------
# /zones/{zone}/prices/{date}
# ---------------------------------------------------------------------------


def test_price_summary(client_factory):
    # Hour 0: 1.0 avg, hour 1: 0.25 avg
    prices = {TODAY: quarter_hours(TODAY, [1.0, 1.0, 1.0, 1.0, 0.4, 0.1, 0.2, 0.3])}
    response = client_factory(prices).get("/api/zones/se3/prices/2025-10-19", params={"charging": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["zone"] == "SE3"
    assert body["date"] == "2025-10-19"
    assert len(body["prices"]) == 8
    assert [h["hour"] for h in body["hourly"]] == [0, 1]
    assert body["average_price"] == pytest.approx(0.625)

    assert body["cheapest"]["hour"] == 1
    assert body["cheapest"]["sek_per_kwh"] == pytest.approx(0.25)
    assert (body["cheapest"]["start_hour"], body["cheapest"]["end_hour"]) == (1, 2)
    assert body["most_expensive"]["hour"] == 0

    window = body["window"]
    assert window["start_index"] == 5
    assert window["window_length"] == 2
    assert window["average_price"] == pytest.approx(0.15)
    assert (window["start_hour"], window["end_hour"]) == (1, 2)


def test_price_listing_reports_normalized_hours(client_factory):
    prices = {TODAY: quarter_hours(TODAY, [0.5, 0.6])}
    body = client_factory(prices).get("/api/zones/SE1/prices/2025-10-19").json()
    assert [(p["start_hour"], p["end_hour"]) for p in body["prices"]] == [(0, 1), (0, 1)]
    assert body["window"] is None


def test_price_summary_sorted(client_factory):
    prices = {TODAY: quarter_hours(TODAY, [0.5, 0.9, 0.1])}
    body = client_factory(prices).get("/api/zones/SE2/prices/2025-10-19", params={"sorted": "true"}).json()
    assert [p["sek_per_kwh"] for p in body["prices"]] == pytest.approx([0.9, 0.5, 0.1])


def test_price_summary_no_prices(client_factory):
    body = client_factory().get("/api/zones/SE4/prices/2025-10-19", params={"charging": 4}).json()
    assert body["prices"] == []
    assert body["hourly"] == []
    assert body["average_price"] is None
    assert body["cheapest"] is None
    assert body["most_expensive"] is None
    assert body["window"] is None


def test_price_summary_invalid_zone(client_factory):
    response = client_factory().get("/api/zones/SE9/prices/2025-10-19")
    assert response.status_code == 400
    assert "SE9" in response.json()["detail"]


def test_price_summary_negative_window(client_factory):
    response = client_factory().get("/api/zones/SE3/prices/2025-10-19", params={"charging": -1})
    assert response.status_code == 400


def test_price_summary_invalid_date(client_factory):
    response = client_factory().get("/api/zones/SE3/prices/not-a-date")
    assert response.status_code == 422


def test_price_summary_upstream_error(client_factory):
    response = client_factory(error=ElpriserError(500, "down")).get("/api/zones/SE3/prices/2025-10-19")
    assert response.status_code == 502
    assert "down" in response.json()["detail"]


def test_price_summary_connection_failure(monkeypatch):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    elpriser = ElpriserClient(base_url="https://prices.test", transport=httpx.MockTransport(refuse))
    monkeypatch.setattr(router_module, "_price_service", PriceSummaryService(client=elpriser, cache=False))
    app = FastAPI()
    app.include_router(router_module.router, prefix="/api")

    response = TestClient(app).get("/api/zones/SE3/prices/2025-10-19")
    assert response.status_code == 502
    assert "connection refused" in response.json()["detail"]


# ---------------------------------------------------------------------------
# create_app
# ---------------------------------------------------------------------------


def test_create_app_mounts_router_and_health():
    from api.main import create_app

    # Without the context manager the lifespan (scheduler, table creation) does not run
    client = TestClient(create_app())
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/api/zones").status_code == 200
