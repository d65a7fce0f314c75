from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from api.clients.elpriser import ElpriserError
from api.services.price_summary import (
    InvalidWindowError,
    InvalidZoneError,
    PriceSummaryService,
)
from lib.constants import PRICE_ZONES
from lib.time_util import display_hours
from lib.types import HourlyAverage, PriceSample, WindowResult

router = APIRouter()

_price_service = PriceSummaryService()


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class PriceResponse(BaseModel):
    time_start: datetime
    time_end: datetime
    start_hour: int
    end_hour: int
    sek_per_kwh: float
    eur_per_kwh: float
    exchange_rate: float


class HourlyAverageResponse(PriceResponse):
    hour: int


class WindowResponse(BaseModel):
    start_index: int
    window_length: int
    average_price: float
    start_hour: int
    end_hour: int
    time_start: datetime
    time_end: datetime


class PriceSummaryResponse(BaseModel):
    zone: str
    date: date
    prices: list[PriceResponse]
    hourly: list[HourlyAverageResponse]
    average_price: Optional[float]
    cheapest: Optional[HourlyAverageResponse]
    most_expensive: Optional[HourlyAverageResponse]
    window: Optional[WindowResponse]


def _price_response(p: PriceSample) -> PriceResponse:
    start_hour, end_hour = display_hours(p.time_start, p.time_end)
    return PriceResponse(
        time_start=p.time_start,
        time_end=p.time_end,
        start_hour=start_hour,
        end_hour=end_hour,
        sek_per_kwh=p.sek_per_kwh,
        eur_per_kwh=p.eur_per_kwh,
        exchange_rate=p.exchange_rate,
    )


def _hourly_response(h: HourlyAverage | None) -> HourlyAverageResponse | None:
    if h is None:
        return None
    start_hour, end_hour = display_hours(h.time_start, h.time_end)
    return HourlyAverageResponse(
        hour=h.hour,
        time_start=h.time_start,
        time_end=h.time_end,
        start_hour=start_hour,
        end_hour=end_hour,
        sek_per_kwh=h.sek_per_kwh,
        eur_per_kwh=h.eur_per_kwh,
        exchange_rate=h.exchange_rate,
    )


def _window_response(w: WindowResult | None) -> WindowResponse | None:
    if w is None:
        return None
    start_hour, end_hour = display_hours(w.start_sample.time_start, w.end_sample.time_end)
    return WindowResponse(
        start_index=w.start_index,
        window_length=w.window_length,
        average_price=w.average_price,
        start_hour=start_hour,
        end_hour=end_hour,
        time_start=w.start_sample.time_start,
        time_end=w.end_sample.time_end,
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/zones", response_model=list[str])
def list_zones():
    """Return the supported pricing zones."""
    return list(PRICE_ZONES)


@router.get("/zones/{zone}/prices/{target_date}", response_model=PriceSummaryResponse)
def price_summary(
    zone: str,
    target_date: date,
    charging: int = Query(0, description="Charging window length in price intervals, 0 to skip"),
    sort: bool = Query(False, alias="sorted", description="List prices from most to least expensive"),
):
    """Return prices for *target_date* and the following day with hourly
    averages, the cheapest and most expensive hour and, when ``charging`` is
    set, the cheapest run of that many consecutive intervals.
    """
    try:
        summary = _price_service.get_summary(zone, target_date, charging_hours=charging, sort=sort)
    except (InvalidZoneError, InvalidWindowError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ElpriserError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return PriceSummaryResponse(
        zone=summary.zone,
        date=summary.date,
        prices=[_price_response(p) for p in summary.prices],
        hourly=[_hourly_response(h) for h in summary.hourly],
        average_price=summary.average_price,
        cheapest=_hourly_response(summary.cheapest),
        most_expensive=_hourly_response(summary.most_expensive),
        window=_window_response(summary.window),
    )
