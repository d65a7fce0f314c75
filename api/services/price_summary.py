from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from api.clients.elpriser import ElpriserClient
from api.db.client import DatabaseClient
from lib.constants import PRICE_ZONES
from lib.price_util import average_price, cheapest_window, find_extremes, hourly_averages, sort_by_price
from lib.time_util import next_day
from lib.types import HourlyAverage, PriceSample, WindowResult

log = logging.getLogger(__name__)


class InvalidZoneError(Exception):
    def __init__(self, zone: str) -> None:
        self.zone = zone
        super().__init__(f"Unknown price zone {zone!r}, expected one of {', '.join(PRICE_ZONES)}")


class InvalidWindowError(Exception):
    def __init__(self, window_length: int) -> None:
        self.window_length = window_length
        super().__init__(f"Charging window must not be negative, got {window_length}")


@dataclass
class PriceSummary:
    zone: str
    date: date
    prices: list[PriceSample]
    hourly: list[HourlyAverage]
    average_price: float | None
    cheapest: HourlyAverage | None
    most_expensive: HourlyAverage | None
    window: WindowResult | None


def normalize_zone(zone: str) -> str:
    normalized = zone.upper()
    if normalized not in PRICE_ZONES:
        raise InvalidZoneError(zone)
    return normalized


class PriceSummaryService:

    def __init__(
        self,
        db: DatabaseClient | None = None,
        client: ElpriserClient | None = None,
        cache: bool = True,
    ) -> None:
        if db is None and cache:
            db = DatabaseClient()
        self._db = db
        self._client = client or ElpriserClient()

    def close(self) -> None:
        self._client.close()

    def get_prices(self, zone: str, day: date) -> list[PriceSample]:
        """Return the prices for *zone* on *day*, from the cache when present.

        Empty fetches are not cached; tomorrow's prices are published later
        in the day.
        """
        rows = self._db.get_price_series(zone, day) if self._db is not None else []
        if rows:
            return [
                PriceSample(
                    sek_per_kwh=r.sek_per_kwh,
                    eur_per_kwh=r.eur_per_kwh,
                    exchange_rate=r.exchange_rate,
                    time_start=r.time_start,
                    time_end=r.time_end,
                )
                for r in rows
            ]

        samples = self._client.get_prices(day, zone)
        if not samples:
            log.info("No prices published for %s on %s", zone, day.isoformat())
        elif self._db is not None:
            self._db.store_prices(zone, day, samples)
            log.info("Cached %d price(s) for %s on %s", len(samples), zone, day.isoformat())
        return samples

    def get_two_day_series(self, zone: str, day: date) -> list[PriceSample]:
        return self.get_prices(zone, day) + self.get_prices(zone, next_day(day))

    def get_summary(
        self,
        zone: str,
        day: date,
        charging_hours: int = 0,
        sort: bool = False,
    ) -> PriceSummary:
        zone = normalize_zone(zone)
        if charging_hours < 0:
            raise InvalidWindowError(charging_hours)

        samples = self.get_two_day_series(zone, day)

        # Extremes are picked per hour-of-day, the charging window runs over
        # the raw intervals.
        hourly = hourly_averages(samples)
        extremes = find_extremes(hourly)
        window: Optional[WindowResult] = None
        if charging_hours > 0:
            window = cheapest_window(samples, charging_hours)

        return PriceSummary(
            zone=zone,
            date=day,
            prices=sort_by_price(samples) if sort else list(samples),
            hourly=hourly,
            average_price=average_price(hourly),
            cheapest=extremes.cheapest,
            most_expensive=extremes.most_expensive,
            window=window,
        )
