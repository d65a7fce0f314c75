"""Client for the elprisetjustnu.se spot price API.

Docs: https://www.elprisetjustnu.se/elpris-api
"""

from datetime import date
from typing import Optional

import httpx

from api.config import settings
from lib.time_util import to_local_naive
from lib.types import PriceSample


class ElpriserError(Exception):
    """Raised when the price API returns an error response."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Elpriser API error {status_code}: {message}")


class ElpriserClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url or settings.ELPRISER_BASE_URL,
            timeout=timeout if timeout is not None else settings.HTTP_TIMEOUT,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def __enter__(self) -> "ElpriserClient":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def get_prices(self, day: date, zone: str) -> list[PriceSample]:
        """Fetch the published prices for *zone* on *day*.

        Returns an empty list when nothing is published for the date yet
        (tomorrow's prices appear in the early afternoon).

        Raises:
            ElpriserError: on any other non-2xx HTTP status, a transport
                failure (``status_code`` 0) or a body that is not a price list.
        """
        path = f"/api/v1/prices/{day.year}/{day.month:02d}-{day.day:02d}_{zone}.json"
        try:
            response = self._client.get(path)
        except httpx.HTTPError as exc:
            raise ElpriserError(0, str(exc)) from exc

        if response.status_code == 404:
            return []
        if not response.is_success:
            raise ElpriserError(response.status_code, response.text)

        try:
            return [_parse_entry(entry) for entry in response.json()]
        except (KeyError, TypeError, ValueError) as exc:
            raise ElpriserError(response.status_code, f"malformed price data: {exc}") from exc


def _parse_entry(entry: dict) -> PriceSample:
    return PriceSample(
        sek_per_kwh=float(entry["SEK_per_kWh"]),
        eur_per_kwh=float(entry["EUR_per_kWh"]),
        exchange_rate=float(entry["EXR"]),
        time_start=to_local_naive(entry["time_start"]),
        time_end=to_local_naive(entry["time_end"]),
    )
