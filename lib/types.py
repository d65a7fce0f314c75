from dataclasses import dataclass
from datetime import datetime
from typing import Literal, NamedTuple, Optional


PriceZone = Literal["SE1", "SE2", "SE3", "SE4"]


@dataclass(frozen=True)
class PriceSample:
    sek_per_kwh: float
    eur_per_kwh: float
    exchange_rate: float
    time_start: datetime
    time_end: datetime


@dataclass(frozen=True)
class HourlyAverage:
    """Mean price for one hour-of-day bucket.

    Everything except ``sek_per_kwh`` is copied from the first sample that
    landed in the bucket.
    """
    hour: int
    sek_per_kwh: float
    eur_per_kwh: float
    exchange_rate: float
    time_start: datetime
    time_end: datetime


@dataclass(frozen=True)
class WindowResult:
    start_index: int
    window_length: int
    average_price: float
    start_sample: PriceSample
    end_sample: PriceSample


class PriceExtremes(NamedTuple):
    cheapest: Optional[HourlyAverage]
    most_expensive: Optional[HourlyAverage]
