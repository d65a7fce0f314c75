from __future__ import annotations

from typing import Optional, Sequence

from lib.types import HourlyAverage, PriceExtremes, PriceSample, WindowResult


def hourly_averages(samples: Sequence[PriceSample]) -> list[HourlyAverage]:
    """Average the samples into one record per hour-of-day, in ascending hour order.

    The bucket key is the hour of ``time_start`` only. Samples from different
    days that share an hour end up in the same bucket.
    """
    buckets: dict[int, list[PriceSample]] = {}
    for sample in samples:
        buckets.setdefault(sample.time_start.hour, []).append(sample)

    averages: list[HourlyAverage] = []
    for hour in sorted(buckets):
        bucket = buckets[hour]
        first = bucket[0]
        averages.append(
            HourlyAverage(
                hour=hour,
                sek_per_kwh=sum(s.sek_per_kwh for s in bucket) / len(bucket),
                eur_per_kwh=first.eur_per_kwh,
                exchange_rate=first.exchange_rate,
                time_start=first.time_start,
                time_end=first.time_end,
            )
        )
    return averages


def average_price(hourly: Sequence[HourlyAverage]) -> Optional[float]:
    if not hourly:
        return None
    return sum(h.sek_per_kwh for h in hourly) / len(hourly)


# ---------------------------------------------------------------------------
# Extremes: ties go to the earliest start in both directions
# ---------------------------------------------------------------------------


def cheapest_hour(hourly: Sequence[HourlyAverage]) -> Optional[HourlyAverage]:
    if not hourly:
        return None
    return min(hourly, key=lambda h: (h.sek_per_kwh, h.time_start))


def most_expensive_hour(hourly: Sequence[HourlyAverage]) -> Optional[HourlyAverage]:
    if not hourly:
        return None
    best = hourly[0]
    for h in hourly[1:]:
        if h.sek_per_kwh > best.sek_per_kwh or (
            h.sek_per_kwh == best.sek_per_kwh and h.time_start < best.time_start
        ):
            best = h
    return best


def find_extremes(hourly: Sequence[HourlyAverage]) -> PriceExtremes:
    return PriceExtremes(
        cheapest=cheapest_hour(hourly),
        most_expensive=most_expensive_hour(hourly),
    )


# ---------------------------------------------------------------------------
# Charging window
# ---------------------------------------------------------------------------


def cheapest_window(samples: Sequence[PriceSample], window_length: int) -> Optional[WindowResult]:
    """Find the run of *window_length* consecutive samples with the lowest total price.

    Works on the raw samples, so a window of 4 on a 15-minute series covers
    one hour. Returns ``None`` when *window_length* is not positive or is
    longer than the series. On equal sums the earliest window wins.
    """
    if window_length <= 0 or window_length > len(samples):
        return None

    current_sum = sum(s.sek_per_kwh for s in samples[:window_length])
    best_sum = current_sum
    best_start = 0

    for i in range(1, len(samples) - window_length + 1):
        current_sum += samples[i + window_length - 1].sek_per_kwh - samples[i - 1].sek_per_kwh
        if current_sum < best_sum:
            best_sum = current_sum
            best_start = i

    return WindowResult(
        start_index=best_start,
        window_length=window_length,
        average_price=best_sum / window_length,
        start_sample=samples[best_start],
        end_sample=samples[best_start + window_length - 1],
    )


def sort_by_price(samples: Sequence[PriceSample]) -> list[PriceSample]:
    """Return a copy ordered from most to least expensive, earliest first on ties."""
    return sorted(samples, key=lambda s: (-s.sek_per_kwh, s.time_start))
