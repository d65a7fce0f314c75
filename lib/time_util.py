from datetime import date, datetime, timedelta
from lib.constants import HOURS_IN_DAY


def display_hours(time_start: datetime, time_end: datetime) -> tuple[int, int]:
    """Return the (start, end) hour pair used when reporting an interval.

    Sub-hourly intervals start and end inside the same hour; those are shown
    as the full hour they belong to.
    """
    start_hour = time_start.hour
    end_hour = time_end.hour
    if end_hour == start_hour:
        end_hour = (start_hour + 1) % HOURS_IN_DAY
    return start_hour, end_hour

def format_hour_range(time_start: datetime, time_end: datetime) -> str:
    start_hour, end_hour = display_hours(time_start, time_end)
    return f"{start_hour:02d}-{end_hour:02d}"

def next_day(day: date) -> date:
    return day + timedelta(days=1)

def to_local_naive(value: str) -> datetime:
    """Parse an ISO-8601 timestamp and drop its offset, keeping wall-clock time."""
    return datetime.fromisoformat(value).replace(tzinfo=None)
