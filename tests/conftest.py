"""Shared fixtures.

``DATABASE_URL`` is pointed at a throwaway SQLite file before any ``api``
module creates its engine.
"""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import pytest

_DB_DIR = Path(tempfile.mkdtemp(prefix="elpris-test-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"


@pytest.fixture
def today() -> datetime:
    return datetime(2025, 10, 19)


@pytest.fixture
def tomorrow(today: datetime) -> datetime:
    return today + timedelta(days=1)


@pytest.fixture
def api_payload() -> list[dict]:
    """Four quarter-hour entries as returned by the price API."""
    return [
        {
            "SEK_per_kWh": 0.41,
            "EUR_per_kWh": 0.0372,
            "EXR": 11.02,
            "time_start": "2025-10-19T00:00:00+02:00",
            "time_end": "2025-10-19T00:15:00+02:00",
        },
        {
            "SEK_per_kWh": 0.39,
            "EUR_per_kWh": 0.0354,
            "EXR": 11.02,
            "time_start": "2025-10-19T00:15:00+02:00",
            "time_end": "2025-10-19T00:30:00+02:00",
        },
        {
            "SEK_per_kWh": 0.35,
            "EUR_per_kWh": 0.0318,
            "EXR": 11.02,
            "time_start": "2025-10-19T00:30:00+02:00",
            "time_end": "2025-10-19T00:45:00+02:00",
        },
        {
            "SEK_per_kWh": 0.33,
            "EUR_per_kWh": 0.0299,
            "EXR": 11.02,
            "time_start": "2025-10-19T00:45:00+02:00",
            "time_end": "2025-10-19T01:00:00+02:00",
        },
    ]
