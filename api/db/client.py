from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from api.db.models import SpotPrice
from api.db.session import get_session
from lib.types import PriceSample


class DatabaseClient:
    """Typed interface for reading and writing cached spot prices.

    All methods open and close their own session using the shared
    :func:`~api.db.session.get_session` context manager, so no session
    management is required by the caller.
    """

    def upsert_prices_bulk(self, rows: list[dict]) -> None:
        if not rows:
            return
        with get_session() as db:
            excluded = sqlite_insert(SpotPrice).excluded
            stmt = sqlite_insert(SpotPrice).on_conflict_do_update(
                index_elements=["zone", "price_date", "position"],
                set_={
                    "time_start": excluded.time_start,
                    "time_end": excluded.time_end,
                    "sek_per_kwh": excluded.sek_per_kwh,
                    "eur_per_kwh": excluded.eur_per_kwh,
                    "exchange_rate": excluded.exchange_rate,
                },
            )
            db.execute(stmt, rows)

    def store_prices(self, zone: str, day: date, samples: list[PriceSample]) -> None:
        self.upsert_prices_bulk(
            [
                {
                    "zone": zone,
                    "price_date": day,
                    "position": i,
                    "time_start": s.time_start,
                    "time_end": s.time_end,
                    "sek_per_kwh": s.sek_per_kwh,
                    "eur_per_kwh": s.eur_per_kwh,
                    "exchange_rate": s.exchange_rate,
                }
                for i, s in enumerate(samples)
            ]
        )

    def get_price_series(self, zone: str, day: date) -> list[SpotPrice]:
        with get_session() as db:
            rows = db.execute(
                select(SpotPrice)
                .where(SpotPrice.zone == zone, SpotPrice.price_date == day)
                .order_by(SpotPrice.position)
            ).scalars().all()
            for row in rows:
                db.expunge(row)
        return list(rows)
