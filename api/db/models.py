from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Date, DateTime, Float, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class SpotPrice(Base):
    """One published price interval for a zone.

    ``position`` is the index of the interval within ``price_date``. Wall
    clock timestamps repeat on the autumn DST change, so they cannot be part
    of the key.
    """

    __tablename__ = "spot_prices"

    zone: Mapped[str] = mapped_column(String(8), primary_key=True)
    price_date: Mapped[date] = mapped_column(Date, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, primary_key=True)

    time_start: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    time_end: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    sek_per_kwh: Mapped[float] = mapped_column(Float, nullable=False)
    eur_per_kwh: Mapped[float] = mapped_column(Float, nullable=False)
    exchange_rate: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<SpotPrice zone={self.zone} date={self.price_date} pos={self.position}"
            f" start={self.time_start} sek={self.sek_per_kwh}>"
        )
