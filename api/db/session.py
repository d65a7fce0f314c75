from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from api.config import settings


def _create_engine(url: str) -> Engine:
    # The price cache is read from FastAPI worker threads and written from
    # the APScheduler prefetch thread.
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False}, echo=settings.DEBUG)
    return create_engine(url, echo=settings.DEBUG)


engine = _create_engine(settings.DATABASE_URL)

SessionLocal: sessionmaker[Session] = sessionmaker(bind=engine, autoflush=False)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Yield a session that commits on success and rolls back on any error."""
    with SessionLocal() as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        session.commit()
