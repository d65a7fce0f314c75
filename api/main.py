from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from apscheduler.executors.pool import ThreadPoolExecutor
from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.config import settings
from api.db.init_db import init_db
from api.router import router

log = logging.getLogger(__name__)


def _scheduled_job() -> None:
    """Prefetch today's and tomorrow's prices for every zone."""
    from etl.prices import run as run_prices

    try:
        run_prices()
    except Exception as exc:
        log.error("Price prefetch failed: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    tables = await asyncio.to_thread(init_db)
    log.info("Database ready: %s", ", ".join(tables))

    scheduler = BackgroundScheduler(executors={"default": ThreadPoolExecutor(1)})
    scheduler.add_job(
        _scheduled_job,
        "interval",
        minutes=settings.PREFETCH_INTERVAL_MINUTES,
        id="price_prefetch",
    )
    scheduler.start()
    log.info(
        "APScheduler started — price prefetch runs every %d minutes.",
        settings.PREFETCH_INTERVAL_MINUTES,
    )

    yield

    scheduler.shutdown(wait=False)
    log.info("APScheduler stopped.")


def create_app() -> FastAPI:
    app = FastAPI(title="Elpris", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:3000"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix="/api")

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app
