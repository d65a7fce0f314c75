from __future__ import annotations

import logging
import sys
from datetime import date

from api.clients.elpriser import ElpriserClient, ElpriserError
from api.db.client import DatabaseClient
from lib.constants import PRICE_ZONES
from lib.time_util import next_day

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
log = logging.getLogger("etl.prices")


# ---------------------------------------------------------------------------
# Core ETL logic
# ---------------------------------------------------------------------------


def run(
    target_date: date | None = None,
    db: DatabaseClient | None = None,
    client: ElpriserClient | None = None,
) -> int:
    """Fetch and cache prices for *target_date* and the day after, for every zone.

    Returns the number of rows written. A zone that fails is logged and
    skipped; the remaining zones are still fetched.
    """
    target_date = target_date or date.today()
    log.info("Running price ETL for %s", target_date.isoformat())

    db = db or DatabaseClient()
    owns_client = client is None
    client = client or ElpriserClient()

    total_upserted = 0
    try:
        for day in (target_date, next_day(target_date)):
            for zone in PRICE_ZONES:
                try:
                    samples = client.get_prices(day, zone)
                except ElpriserError as exc:
                    log.error(
                        "  Price API error for %s on %s — skipping.  HTTP %s: %s",
                        zone,
                        day.isoformat(),
                        exc.status_code,
                        exc.message,
                    )
                    continue
                except Exception as exc:  # noqa: BLE001
                    log.error(
                        "  Unexpected error for %s on %s — skipping.  %s",
                        zone,
                        day.isoformat(),
                        exc,
                    )
                    continue

                if not samples:
                    log.warning("  No prices published for %s on %s yet.", zone, day.isoformat())
                    continue

                db.store_prices(zone, day, samples)
                total_upserted += len(samples)
                log.info("  Upserted %d rows for %s on %s.", len(samples), zone, day.isoformat())
    finally:
        if owns_client:
            client.close()

    log.info(
        "ETL complete — %d total row(s) upserted for %s.",
        total_upserted,
        target_date.isoformat(),
    )
    return total_upserted


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Fetch and cache spot prices for all zones for a date and the following day."
    )
    parser.add_argument(
        "--date",
        metavar="YYYY-MM-DD",
        help="Target date (default: today)",
        default=None,
    )
    args = parser.parse_args()

    target: date | None = None
    if args.date:
        try:
            target = date.fromisoformat(args.date)
        except ValueError:
            print(f"Invalid date: {args.date!r}. Expected YYYY-MM-DD.", file=sys.stderr)
            sys.exit(1)

    try:
        run(target_date=target)
    except Exception as exc:
        log.exception("Price ETL failed: %s", exc)
        sys.exit(1)
