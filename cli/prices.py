"""Print spot prices for a zone, with an optional cheapest charging window.

Example:
    python -m cli.prices --zone SE3 --date 2025-10-19 --charging 4h
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from api.clients.elpriser import ElpriserError
from api.services.price_summary import InvalidZoneError, PriceSummary, PriceSummaryService
from lib.constants import CHARGING_WINDOWS, ORE_PER_SEK, PRICE_ZONES
from lib.time_util import format_hour_range

log = logging.getLogger("cli.prices")


def _ore(sek_per_kwh: float) -> str:
    return f"{sek_per_kwh * ORE_PER_SEK:.2f}"


def _charging_length(value: str) -> int:
    """Accept ``4`` as well as ``4h``; ``0`` skips the window search."""
    try:
        length = int(value.lower().removesuffix("h"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid charging window: {value!r}") from None
    if length < 0:
        raise argparse.ArgumentTypeError(f"charging window must not be negative: {value!r}")
    return length


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Show spot electricity prices for today and tomorrow.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--zone",
        required=True,
        metavar="|".join(PRICE_ZONES),
        help="Pricing zone",
    )
    parser.add_argument(
        "--date",
        metavar="YYYY-MM-DD",
        help="Target date (default: today)",
        default=None,
    )
    parser.add_argument(
        "--sorted",
        action="store_true",
        default=False,
        help="List prices from most to least expensive",
    )
    parser.add_argument(
        "--charging",
        type=_charging_length,
        default=0,
        metavar="|".join(f"{n}h" for n in CHARGING_WINDOWS),
        help="Find the cheapest window of this many consecutive price intervals (0 to skip)",
    )
    parser.add_argument(
        "--cache",
        action="store_true",
        default=False,
        help="Read and store prices in the local database",
    )
    parser.add_argument("-v", "--verbose", action="store_true", default=False)
    return parser.parse_args(argv)


def render(summary: PriceSummary) -> list[str]:
    lines = [
        f"{format_hour_range(p.time_start, p.time_end)} {_ore(p.sek_per_kwh)} öre"
        for p in summary.prices
    ]

    if summary.average_price is not None:
        lines.append(f"Medelpris: {_ore(summary.average_price)} öre")
    if summary.cheapest is not None:
        c = summary.cheapest
        lines.append(f"Lägsta pris: {_ore(c.sek_per_kwh)} öre ({format_hour_range(c.time_start, c.time_end)})")
    if summary.most_expensive is not None:
        m = summary.most_expensive
        lines.append(f"Högsta pris: {_ore(m.sek_per_kwh)} öre ({format_hour_range(m.time_start, m.time_end)})")

    if summary.window is not None:
        w = summary.window
        lines.append(f"Påbörja laddning kl {w.start_sample.time_start.strftime('%H:%M')}")
        lines.append(f"Medelpris för fönster: {_ore(w.average_price)} öre")
        lines.append(f"Fönster: {format_hour_range(w.start_sample.time_start, w.end_sample.time_end)}")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    target = date.today()
    if args.date:
        try:
            target = date.fromisoformat(args.date)
        except ValueError:
            print(f"Ogiltigt datum: {args.date!r}. Expected YYYY-MM-DD.", file=sys.stderr)
            return 1

    if args.cache:
        from api.db.init_db import init_db

        init_db()

    service = PriceSummaryService(cache=args.cache)
    try:
        summary = service.get_summary(args.zone, target, charging_hours=args.charging, sort=args.sorted)
    except InvalidZoneError:
        print(f"Ogiltig zon: {args.zone}", file=sys.stderr)
        return 1
    except ElpriserError as exc:
        log.error("Could not fetch prices: %s", exc)
        return 1
    finally:
        service.close()

    if not summary.prices:
        print("Inga priser tillgängliga")
        return 0

    for line in render(summary):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
