#!/usr/bin/env python
"""Create the spot price cache tables in ``DATABASE_URL``."""

from __future__ import annotations

import argparse

from api.db.models import Base
from api.db.session import engine


def init_db(drop: bool = False) -> list[str]:
    if drop:
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    return sorted(Base.metadata.tables.keys())


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Initialise the price cache database.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--drop",
        action="store_true",
        default=False,
        help="Drop all existing tables before creating them (DESTRUCTIVE).",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = _parse_args()
    print(f"Creating tables in: {engine.url}")
    tables = init_db(drop=args.drop)
    print(f"{len(tables)} table(s) ready: {', '.join(tables)}")
