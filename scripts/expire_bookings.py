"""Expire pending bookings older than an operator-chosen age."""

import argparse
import sys
from datetime import timedelta

from app import create_app
from models import db, utcnow
from services.bookings import expire_stale_bookings


def main(argv=None, app=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--older-than-hours",
        type=float,
        required=True,
        help="expire pending bookings created more than this many hours ago",
    )
    args = parser.parse_args(argv)
    if args.older_than_hours <= 0:
        parser.error("--older-than-hours must be positive")

    if app is None:
        app = create_app()
    with app.app_context():
        cutoff = utcnow() - timedelta(hours=args.older_than_hours)
        count = expire_stale_bookings(db.session, cutoff)
        print(f"Expired {count} pending bookings created before {cutoff.isoformat()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
