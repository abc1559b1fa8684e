"""Mark an artisan as verified (or revoke it) by the owner's phone number."""

import argparse
import sys

from app import create_app
from models import db
from models.artisan import ArtisanProfile
from models.user import User


def main(argv=None, app=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("phone", help="phone number the artisan registered with")
    parser.add_argument("--revoke", action="store_true", help="hide the artisan from the directory")
    args = parser.parse_args(argv)

    if app is None:
        app = create_app()
    with app.app_context():
        profile = (
            ArtisanProfile.query.join(User)
            .filter(User.phone == args.phone)
            .first()
        )
        if profile is None:
            print(f"No artisan profile for phone {args.phone}", file=sys.stderr)
            return 1

        profile.verified = not args.revoke
        db.session.commit()
        state = "verified" if profile.verified else "unverified"
        print(f"Artisan {profile.id} ({args.phone}) is now {state}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
