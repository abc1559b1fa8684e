"""Database initialization and model exports."""

from datetime import UTC, datetime

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime."""

    return datetime.now(UTC).replace(tzinfo=None)


# Import models to register them with SQLAlchemy metadata.
from .user import User  # noqa: E402,F401
from .artisan import ArtisanProfile  # noqa: E402,F401
from .booking import Booking  # noqa: E402,F401
from .payment import Payment  # noqa: E402,F401

__all__ = [
    "db",
    "utcnow",
    "User",
    "ArtisanProfile",
    "Booking",
    "Payment",
]
