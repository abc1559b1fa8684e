"""Artisan profile model definition."""

from decimal import Decimal

from . import db, utcnow


DEFAULT_CATEGORY = "general"


def _as_float(value):
    return float(value) if isinstance(value, Decimal) else value


class ArtisanProfile(db.Model):
    """Provider-side extension of a user: trade, location, pricing and documents."""

    __tablename__ = "artisans"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    category = db.Column(db.String(120), nullable=True, index=True)
    city = db.Column(db.String(120), nullable=True, index=True)
    verified = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    price_from = db.Column(db.Numeric(12, 2), nullable=True)
    avg_rating = db.Column(db.Float, nullable=True, default=0)
    bio = db.Column(db.Text, nullable=True)
    profile_photo = db.Column(db.String(512), nullable=True)
    id_document = db.Column(db.String(512), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    user = db.relationship("User", back_populates="artisan_profile")
    bookings = db.relationship("Booking", back_populates="artisan", lazy="dynamic")

    def apply_onboarding(
        self,
        *,
        category,
        city,
        bio,
        price_from,
        id_document,
        profile_photo,
    ) -> None:
        """Overwrite the onboarding fields; values not supplied become null."""

        self.category = category
        self.city = city
        self.bio = bio
        self.price_from = price_from
        self.id_document = id_document
        self.profile_photo = profile_photo

    def to_directory_dict(self) -> dict:
        """Serialize the profile as a directory entry."""

        return {
            "id": self.id,
            "name": self.user.name if self.user else None,
            "category": self.category,
            "city": self.city,
            "price_from": _as_float(self.price_from),
            "avg_rating": self.avg_rating,
            "profile_photo": self.profile_photo,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<ArtisanProfile id={self.id} user_id={self.user_id} verified={self.verified}>"
