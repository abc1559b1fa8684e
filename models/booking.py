"""Booking model definition."""

from decimal import Decimal

from . import db, utcnow


BOOKING_STATUSES = ("pending", "paid", "expired")


class Booking(db.Model):
    """A service request from a user to an artisan, settled through a payment."""

    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    artisan_id = db.Column(
        db.Integer,
        db.ForeignKey("artisans.id"),
        nullable=False,
        index=True,
    )
    service_category = db.Column(db.String(120), nullable=False, default="general")
    scheduled_at = db.Column(db.DateTime, nullable=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    status = db.Column(
        db.Enum(*BOOKING_STATUSES, name="booking_status"),
        nullable=False,
        default="pending",
        server_default=db.text("'pending'"),
    )
    payment_ref = db.Column(db.String(64), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    customer = db.relationship("User", backref=db.backref("bookings", lazy="dynamic"))
    artisan = db.relationship("ArtisanProfile", back_populates="bookings")
    payment = db.relationship(
        "Payment",
        back_populates="booking",
        uselist=False,
        cascade="all, delete-orphan",
    )

    def mark_paid(self, provider_ref: str) -> None:
        """Record a successful payment against the booking."""

        self.status = "paid"
        self.payment_ref = provider_ref

    def mark_expired(self) -> None:
        self.status = "expired"

    def to_dict(self) -> dict:
        """Serialize the booking together with its payment."""

        amount = float(self.amount) if isinstance(self.amount, Decimal) else self.amount
        return {
            "id": self.id,
            "user_id": self.user_id,
            "artisan_id": self.artisan_id,
            "service_category": self.service_category,
            "scheduled_at": self.scheduled_at.isoformat() if self.scheduled_at else None,
            "amount": amount,
            "status": self.status,
            "payment_ref": self.payment_ref,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "payment": self.payment.to_dict() if self.payment else None,
        }

    def __repr__(self) -> str:
        return f"<Booking id={self.id} user_id={self.user_id} status={self.status}>"
