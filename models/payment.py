"""Payment model definition."""

from decimal import Decimal

from . import db, utcnow


PAYMENT_STATUSES = ("initiated", "pending", "successful", "paid", "failed", "cancelled")
SUCCESS_STATUSES = frozenset({"successful", "paid"})


def normalize_payment_status(raw_status) -> str | None:
    """Return the canonical status for a provider callback, or ``None`` if unknown."""

    if not isinstance(raw_status, str):
        return None
    status = raw_status.strip().lower()
    return status if status in PAYMENT_STATUSES else None


class Payment(db.Model):
    """Payment intent opened with the external provider for one booking."""

    __tablename__ = "payments"

    id = db.Column(db.Integer, primary_key=True)
    booking_id = db.Column(
        db.Integer,
        db.ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    provider = db.Column(db.String(64), nullable=False)
    provider_ref = db.Column(db.String(64), nullable=False, unique=True, index=True)
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    status = db.Column(
        db.String(32),
        nullable=False,
        default="initiated",
        server_default=db.text("'initiated'"),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    booking = db.relationship("Booking", back_populates="payment")

    @property
    def is_successful(self) -> bool:
        return self.status in SUCCESS_STATUSES

    def to_dict(self) -> dict:
        amount = float(self.amount) if isinstance(self.amount, Decimal) else self.amount
        return {
            "provider": self.provider,
            "provider_ref": self.provider_ref,
            "amount": amount,
            "status": self.status,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Payment ref={self.provider_ref} status={self.status}>"
