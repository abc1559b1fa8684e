"""Booking and payment lifecycle.

A booking is created ``pending`` together with an ``initiated`` payment whose
``provider_ref`` correlates the external checkout with our records. The
provider later reports the payment status through a webhook; a
success-equivalent status settles the booking as ``paid``. Stale ``pending``
bookings only leave that state through :func:`expire_stale_bookings`, which
is run by an operator, never on a timer.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from urllib.parse import urlencode

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.booking import Booking
from models.payment import SUCCESS_STATUSES, Payment, normalize_payment_status
from utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutHandoff:
    """What the client needs to continue on the provider's hosted checkout."""

    booking_id: int
    provider_ref: str
    payment_url: str


def generate_provider_ref() -> str:
    return str(uuid.uuid4())


def build_payment_url(redirect_base: str, provider_ref: str) -> str:
    return f"{redirect_base.rstrip('/')}/pay?{urlencode({'ref': provider_ref})}"


def create_booking(
    session: Session,
    *,
    user_id: int,
    artisan_id: int,
    amount: Decimal,
    provider: str,
    redirect_base: str,
    service_category: str | None = None,
    scheduled_at: datetime | None = None,
) -> CheckoutHandoff:
    """Create a pending booking and its initiated payment in one transaction.

    On any store failure both rows are rolled back and the error is re-raised.
    """

    provider_ref = generate_provider_ref()
    try:
        booking = Booking(
            user_id=user_id,
            artisan_id=artisan_id,
            service_category=service_category or "general",
            scheduled_at=scheduled_at,
            amount=amount,
            status="pending",
        )
        session.add(booking)
        session.flush()

        session.add(
            Payment(
                booking_id=booking.id,
                provider=provider,
                provider_ref=provider_ref,
                amount=amount,
                status="initiated",
            )
        )
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise

    logger.info("Created booking %s with payment ref %s", booking.id, provider_ref)
    return CheckoutHandoff(
        booking_id=booking.id,
        provider_ref=provider_ref,
        payment_url=build_payment_url(redirect_base, provider_ref),
    )


def reconcile_payment(session: Session, provider_ref: str, raw_status) -> Payment:
    """Apply a provider callback to the payment and, on success, its booking."""

    status = normalize_payment_status(raw_status)
    if status is None:
        raise ValidationError(
            f"Unrecognized payment status: {raw_status!r}.", error_code="invalid_status"
        )

    payment = session.execute(
        select(Payment).filter_by(provider_ref=provider_ref)
    ).scalar_one_or_none()
    if payment is None:
        raise NotFoundError("Payment not found.", error_code="payment_not_found")

    try:
        payment.status = status
        if status in SUCCESS_STATUSES:
            payment.booking.mark_paid(provider_ref)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise

    logger.info(
        "Payment %s for booking %s reconciled as %s",
        provider_ref,
        payment.booking_id,
        status,
    )
    return payment


def expire_stale_bookings(session: Session, older_than: datetime) -> int:
    """Mark ``pending`` bookings created before ``older_than`` as ``expired``."""

    try:
        result = session.execute(
            update(Booking)
            .where(Booking.status == "pending", Booking.created_at < older_than)
            .values(status="expired")
            .execution_options(synchronize_session=False)
        )
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise

    logger.info("Expired %s pending bookings created before %s", result.rowcount, older_than)
    return result.rowcount
