"""Booking creation and lookup endpoints."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.artisan import ArtisanProfile
from models.booking import Booking
from services.bookings import create_booking
from utils.auth import current_user_id, ensure_same_user, role_required
from utils.errors import NotFoundError, PermissionDenied, StoreError
from utils.request_validation import parse_datetime, parse_decimal, parse_json_request

bookings_bp = Blueprint("bookings", __name__)


@bookings_bp.route("/book", methods=["POST"])
@role_required()
def book_artisan():
    """Create a pending booking and hand the client off to hosted checkout."""

    data = parse_json_request(request, required_keys=("user_id", "artisan_id", "amount"))
    user_id = ensure_same_user(data.get("user_id"))
    amount = parse_decimal(data.get("amount"), field="amount", error_code="invalid_amount", positive=True)
    scheduled_at = parse_datetime(
        data.get("scheduled_at"), field="scheduled_at", error_code="invalid_scheduled_at"
    )

    try:
        artisan_id = int(data.get("artisan_id"))
    except (TypeError, ValueError):
        artisan_id = None
    if artisan_id is None or db.session.get(ArtisanProfile, artisan_id) is None:
        raise NotFoundError("Artisan not found.", error_code="artisan_not_found")

    try:
        handoff = create_booking(
            db.session,
            user_id=user_id,
            artisan_id=artisan_id,
            amount=amount,
            provider=current_app.config["PAYMENT_PROVIDER"],
            redirect_base=current_app.config["PAYMENT_REDIRECT_BASE"],
            service_category=str(data.get("service_category") or "").strip() or None,
            scheduled_at=scheduled_at,
        )
    except SQLAlchemyError as exc:
        current_app.logger.exception("Failed to create booking for user %s", user_id)
        raise StoreError() from exc

    return (
        jsonify(
            {
                "bookingId": handoff.booking_id,
                "payment_url": handoff.payment_url,
                "provider_ref": handoff.provider_ref,
            }
        ),
        HTTPStatus.CREATED,
    )


@bookings_bp.route("/bookings/<int:booking_id>", methods=["GET"])
@role_required()
def get_booking(booking_id: int):
    """Return a booking and its payment to the user who made it."""

    booking = db.session.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking not found.", error_code="booking_not_found")
    if booking.user_id != current_user_id():
        raise PermissionDenied("Not authorized to view this booking.")
    return jsonify(booking.to_dict())
