"""Payment-provider webhook endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from models import db
from services.bookings import reconcile_payment
from utils.errors import AuthenticationError, ServerError
from utils.request_validation import parse_json_request, require_fields
from utils.webhook_security import WebhookSignatureError, verify_signature

payments_bp = Blueprint("payments", __name__)


def _extract_callback(payload: dict) -> dict:
    """Accept both the flat callback and the provider's nested ``data`` shape."""

    nested = payload.get("data")
    if isinstance(nested, dict) and not payload.get("provider_ref"):
        return {
            "provider_ref": nested.get("tx_ref") or nested.get("provider_ref"),
            "status": nested.get("status"),
        }
    return {"provider_ref": payload.get("provider_ref"), "status": payload.get("status")}


@payments_bp.route("/payments/webhook", methods=["POST"])
def payment_webhook():
    """Verify and apply a payment status callback."""

    secret = current_app.config.get("PAYMENT_WEBHOOK_SECRET")
    if not secret:
        current_app.logger.error("PAYMENT_WEBHOOK_SECRET is not configured; rejecting webhook")
        raise ServerError()

    header = current_app.config.get("PAYMENT_SIGNATURE_HEADER", "X-Webhook-Signature")
    try:
        verify_signature(request.get_data(cache=True), request.headers.get(header), secret)
    except WebhookSignatureError as exc:
        current_app.logger.warning("Rejected payment webhook: %s", exc)
        raise AuthenticationError(str(exc), error_code="invalid_signature") from exc

    callback = _extract_callback(parse_json_request(request))
    require_fields(callback, ("provider_ref", "status"))

    try:
        reconcile_payment(db.session, str(callback["provider_ref"]), callback["status"])
    except SQLAlchemyError as exc:
        current_app.logger.exception(
            "Failed to reconcile payment %s", callback["provider_ref"]
        )
        raise ServerError() from exc

    return jsonify({"status": "ok"})
