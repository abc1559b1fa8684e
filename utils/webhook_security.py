"""Signature verification for inbound payment-provider webhooks.

The provider signs the raw request body with HMAC-SHA256 using the shared
``PAYMENT_WEBHOOK_SECRET`` and sends the hex digest in a header.
"""

from __future__ import annotations

import hashlib
import hmac


class WebhookSignatureError(Exception):
    """Raised when webhook signature verification fails."""


def compute_hmac_sha256(secret: str, payload: bytes) -> str:
    """Compute the hex HMAC-SHA256 signature of ``payload``."""

    return hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()


def constant_time_compare(a: str | None, b: str | None) -> bool:
    if not a or not b:
        return False
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def verify_signature(payload: bytes, signature: str | None, secret: str) -> None:
    """Raise ``WebhookSignatureError`` unless ``signature`` matches ``payload``."""

    if not signature:
        raise WebhookSignatureError("Missing webhook signature.")

    candidate = signature.strip().lower()
    if candidate.startswith("sha256="):
        candidate = candidate[len("sha256="):]

    expected = compute_hmac_sha256(secret, payload)
    if not constant_time_compare(candidate, expected):
        raise WebhookSignatureError("Webhook signature mismatch.")
