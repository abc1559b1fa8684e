"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Iterable, Mapping

from flask import Request

from utils.errors import MissingFields, ValidationError


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
) -> dict:
    """Return the parsed JSON body, raising ``missing_fields`` for absent keys."""

    data = req.get_json(silent=True)
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValidationError(
            "Request JSON payload must be an object.", error_code="invalid_json"
        )

    if required_keys:
        require_fields(data, required_keys)

    return data


def require_fields(data: Mapping, required_keys: Iterable[str]) -> None:
    """Raise ``MissingFields`` listing every key that is absent or falsy."""

    missing = [key for key in required_keys if not data.get(key)]
    if missing:
        raise MissingFields(missing)


def parse_decimal(value, *, field: str, error_code: str, positive: bool = False) -> Decimal | None:
    """Parse a numeric value into ``Decimal``; blank values yield ``None``."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be numeric.", error_code=error_code)
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be numeric.", error_code=error_code)
    if not number.is_finite():
        raise ValidationError(f"{field} must be numeric.", error_code=error_code)
    if positive and number <= 0:
        raise ValidationError(f"{field} must be greater than zero.", error_code=error_code)
    return number


def parse_datetime(value, *, field: str, error_code: str) -> datetime | None:
    """Parse an ISO 8601 timestamp into a naive UTC ``datetime``."""

    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be ISO 8601 format.", error_code=error_code)
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"{field} must be ISO 8601 format.", error_code=error_code)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(UTC).replace(tzinfo=None)
    return parsed
