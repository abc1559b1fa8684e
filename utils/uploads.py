"""Validation of uploaded onboarding documents."""

from __future__ import annotations

import os
from typing import Iterable

from flask import current_app
from werkzeug.datastructures import FileStorage

from utils.errors import ValidationError

MAX_UPLOAD_SIZE_DEFAULT = 10 * 1024 * 1024  # 10 MB
ALLOWED_EXTENSIONS_DEFAULT = {"jpeg", "jpg", "png", "pdf"}


def allowed_extensions() -> set[str]:
    configured = current_app.config.get("ALLOWED_UPLOAD_TYPES")
    if not configured:
        return set(ALLOWED_EXTENSIONS_DEFAULT)
    if isinstance(configured, str):
        values: Iterable[str] = configured.split(",")
    else:
        values = configured

    normalized: set[str] = set()
    for raw in values:
        if not isinstance(raw, str):
            continue

        item = raw.strip().lower()
        if not item:
            continue

        if "/" in item and not item.startswith("."):
            item = item.rsplit("/", 1)[-1]

        item = item.lstrip(".")
        if item:
            normalized.add(item)

    if not normalized:
        return set(ALLOWED_EXTENSIONS_DEFAULT)
    if "jpeg" in normalized:
        normalized.add("jpg")
    if "jpg" in normalized:
        normalized.add("jpeg")
    return normalized


def validate_upload(file: FileStorage, field: str) -> None:
    """Reject files with a disallowed extension or above the size limit."""

    if file.filename is None or file.filename.strip() == "":
        raise ValidationError(f"{field} must be a named file.", error_code="invalid_file")

    extension = file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
    allowed = allowed_extensions()
    if extension not in allowed:
        raise ValidationError(
            f"{field}: file type not allowed. Allowed types: {', '.join(sorted(allowed))}.",
            error_code="invalid_file",
        )

    max_size = int(current_app.config.get("MAX_UPLOAD_SIZE", MAX_UPLOAD_SIZE_DEFAULT))
    file.stream.seek(0, os.SEEK_END)
    size = file.stream.tell()
    file.stream.seek(0)
    if size > max_size:
        raise ValidationError(
            f"{field} exceeds the maximum upload size of {max_size // (1024 * 1024)}MB.",
            error_code="invalid_file",
        )
