"""Artisan directory and onboarding endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import contains_eager
from werkzeug.datastructures import FileStorage

from models import db
from models.artisan import ArtisanProfile
from storage.local_storage import LocalStorage, build_upload_filename
from utils.auth import ensure_same_user, role_required
from utils.errors import MissingFields, NotFoundError, ServerError, StoreError
from utils.request_validation import parse_decimal
from utils.uploads import validate_upload

artisans_bp = Blueprint("artisans", __name__)

DOCUMENT_FIELDS = ("id_document", "profile_photo")


@artisans_bp.route("/artisans", methods=["GET"])
def list_artisans():
    """Return verified artisans for a category and city, best rated first."""

    category = (request.args.get("category") or "").strip()
    city = (request.args.get("city") or "").strip()
    if not category or not city:
        missing = [name for name, value in (("category", category), ("city", city)) if not value]
        raise MissingFields(missing, error_code="missing_query")

    limit = int(current_app.config.get("DIRECTORY_LIMIT", 50))
    query = (
        select(ArtisanProfile)
        .join(ArtisanProfile.user)
        .options(contains_eager(ArtisanProfile.user))
        .where(
            ArtisanProfile.category == category,
            ArtisanProfile.city == city,
            ArtisanProfile.verified.is_(True),
        )
        .order_by(ArtisanProfile.avg_rating.desc().nullslast(), ArtisanProfile.id.asc())
        .limit(limit)
    )

    try:
        profiles = db.session.execute(query).scalars().all()
    except SQLAlchemyError as exc:
        current_app.logger.exception("Directory query failed")
        raise StoreError() from exc

    return jsonify([profile.to_directory_dict() for profile in profiles])


def _form_value(name: str) -> str | None:
    value = request.form.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _collect_documents() -> dict[str, FileStorage]:
    documents = {}
    for field in DOCUMENT_FIELDS:
        file = request.files.get(field)
        if isinstance(file, FileStorage) and file.filename:
            validate_upload(file, field)
            documents[field] = file
    return documents


@artisans_bp.route("/artisan/onboard", methods=["POST"])
@role_required("provider")
def onboard_artisan():
    """Store onboarding documents and overwrite the caller's profile fields."""

    user_id = ensure_same_user(request.form.get("user_id"))
    price_from = parse_decimal(
        _form_value("price_from"), field="price_from", error_code="invalid_price"
    )
    documents = _collect_documents()

    profile = ArtisanProfile.query.filter_by(user_id=user_id).first()
    if profile is None:
        raise NotFoundError("Artisan profile not found.", error_code="artisan_not_found")

    storage = LocalStorage(current_app.config.get("UPLOAD_DIR"))
    stored: dict[str, str] = {}
    try:
        for field, file in documents.items():
            stored[field] = storage.save(file, build_upload_filename(file.filename))

        profile.apply_onboarding(
            category=_form_value("category"),
            city=_form_value("city"),
            bio=_form_value("bio"),
            price_from=price_from,
            id_document=stored.get("id_document"),
            profile_photo=stored.get("profile_photo"),
        )
        db.session.commit()
    except (SQLAlchemyError, OSError, ValueError) as exc:
        db.session.rollback()
        for path in stored.values():
            storage.delete(path)
        current_app.logger.exception("Onboarding failed for user %s", user_id)
        raise ServerError() from exc

    current_app.logger.info(
        "Onboarded artisan %s with documents: %s", profile.id, ", ".join(sorted(stored)) or "none"
    )
    return jsonify({"status": "ok"})
