"""Authentication blueprint providing register and login endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from models.artisan import DEFAULT_CATEGORY, ArtisanProfile
from models.user import USER_ROLES, User, normalize_role
from utils.errors import AuthenticationError, ConflictError, ServerError, StoreError, ValidationError
from utils.request_validation import parse_json_request, require_fields

auth_bp = Blueprint("auth", __name__)


def _normalize_phone(raw_phone) -> str:
    """Strip whitespace from a phone number used as the login key."""
    return "".join(str(raw_phone or "").split())


def _phone_taken(phone: str) -> bool:
    return User.query.filter_by(phone=phone).first() is not None


def _clean(value) -> str | None:
    text = (value or "").strip() if isinstance(value, str) else value
    return text or None


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a consumer or provider; providers also get an unverified profile."""
    payload = parse_json_request(request, required_keys=("name", "phone", "role", "password"))
    name = str(payload["name"]).strip()
    phone = _normalize_phone(payload.get("phone"))
    require_fields({"name": name, "phone": phone}, ("name", "phone"))
    password = str(payload["password"])

    role = normalize_role(payload.get("role"))
    if role is None:
        raise ValidationError(
            "Role must be one of: {}.".format(", ".join(USER_ROLES)),
            error_code="invalid_role",
        )

    try:
        if _phone_taken(phone):
            raise ConflictError("A user with that phone already exists.", error_code="phone_taken")

        user = User(name=name, phone=phone, email=_clean(payload.get("email")), role=role)
        user.set_password(password)
        db.session.add(user)

        if user.is_provider:
            db.session.add(
                ArtisanProfile(
                    user=user,
                    category=_clean(payload.get("category")) or DEFAULT_CATEGORY,
                    city=_clean(payload.get("city")) or current_app.config["DEFAULT_ARTISAN_CITY"],
                    verified=False,
                )
            )

        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        if _phone_taken(phone):
            raise ConflictError(
                "A user with that phone already exists.", error_code="phone_taken"
            ) from exc
        current_app.logger.exception("Failed to register user with phone %s", phone)
        raise StoreError() from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception("Failed to register user with phone %s", phone)
        raise StoreError() from exc

    current_app.logger.info("Registered %s user %s", user.role, user.id)
    return jsonify({"user": user.to_dict()}), HTTPStatus.CREATED


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a user by phone and return a signed access token."""
    payload = parse_json_request(request, required_keys=("phone", "password"))
    phone = _normalize_phone(payload.get("phone"))
    password = str(payload["password"])

    try:
        user = User.query.filter_by(phone=phone).first()
    except SQLAlchemyError as exc:
        current_app.logger.exception("Failed to look up user for login")
        raise ServerError() from exc

    if user is None or not user.check_password(password):
        raise AuthenticationError()

    token = create_access_token(
        identity=str(user.id),
        additional_claims={"userId": user.id, "role": user.role},
    )
    return (
        jsonify(
            {
                "token": token,
                "user": {"id": user.id, "name": user.name, "role": user.role},
            }
        ),
        HTTPStatus.OK,
    )
