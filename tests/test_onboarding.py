"""Tests for artisan onboarding uploads."""

from __future__ import annotations

from decimal import Decimal
from io import BytesIO
from pathlib import Path

import pytest

from factories import auth_headers, create_artisan, create_user
from models import db
from models.artisan import ArtisanProfile
from storage.local_storage import LocalStorage


@pytest.fixture()
def provider(app):
    with app.app_context():
        profile = create_artisan("0500", category="general", city="Lokoja", verified=False)
        return profile.user_id, profile.id


def _onboard(client, headers, data):
    return client.post(
        "/api/artisan/onboard",
        data=data,
        headers=headers,
        content_type="multipart/form-data",
    )


def test_onboarding_stores_documents_and_fields(app, client, provider):
    user_id, profile_id = provider

    response = _onboard(
        client,
        auth_headers(app, user_id),
        {
            "user_id": str(user_id),
            "category": "plumbing",
            "city": "Abuja",
            "bio": "Ten years fixing pipes.",
            "price_from": "3500",
            "id_document": (BytesIO(b"PDF data"), "national id.pdf"),
            "profile_photo": (BytesIO(b"PNG data"), "me.png"),
        },
    )

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}

    with app.app_context():
        profile = db.session.get(ArtisanProfile, profile_id)
        assert (profile.category, profile.city) == ("plumbing", "Abuja")
        assert profile.bio == "Ten years fixing pipes."
        assert profile.price_from == Decimal("3500")
        assert profile.verified is False
        assert profile.id_document.endswith("-national_id.pdf")
        assert profile.profile_photo.endswith("-me.png")
        upload_dir = Path(app.config["UPLOAD_DIR"])
        assert (upload_dir / profile.id_document).read_bytes() == b"PDF data"
        assert (upload_dir / profile.profile_photo).read_bytes() == b"PNG data"


def test_onboarding_overwrites_absent_fields_with_null(app, client, provider):
    user_id, profile_id = provider
    headers = auth_headers(app, user_id)
    _onboard(
        client,
        headers,
        {"city": "Abuja", "bio": "First", "id_document": (BytesIO(b"x"), "id.pdf")},
    )

    response = _onboard(client, headers, {"category": "tiling"})

    assert response.status_code == 200
    with app.app_context():
        profile = db.session.get(ArtisanProfile, profile_id)
        assert profile.category == "tiling"
        assert profile.city is None
        assert profile.bio is None
        assert profile.id_document is None
        assert profile.price_from is None


def test_onboarding_requires_token(client, provider):
    response = _onboard(client, {}, {"category": "tiling"})

    assert response.status_code == 401


def test_consumers_cannot_onboard(app, client):
    with app.app_context():
        consumer_id = create_user("0510").id

    response = _onboard(client, auth_headers(app, consumer_id), {"category": "tiling"})

    assert response.status_code == 403
    assert response.get_json()["error"] == "forbidden"


def test_cannot_onboard_someone_else(app, client, provider):
    user_id, _ = provider
    with app.app_context():
        other_id = create_artisan("0520").user_id

    response = _onboard(client, auth_headers(app, other_id), {"user_id": str(user_id)})

    assert response.status_code == 403


def test_onboarding_rejects_disallowed_file_type(app, client, provider):
    user_id, profile_id = provider

    response = _onboard(
        client,
        auth_headers(app, user_id),
        {"category": "tiling", "id_document": (BytesIO(b"MZ"), "payload.exe")},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_file"
    with app.app_context():
        assert db.session.get(ArtisanProfile, profile_id).category == "general"
    assert list(Path(app.config["UPLOAD_DIR"]).iterdir()) == []


def test_onboarding_rejects_oversized_file(app, client, provider):
    user_id, _ = provider
    app.config["MAX_UPLOAD_SIZE"] = 4

    response = _onboard(
        client,
        auth_headers(app, user_id),
        {"profile_photo": (BytesIO(b"too large"), "me.jpg")},
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_file"


def test_onboarding_rejects_non_numeric_price(app, client, provider):
    user_id, _ = provider

    response = _onboard(client, auth_headers(app, user_id), {"price_from": "cheap"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "invalid_price"


def test_provider_without_profile(app, client):
    with app.app_context():
        user_id = create_user("0530", role="provider").id

    response = _onboard(client, auth_headers(app, user_id), {"category": "tiling"})

    assert response.status_code == 404
    assert response.get_json()["error"] == "artisan_not_found"


def test_failed_save_removes_stored_files_and_keeps_profile(app, client, provider, monkeypatch):
    user_id, profile_id = provider
    real_save = LocalStorage.save
    saved = []

    def _fail_on_second_file(self, file_obj, filename):
        if saved:
            raise OSError("disk full")
        saved.append(real_save(self, file_obj, filename))
        return saved[-1]

    monkeypatch.setattr(LocalStorage, "save", _fail_on_second_file)

    response = _onboard(
        client,
        auth_headers(app, user_id),
        {
            "category": "tiling",
            "id_document": (BytesIO(b"PDF data"), "id.pdf"),
            "profile_photo": (BytesIO(b"PNG data"), "me.png"),
        },
    )

    assert response.status_code == 500
    assert response.get_json()["error"] == "server_error"
    assert len(saved) == 1
    assert list(Path(app.config["UPLOAD_DIR"]).iterdir()) == []
    with app.app_context():
        profile = db.session.get(ArtisanProfile, profile_id)
        assert (profile.category, profile.city) == ("general", "Lokoja")
        assert profile.id_document is None
