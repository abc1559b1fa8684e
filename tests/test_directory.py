"""Tests for the verified artisan directory."""

from __future__ import annotations

from factories import create_artisan


def _list(client, **params):
    return client.get("/api/artisans", query_string=params)


def test_directory_orders_by_rating_descending(app, client):
    with app.app_context():
        create_artisan("0801", name="Four Eight", avg_rating=4.8)
        create_artisan("0802", name="Four Two", avg_rating=4.2)
        create_artisan("0803", name="Four Nine", avg_rating=4.9, price_from="2500.00")

    response = _list(client, category="plumbing", city="Lokoja")

    assert response.status_code == 200
    rows = response.get_json()
    assert [row["avg_rating"] for row in rows] == [4.9, 4.8, 4.2]
    assert rows[0]["name"] == "Four Nine"
    assert rows[0]["price_from"] == 2500.0
    assert set(rows[0]) == {
        "id",
        "name",
        "category",
        "city",
        "price_from",
        "avg_rating",
        "profile_photo",
    }


def test_directory_never_returns_unverified_profiles(app, client):
    with app.app_context():
        create_artisan("0811", name="Verified", avg_rating=3.0)
        create_artisan("0812", name="Hidden", avg_rating=5.0, verified=False)

    rows = _list(client, category="plumbing", city="Lokoja").get_json()

    assert [row["name"] for row in rows] == ["Verified"]


def test_directory_filters_category_and_city(app, client):
    with app.app_context():
        create_artisan("0821", name="Match")
        create_artisan("0822", name="Other City", city="Abuja")
        create_artisan("0823", name="Other Trade", category="tailoring")

    rows = _list(client, category="plumbing", city="Lokoja").get_json()

    assert [row["name"] for row in rows] == ["Match"]


def test_directory_caps_results(app, client):
    app.config["DIRECTORY_LIMIT"] = 3
    with app.app_context():
        for index in range(5):
            create_artisan(f"083{index}", avg_rating=float(index))

    rows = _list(client, category="plumbing", city="Lokoja").get_json()

    assert [row["avg_rating"] for row in rows] == [4.0, 3.0, 2.0]


def test_directory_requires_category_and_city(client):
    for params in ({"category": "plumbing"}, {"city": "Lokoja"}, {}):
        response = _list(client, **params)
        assert response.status_code == 400
        assert response.get_json()["error"] == "missing_query"
