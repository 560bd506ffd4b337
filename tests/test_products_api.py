"""
Product endpoints: listing, lookup and admin CRUD.
"""
import json

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from app.models.product import Product, PriceSlab
from app.repositories.product_repo import ProductRepository


def post_raw(client, url, payload, headers=None):
    """POST with stdlib json so NaN / Infinity reach the server as literals."""
    return client.post(
        url,
        content=json.dumps(payload),
        headers={"Content-Type": "application/json", **(headers or {})},
    )


# ===================== LISTING =====================


def test_list_products_envelope(client, make_product):
    make_product("kashmiri-saffron", prices=((1, "g", 500), (5, "g", 2200)))

    r = client.get("/api/products")

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "pages": 1}
    product = body["data"][0]
    assert product["slug"] == "kashmiri-saffron"
    assert product["pricingType"] == "WEIGHT"
    assert product["minPrice"] == 500
    assert product["maxPrice"] == 2200
    assert [s["price"] for s in product["prices"]] == [500, 2200]
    assert "error" not in body


def test_list_products_pagination(client, make_product):
    for i in range(5):
        make_product(f"p{i}", age_minutes=i)

    r = client.get("/api/products", params={"limit": 2, "page": 2, "sort": "newest"})

    body = r.json()
    assert [p["slug"] for p in body["data"]] == ["p2", "p3"]
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "pages": 3}


def test_category_all_is_unfiltered(client, make_product, make_category):
    make_category("Saffron")
    make_product("saffron", category="Saffron")
    make_product("almonds", category="Dry Fruits")

    plain = client.get("/api/products").json()["data"]
    all_ = client.get("/api/products", params={"category": "all"}).json()["data"]

    assert {p["slug"] for p in all_} == {p["slug"] for p in plain} == {"saffron", "almonds"}


def test_unknown_category_slug_is_ignored(client, make_product):
    make_product("saffron", category="Saffron")
    make_product("almonds", category="Dry Fruits")
    make_product("hidden", is_active=False)

    r = client.get("/api/products", params={"category": "no-such-category"})

    assert r.status_code == 200
    assert {p["slug"] for p in r.json()["data"]} == {"saffron", "almonds"}


def test_category_slug_filters_by_name(client, make_product, make_category):
    make_category("Dry Fruits", slug="dry-fruits")
    make_product("saffron", category="Saffron")
    make_product("almonds", category="Dry Fruits")

    r = client.get("/api/products", params={"category": "dry-fruits"})

    assert [p["slug"] for p in r.json()["data"]] == ["almonds"]


def test_inactive_category_slug_is_ignored(client, make_product, make_category):
    make_category("Dry Fruits", slug="dry-fruits", is_active=False)
    make_product("saffron", category="Saffron")
    make_product("almonds", category="Dry Fruits")

    r = client.get("/api/products", params={"category": "dry-fruits"})

    assert len(r.json()["data"]) == 2


def test_featured_and_include_inactive_flags(client, make_product):
    make_product("star", featured=True)
    make_product("plain")
    make_product("hidden", is_active=False)

    featured = client.get("/api/products", params={"featured": "true"}).json()["data"]
    everything = client.get("/api/products", params={"includeInactive": "true"}).json()

    assert [p["slug"] for p in featured] == ["star"]
    assert everything["pagination"]["total"] == 3


def test_unknown_sort_uses_default_order(client, make_product):
    make_product("new-plain", age_minutes=0)
    make_product("old-star", featured=True, age_minutes=10)

    r = client.get("/api/products", params={"sort": "cheapest"})

    assert r.status_code == 200
    assert [p["slug"] for p in r.json()["data"]] == ["old-star", "new-plain"]


def test_invalid_page_is_validation_error(client):
    r = client.get("/api/products", params={"page": 0})

    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["error"].startswith("Validation failed")


# ===================== SINGLE PRODUCT =====================


def test_get_product_by_slug(client, make_product):
    make_product("wild-forest-honey", category="Honey")

    r = client.get("/api/products/wild-forest-honey")

    assert r.status_code == 200
    assert r.json()["data"]["category"] == "Honey"
    assert r.json()["data"]["seo"]["title"] == "wild-forest-honey"


def test_get_product_not_found(client):
    r = client.get("/api/products/missing")

    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Product not found"}


def test_inactive_product_needs_flag(client, make_product):
    make_product("draft", is_active=False)

    assert client.get("/api/products/draft").status_code == 404
    r = client.get("/api/products/draft", params={"includeInactive": "true"})
    assert r.status_code == 200
    assert r.json()["data"]["isActive"] is False


def test_related_products(client, make_product):
    make_product("saffron-a", category="Saffron")
    make_product("saffron-b", category="Saffron")
    make_product("saffron-off", category="Saffron", is_active=False)
    make_product("almonds", category="Dry Fruits")

    r = client.get("/api/products/saffron-a/related")

    assert [p["slug"] for p in r.json()["data"]] == ["saffron-b"]


# ===================== CREATE =====================


def test_create_product(client, auth_headers, product_payload, session):
    r = client.post("/api/products", json=product_payload, headers=auth_headers)

    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Product created successfully"
    data = body["data"]
    assert data["slug"] == "kashmiri-saffron"
    assert data["isActive"] is True
    assert data["featured"] is False
    assert data["minPrice"] == 500 and data["maxPrice"] == 2200
    # defaults
    assert data["image"].startswith("https://")
    assert data["seo"]["title"] == "Kashmiri Saffron | NAWAB KHANA"
    assert data["seo"]["description"] == product_payload["description"]

    stored = session.exec(select(Product).where(Product.slug == "kashmiri-saffron")).one()
    assert [s.position for s in stored.prices] == [0, 1]


def test_create_product_requires_auth(client, product_payload, session):
    r = client.post("/api/products", json=product_payload)

    assert r.status_code == 401
    assert r.json()["success"] is False
    assert session.exec(select(Product)).all() == []


def test_create_product_rejects_bad_token(client, product_payload):
    headers = {"Authorization": "Bearer not-a-jwt"}
    r = client.post("/api/products", json=product_payload, headers=headers)

    assert r.status_code == 401


def test_auth_runs_before_validation(client):
    r = client.post("/api/products", json={})

    assert r.status_code == 401


def test_create_product_collects_all_missing_fields(client, auth_headers):
    r = client.post(
        "/api/products",
        json={"name": "Saffron", "category": "  ", "prices": []},
        headers=auth_headers,
    )

    assert r.status_code == 400
    error = r.json()["error"]
    assert error.startswith("Missing required fields: ")
    for field in ("slug", "category", "description", "pricingType", "prices"):
        assert field in error
    assert "name" not in error.replace("Missing required fields: ", "").split(", ")


def test_create_product_empty_prices_lists_prices(client, auth_headers, product_payload):
    product_payload["prices"] = []

    r = client.post("/api/products", json=product_payload, headers=auth_headers)

    assert r.status_code == 400
    assert "prices" in r.json()["error"]


def test_create_product_rejects_non_positive_price(client, auth_headers, product_payload):
    product_payload["prices"] = [
        {"quantity": 1, "unit": "g", "price": 500},
        {"quantity": 5, "unit": "g", "price": 0},
    ]

    r = client.post("/api/products", json=product_payload, headers=auth_headers)

    assert r.status_code == 400
    assert "greater than 0" in r.json()["error"]


def test_create_product_does_not_derive_slug(client, auth_headers, product_payload):
    # categories derive their slug from the name; products do not
    product_payload["slug"] = ""

    r = client.post("/api/products", json=product_payload, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["error"] == "Missing required fields: slug"


def test_create_product_normalizes_slug(client, auth_headers, product_payload):
    product_payload["slug"] = "  Kashmiri Saffron  "

    r = client.post("/api/products", json=product_payload, headers=auth_headers)

    assert r.status_code == 201
    assert r.json()["data"]["slug"] == "kashmiri-saffron"


def test_create_product_duplicate_slug(client, auth_headers, product_payload, make_product, session):
    existing = make_product("kashmiri-saffron", name="Original")

    r = client.post("/api/products", json=product_payload, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["error"] == "A product with this slug already exists"
    session.refresh(existing)
    assert existing.name == "Original"


def test_create_product_invalid_pricing_type(client, auth_headers, product_payload):
    product_payload["pricingType"] = "VOLUME"

    r = client.post("/api/products", json=product_payload, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["error"].startswith("Validation failed: pricingType")


@pytest.mark.parametrize("field", ["price", "quantity"])
@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_create_product_rejects_non_finite_slab_values(
    client, auth_headers, product_payload, session, field, value
):
    product_payload["prices"][1][field] = value

    r = post_raw(client, "/api/products", product_payload, auth_headers)

    assert r.status_code == 400
    assert r.json()["error"] == (
        f"Missing required fields: prices (all price slabs must have a {field} greater than 0)"
    )
    assert session.exec(select(Product)).all() == []


def test_create_product_database_failure(
    client, auth_headers, product_payload, session, monkeypatch
):
    def failing_create(self, session, product):
        session.add(product)
        raise OperationalError("INSERT INTO products", {}, Exception("disk I/O error"))

    monkeypatch.setattr(ProductRepository, "create", failing_create)

    r = client.post("/api/products", json=product_payload, headers=auth_headers)

    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Failed to create product"}
    # the pending row was rolled back, so autoflush has nothing to write
    assert session.exec(select(Product)).all() == []
    assert session.exec(select(PriceSlab)).all() == []


def test_anonymous_malformed_body_writes_nothing(client, session):
    # the body is decoded before route dependencies run, so this is a 400
    r = client.post(
        "/api/products",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == 400
    assert r.json()["success"] is False
    assert session.exec(select(Product)).all() == []


# ===================== UPDATE =====================


def test_update_product_rewrites_slabs(client, auth_headers, make_product, session):
    product = make_product("saffron", prices=((1, "g", 500),))
    old_ids = {str(s.id) for s in product.prices}

    r = client.put(
        "/api/products/saffron",
        json={
            "name": "Saffron Royale",
            "prices": [
                {"_id": "client-side-id", "quantity": 2, "unit": "g", "price": 950},
                {"id": "another", "quantity": 10, "unit": "g", "price": 4000},
            ],
        },
        headers=auth_headers,
    )

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["name"] == "Saffron Royale"
    assert [(s["quantity"], s["price"]) for s in data["prices"]] == [(2, 950), (10, 4000)]
    new_ids = {s["id"] for s in data["prices"]}
    assert not new_ids & (old_ids | {"client-side-id", "another"})
    assert len(session.exec(select(PriceSlab)).all()) == 2


def test_update_product_slug_conflict(client, auth_headers, make_product):
    make_product("saffron")
    make_product("honey")

    r = client.put("/api/products/saffron", json={"slug": "honey"}, headers=auth_headers)

    assert r.status_code == 400
    assert r.json()["error"] == "A product with this slug already exists"


def test_update_product_change_slug(client, auth_headers, make_product):
    make_product("saffron")

    r = client.put("/api/products/saffron", json={"slug": "Saffron Gold"}, headers=auth_headers)

    assert r.status_code == 200
    assert r.json()["data"]["slug"] == "saffron-gold"
    assert client.get("/api/products/saffron").status_code == 404


def test_update_product_rejects_empty_prices(client, auth_headers, make_product):
    make_product("saffron")

    r = client.put("/api/products/saffron", json={"prices": []}, headers=auth_headers)

    assert r.status_code == 400
    assert "prices" in r.json()["error"]


def test_update_product_not_found(client, auth_headers):
    r = client.put("/api/products/missing", json={"name": "x"}, headers=auth_headers)

    assert r.status_code == 404


def test_update_product_requires_auth(client, make_product):
    make_product("saffron")

    r = client.put("/api/products/saffron", json={"name": "Hacked"})

    assert r.status_code == 401
    assert client.get("/api/products/saffron").json()["data"]["name"] == "Saffron"


# ===================== DELETE =====================


def test_delete_product_requires_auth(client, make_product, session):
    make_product("saffron")

    r = client.delete("/api/products/saffron")

    assert r.status_code == 401
    assert session.exec(select(Product).where(Product.slug == "saffron")).first() is not None


def test_delete_product(client, auth_headers, make_product, session):
    make_product("saffron", prices=((1, "g", 500), (5, "g", 2000)))

    r = client.delete("/api/products/saffron", headers=auth_headers)

    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Product deleted successfully"}
    assert session.exec(select(Product)).all() == []
    assert session.exec(select(PriceSlab)).all() == []


def test_delete_product_not_found(client, auth_headers):
    r = client.delete("/api/products/missing", headers=auth_headers)

    assert r.status_code == 404
