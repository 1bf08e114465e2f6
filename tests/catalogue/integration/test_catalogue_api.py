"""Integration tests for the product and category endpoints."""

import pytest
from catalogue.api import category_router, product_router
from catalogue.product.product import Product
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.domain import identity
from identity.user.credentials import issue_credential
from identity.user.user import Role, User
from protean.utils.globals import current_domain
from shared.errors import register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(product_router)
    app.include_router(category_router)
    return TestClient(app)


def _headers_for(role, email):
    with identity.domain_context():
        user = User.register(name=email.split("@")[0], email=email, password_hash="x", role=role)
        identity.repository_for(User).add(user)
        return {"Authorization": f"Bearer {issue_credential(user)}"}


@pytest.fixture()
def admin_headers():
    return _headers_for(Role.ADMIN.value, "admin@example.com")


@pytest.fixture()
def customer_headers():
    return _headers_for(Role.CUSTOMER.value, "shopper.jane@example.com")


def _product_payload(category_id, **overrides):
    payload = {
        "name": "Studio Headphones",
        "description": "Closed-back monitoring headphones",
        "price": 149.0,
        "category_id": category_id,
        "sku": "hp-100",
        "stock": 12,
        "images": ["https://img.example.com/hp.jpg"],
        "specifications": [{"key": "Impedance", "value": "32 ohm"}],
    }
    payload.update(overrides)
    return payload


class TestCategoryEndpoints:
    def test_create_requires_admin(self, client, customer_headers):
        response = client.post("/categories", json={"name": "Audio"}, headers=customer_headers)
        assert response.status_code == 403

    def test_create_requires_token(self, client):
        assert client.post("/categories", json={"name": "Audio"}).status_code == 401

    def test_crud(self, client, admin_headers):
        created = client.post("/categories", json={"name": "Audio Gear"}, headers=admin_headers)
        assert created.status_code == 201
        category = created.json()
        assert category["slug"] == "audio-gear"

        assert client.get("/categories/audio-gear").json()["id"] == category["id"]
        assert [c["name"] for c in client.get("/categories").json()] == ["Audio Gear"]

        updated = client.put(f"/categories/{category['id']}", json={"is_active": False}, headers=admin_headers)
        assert updated.json()["is_active"] is False
        assert client.get("/categories", params={"is_active": True}).json() == []

        assert client.delete(f"/categories/{category['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/categories/{category['id']}").status_code == 404

    def test_duplicate_name(self, client, admin_headers):
        client.post("/categories", json={"name": "Audio"}, headers=admin_headers)
        response = client.post("/categories", json={"name": "audio"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["kind"] == "duplicate_entry"


class TestProductEndpoints:
    def test_create_and_fetch_by_slug(self, client, admin_headers, category):
        response = client.post("/products", json=_product_payload(category.id), headers=admin_headers)
        assert response.status_code == 201
        product = response.json()
        assert product["sku"] == "HP-100"
        assert product["images"] == ["https://img.example.com/hp.jpg"]

        fetched = client.get("/products/studio-headphones")
        assert fetched.status_code == 200
        assert fetched.json()["id"] == product["id"]

    def test_create_requires_image(self, client, admin_headers, category):
        response = client.post("/products", json=_product_payload(category.id, images=[]), headers=admin_headers)
        assert response.status_code == 400
        assert response.json()["kind"] == "validation_failure"

    def test_create_with_unknown_category(self, client, admin_headers):
        response = client.post("/products", json=_product_payload("missing"), headers=admin_headers)
        assert response.status_code == 404

    def test_listing_and_filters(self, client, make_product):
        make_product(name="Cheap Cable", price=5.0)
        make_product(name="Fancy Amp", price=500.0)

        data = client.get("/products", params={"max_price": 100}).json()
        assert [p["name"] for p in data["items"]] == ["Cheap Cable"]
        assert data["pagination"]["total"] == 1

    def test_bad_sort_key(self, client):
        response = client.get("/products", params={"sort": "popularity"})
        assert response.status_code == 400

    def test_featured_route_is_not_a_product_id(self, client, make_product):
        make_product(is_featured=True)
        response = client.get("/products/featured", params={"kind": "featured"})
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_update_and_bulk_update(self, client, admin_headers, make_product):
        first, second = make_product(), make_product()

        response = client.put(f"/products/{first.id}", json={"price": 1.5}, headers=admin_headers)
        assert response.json()["price"] == 1.5

        response = client.put(
            "/products/bulk-update",
            json={"product_ids": [first.id, second.id], "is_active": False},
            headers=admin_headers,
        )
        assert response.json() == {"modified_count": 2}
        assert current_domain.repository_for(Product).get(second.id).is_active is False

    def test_delete(self, client, admin_headers, make_product):
        product = make_product()
        assert client.delete(f"/products/{product.id}", headers=admin_headers).status_code == 200
        assert client.get(f"/products/{product.id}").status_code == 404

    def test_admin_stats(self, client, admin_headers, make_product):
        make_product(stock=0)
        make_product(stock=3)
        response = client.get("/products/admin/stats", headers=admin_headers)
        assert response.json() == {"total_products": 2, "active_products": 2, "out_of_stock": 1, "low_stock": 1}


class TestReviewEndpoint:
    def test_review_uses_email_local_part(self, client, customer_headers, make_product):
        product = make_product()
        response = client.post(
            f"/products/{product.id}/reviews",
            json={"rating": 4, "comment": "Comfortable"},
            headers=customer_headers,
        )
        assert response.status_code == 201

        review = client.get(f"/products/{product.id}").json()["reviews"][0]
        assert review["user_name"] == "shopper.jane"
        assert review["rating"] == 4

    def test_duplicate_review(self, client, customer_headers, make_product):
        product = make_product()
        body = {"rating": 5, "comment": "Great"}
        client.post(f"/products/{product.id}/reviews", json=body, headers=customer_headers)
        response = client.post(f"/products/{product.id}/reviews", json=body, headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["kind"] == "duplicate_entry"

    def test_rating_out_of_range(self, client, customer_headers, make_product):
        product = make_product()
        response = client.post(
            f"/products/{product.id}/reviews",
            json={"rating": 6, "comment": "Too good"},
            headers=customer_headers,
        )
        assert response.status_code == 400
