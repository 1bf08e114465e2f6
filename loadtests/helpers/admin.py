"""Administrator session used by scenarios that need catalogue fixtures.

Credentials come from ``LOADTEST_ADMIN_EMAIL`` / ``LOADTEST_ADMIN_PASSWORD``;
create the account beforehand with ``python src/manage.py seed``.
"""

import os

from loadtests.data_generators import category_data, product_data
from loadtests.helpers.response import extract_error_detail

ADMIN_EMAIL = os.getenv("LOADTEST_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("LOADTEST_ADMIN_PASSWORD", "change-me")


def admin_headers(client) -> dict:
    resp = client.post(
        "/auth/login",
        json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        name="POST /auth/login (admin)",
    )
    if resp.status_code != 200:
        raise RuntimeError(f"Admin login failed: {resp.status_code} {extract_error_detail(resp)}")
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def create_products(client, headers: dict, count: int, stock: int | None = None) -> list[str]:
    """Create a category and ``count`` products in it; returns the product ids."""
    resp = client.post("/categories", json=category_data(), headers=headers, name="POST /categories")
    if resp.status_code != 201:
        raise RuntimeError(f"Create category failed: {resp.status_code} {extract_error_detail(resp)}")
    category_id = resp.json()["id"]

    product_ids = []
    for _ in range(count):
        resp = client.post(
            "/products",
            json=product_data(category_id, stock=stock),
            headers=headers,
            name="POST /products",
        )
        if resp.status_code == 201:
            product_ids.append(resp.json()["id"])
    return product_ids
