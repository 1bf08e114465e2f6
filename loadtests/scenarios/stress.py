"""Stock contention stress scenario.

Every LastUnitRaceUser repeatedly buys single units of the same scarce
products. Placements either succeed or fail with ``insufficient_stock``;
afterwards ``GET /products/admin/stats`` should report no negative stock and
the sum of sold units should match ``total_orders``.
"""

import threading

from locust import HttpUser, constant_pacing, task

from loadtests.data_generators import registration_data, shipping_address
from loadtests.helpers.admin import admin_headers, create_products
from loadtests.helpers.response import extract_error_detail

_pool_lock = threading.Lock()
_scarce_products: list[str] = []


class LastUnitRaceUser(HttpUser):
    """All users fight over a small pool of low-stock products."""

    wait_time = constant_pacing(0.2)

    def on_start(self):
        with _pool_lock:
            if not _scarce_products:
                _scarce_products.extend(create_products(self.client, admin_headers(self.client), count=3, stock=20))
        resp = self.client.post("/auth/register", json=registration_data(), name="[STRESS] POST /auth/register")
        self.headers = {"Authorization": f"Bearer {resp.json()['token']}"}

    @task
    def buy_one(self):
        for product_id in _scarce_products:
            with self.client.post(
                "/orders",
                json={
                    "items": [{"product_id": product_id, "quantity": 1}],
                    "shipping_address": shipping_address(),
                    "payment_method": "credit_card",
                },
                headers=self.headers,
                catch_response=True,
                name="[STRESS] POST /orders",
            ) as resp:
                if resp.status_code == 201 or resp.json().get("kind") == "insufficient_stock":
                    resp.success()
                else:
                    resp.failure(f"{resp.status_code} {extract_error_detail(resp)}")
