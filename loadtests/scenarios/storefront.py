"""Storefront shopper scenarios.

BrowsingUser reads the catalogue anonymously. ShopperUser registers, browses,
places orders, reviews a product and occasionally cancels.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import order_data, registration_data, review_data
from loadtests.helpers.admin import admin_headers, create_products
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class BrowsingUser(HttpUser):
    """Anonymous catalogue traffic: listings, highlights and product pages."""

    wait_time = between(0.5, 2)
    weight = 3

    @task(5)
    def list_products(self):
        params = {"page": random.randint(1, 3), "sort": random.choice(["-created_at", "price", "-average_rating"])}
        with self.client.get("/products", params=params, catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"List products failed: {resp.status_code} {extract_error_detail(resp)}")
                return
            items = resp.json()["items"]
            if items:
                self.client.get(f"/products/{random.choice(items)['slug']}", name="GET /products/{slug}")

    @task(2)
    def featured(self):
        kind = random.choice(["most-ordered", "top-rated", "newest", "featured"])
        self.client.get("/products/featured", params={"kind": kind}, name="GET /products/featured")

    @task(1)
    def categories(self):
        self.client.get("/categories", name="GET /categories")


class ShopperJourney(SequentialTaskSet):
    """Register -> Browse -> Order -> Review -> View history -> (Cancel)."""

    def on_start(self):
        self.state = ShopperState(product_ids=self.user.product_ids)

    @task
    def register(self):
        with self.client.post(
            "/auth/register",
            json=registration_data(),
            catch_response=True,
            name="POST /auth/register",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.token = body["token"]
                self.state.user_id = body["user"]["id"]
            else:
                resp.failure(f"Register failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def browse(self):
        self.client.get("/products", name="GET /products")

    @task
    def place_order(self):
        if not self.state.product_ids:
            self.interrupt()
        with self.client.post(
            "/orders",
            json=order_data(self.state.product_ids),
            headers=self.state.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["id"])
            elif resp.status_code == 400 and resp.json().get("kind") == "insufficient_stock":
                # Sold out under load is an expected outcome, not a failure
                resp.success()
            else:
                resp.failure(f"Place order failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def review(self):
        product_id = random.choice(self.state.product_ids)
        with self.client.post(
            f"/products/{product_id}/reviews",
            json=review_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /products/{id}/reviews",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Review failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def order_history(self):
        self.client.get("/orders/my-orders", headers=self.state.headers, name="GET /orders/my-orders")

    @task
    def maybe_cancel(self):
        if self.state.order_ids and random.random() < 0.3:
            order_id = self.state.order_ids.pop()
            with self.client.put(
                f"/orders/{order_id}/cancel",
                headers=self.state.headers,
                catch_response=True,
                name="PUT /orders/{id}/cancel",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Cancel failed: {resp.status_code} {extract_error_detail(resp)}")
        self.interrupt()


class ShopperUser(HttpUser):
    """Registers a fresh account per journey and buys from a shared product pool."""

    tasks = [ShopperJourney]
    wait_time = between(1, 3)
    weight = 1

    def on_start(self):
        self.product_ids = create_products(self.client, admin_headers(self.client), count=5)
