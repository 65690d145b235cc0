"""Shopper journey: browse → fill cart → check out → maybe cancel."""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import checkout_data, shopper_headers, unique_user_id
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class ShoppingJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState(user_id=unique_user_id())
        self.headers = shopper_headers(self.state.user_id)

    @task
    def browse_catalog(self):
        with self.client.get("/products", catch_response=True, name="GET /products") as resp:
            if resp.status_code != 200:
                resp.failure(f"Catalog failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()
                return
            products = [p for p in resp.json() if p["stock"] > 0]
            if not products:
                resp.success()
                self.interrupt()
                return
            picks = random.sample(products, k=min(len(products), random.randint(1, 3)))
            self.state.cart_product_ids = [p["product_id"] for p in picks]

    @task
    def fill_cart(self):
        for product_id in self.state.cart_product_ids:
            with self.client.post(
                "/cart/items",
                json={"product_id": product_id, "quantity": 1},
                headers=self.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code == 400:
                    resp.success()  # sold out between browse and add
                elif resp.status_code != 201:
                    resp.failure(f"Add to cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.headers, name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/orders",
            json=checkout_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order_id"])
            elif resp.status_code in (400, 404):
                resp.success()  # empty cart or stock gone, both legitimate outcomes
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def maybe_cancel(self):
        if not self.state.order_ids or random.random() > 0.3:
            return
        order_id = self.state.order_ids[-1]
        with self.client.post(
            f"/orders/{order_id}/cancel",
            headers=self.headers,
            catch_response=True,
            name="POST /orders/{id}/cancel",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cancel failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def history(self):
        self.client.get("/orders", headers=self.headers, name="GET /orders")
        self.interrupt()


class ShopperUser(HttpUser):
    tasks = [ShoppingJourney]
    wait_time = between(0.5, 2)
