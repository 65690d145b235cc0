"""Hot-product contention: many shoppers racing to buy the same few units.

The first user to start creates one product with a small stock. Every user
then repeatedly checks out a random quantity of it. Stock must end at
``initial - sum(placed quantities)`` and never go negative; losers see
InsufficientStock (400) or, rarely, Conflict (409).
"""

import random
import threading

from locust import HttpUser, between, events, task

from loadtests.data_generators import admin_headers, checkout_data, product_data, shopper_headers, unique_user_id
from loadtests.helpers.response import extract_error_detail, is_insufficient_stock
from loadtests.helpers.state import ContentionStats

HOT_PRODUCT_STOCK = 50

_lock = threading.Lock()
_hot_product: dict = {}
_stats = ContentionStats()
_placed_units = []


class CheckoutContentionUser(HttpUser):
    wait_time = between(0.05, 0.2)

    def on_start(self):
        self.user_id = unique_user_id()
        self.headers = shopper_headers(self.user_id)
        with _lock:
            if "product_id" not in _hot_product:
                resp = self.client.post(
                    "/admin/products",
                    json=product_data(stock=HOT_PRODUCT_STOCK),
                    headers=admin_headers(),
                    name="POST /admin/products",
                )
                _hot_product["product_id"] = resp.json()["product_id"]

    @task
    def race_checkout(self):
        quantity = random.randint(1, 3)
        items = [{"product_id": _hot_product["product_id"], "quantity": quantity}]
        with self.client.post(
            "/orders",
            json=checkout_data(items=items),
            headers=self.headers,
            catch_response=True,
            name="POST /orders (hot product)",
        ) as resp:
            if resp.status_code == 201:
                with _lock:
                    _stats.placed += 1
                    _placed_units.append(quantity)
            elif is_insufficient_stock(resp):
                with _lock:
                    _stats.insufficient += 1
                resp.success()
            elif resp.status_code == 409:
                with _lock:
                    _stats.conflicts += 1
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")


@events.test_stop.add_listener
def report_contention(environment, **_kwargs):
    if "product_id" not in _hot_product:
        return
    sold = sum(_placed_units)
    print(f"\n[CONTENTION] placed={_stats.placed} insufficient={_stats.insufficient} conflicts={_stats.conflicts}")
    print(f"[CONTENTION] units sold={sold}, expected remaining stock={HOT_PRODUCT_STOCK - sold}")
