"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation rules
(PhoneNumber VO, positive quantities, decimal-string prices) and match the
field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def unique_user_id() -> str:
    """Generate unique shopper ids like 'lt-user-a1b2c3d4'."""
    return f"lt-user-{uuid.uuid4().hex[:8]}"


def shopper_headers(user_id: str) -> dict:
    return {"X-User-Id": user_id, "X-User-Role": "CUSTOMER"}


def admin_headers() -> dict:
    return {"X-User-Id": "lt-admin", "X-User-Role": "ADMIN"}


def valid_phone() -> str:
    """Generate phones matching the PhoneNumber VO pattern, e.g. '+20-100-1234567'."""
    return f"+20-{random.randint(100, 199)}-{random.randint(1000000, 9999999)}"


def product_data(stock: int | None = None) -> dict:
    """Generate a ProductRequest payload."""
    return {
        "name": f"{fake.color_name()} {fake.word().title()}"[:255],
        "description": fake.sentence(),
        "category": random.choice(["Apparel", "Accessories", "Home", "Toys"]),
        "price": f"{random.randint(5, 120)}.{random.randint(0, 99):02d}",
        "stock": stock if stock is not None else random.randint(20, 200),
    }


def checkout_data(items: list[dict] | None = None) -> dict:
    """Generate a CheckoutRequest payload. ``items=None`` checks out the server cart."""
    payload = {
        "shipping_address": fake.address().replace("\n", ", ")[:500],
        "phone_number": valid_phone(),
        "notes": random.choice([None, "Call before delivery", "Leave at the door"]),
    }
    if items is not None:
        payload["items"] = items
    return payload
