"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names expected by the storefront API's Pydantic
request schemas. Product ids come from the bundled catalog.
"""

import random

from faker import Faker

fake = Faker()

# Products in the bundled catalog that are declared with stock
STOCKED_PRODUCTS = ["lap-001", "kbd-001", "aud-001", "mon-001", "cam-001", "acc-001", "pcc-001"]


def random_product_id() -> str:
    return random.choice(STOCKED_PRODUCTS)


def user_key() -> str:
    """Session keys look like the storefront's own: a short opaque token."""
    return f"lt-{fake.uuid4()[:12]}"


def add_to_cart_data(product_id: str | None = None, quantity: int | None = None) -> dict:
    return {
        "product_id": product_id or random_product_id(),
        "quantity": quantity or random.randint(1, 2),
    }


def checkout_data() -> dict:
    return {
        "shipping_address": fake.street_address(),
        "shipping_city": fake.city(),
    }
