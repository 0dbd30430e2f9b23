"""Storefront load test scenarios.

Stateful SequentialTaskSet journeys over the cart and order endpoints. Stock
is finite, so 409 answers on add-to-cart or checkout are an expected outcome
under load, not a failure.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import add_to_cart_data, checkout_data, user_key
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ShopperState


class _ShopperJourney(SequentialTaskSet):
    def on_start(self):
        self.state = ShopperState(user_key=user_key())

    def _add_item(self, name):
        with self.client.post(
            "/cart/items",
            json=add_to_cart_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /cart/items",
        ) as resp:
            if resp.status_code == 201:
                self.state.item_ids.append(resp.json()["item_id"])
            elif resp.status_code == 409:
                resp.success()
            else:
                resp.failure(f"{name} failed: {resp.status_code} — {extract_error_detail(resp)}")

    def _checkout(self):
        if not self.state.item_ids:
            self.interrupt()
        with self.client.post(
            "/cart/checkout",
            json=checkout_data(),
            headers=self.state.headers,
            catch_response=True,
            name="POST /cart/checkout",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order_id"])
                self.state.item_ids.clear()
            elif resp.status_code == 409:
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()


class CartBrowsingJourney(_ShopperJourney):
    """Add items -> View cart -> Bump a quantity -> Remove a line -> Leave.

    Models a shopper who fills a cart and walks away without buying.
    """

    @task
    def add_item_1(self):
        self._add_item("Add cart item 1")

    @task
    def add_item_2(self):
        self._add_item("Add cart item 2")

    @task
    def view_cart(self):
        with self.client.get("/cart", headers=self.state.headers, catch_response=True, name="GET /cart") as resp:
            if resp.status_code != 200:
                resp.failure(f"View cart failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def update_quantity(self):
        if not self.state.item_ids:
            return
        with self.client.put(
            f"/cart/items/{self.state.item_ids[0]}",
            json={"new_quantity": random.randint(1, 3)},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /cart/items/{id}",
        ) as resp:
            if resp.status_code not in (200, 409):
                resp.failure(f"Update quantity failed: {resp.status_code} — {extract_error_detail(resp)}")
            else:
                resp.success()

    @task
    def remove_item(self):
        if not self.state.item_ids:
            return
        item_id = self.state.item_ids.pop()
        with self.client.delete(
            f"/cart/items/{item_id}",
            headers=self.state.headers,
            catch_response=True,
            name="DELETE /cart/items/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Remove item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutDeliveryJourney(_ShopperJourney):
    """Add items -> Checkout -> Confirm delivery.

    The happy path: stock is debited at checkout and stays debited.
    """

    @task
    def add_item(self):
        self._add_item("Add cart item")

    @task
    def checkout(self):
        self._checkout()

    @task
    def confirm_delivery(self):
        order_id = self.state.order_ids[-1]
        with self.client.put(
            f"/orders/{order_id}/deliver",
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/deliver",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Confirm delivery failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CheckoutCancellationJourney(_ShopperJourney):
    """Add items -> Checkout -> Cancel -> View history.

    Cancellation returns every unit to stock.
    """

    @task
    def add_item(self):
        self._add_item("Add cart item")

    @task
    def checkout(self):
        self._checkout()

    @task
    def cancel(self):
        order_id = self.state.order_ids[-1]
        with self.client.put(
            f"/orders/{order_id}/cancel",
            json={"reason": "Changed my mind"},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /orders/{id}/cancel",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Cancel order failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def view_history(self):
        with self.client.get(
            "/orders/history",
            headers=self.state.headers,
            catch_response=True,
            name="GET /orders/history",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Order history failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Weighted mix of browsing, buying and cancelling shoppers."""

    wait_time = between(0.5, 2.0)
    tasks = {
        CartBrowsingJourney: 5,
        CheckoutDeliveryJourney: 3,
        CheckoutCancellationJourney: 2,
    }


class InventoryWatcherUser(HttpUser):
    """Polls the inventory report the way an operator dashboard would."""

    wait_time = between(1.0, 3.0)
    weight = 1

    @task
    def inventory_report(self):
        self.client.get("/inventory", name="GET /inventory")
