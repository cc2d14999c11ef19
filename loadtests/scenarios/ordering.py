"""Order intake load test scenarios.

A writer journey that submits orders and reads the order list back, and a
reader that only lists orders. Together they exercise the write lock held
across the order transaction against concurrent list requests.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import order_data
from loadtests.helpers.response import extract_error_detail


class SubmitOrderJourney(SequentialTaskSet):
    """Submit Order -> List Orders -> confirm the order is listed."""

    def on_start(self):
        self.order_uid = None

    @task
    def submit_order(self):
        payload = order_data()
        with self.client.post("/add_order", json=payload, catch_response=True, name="POST /add_order") as resp:
            if resp.status_code == 200:
                self.order_uid = resp.json()["order_uid"]
            else:
                resp.failure(f"Add order failed: {resp.status_code}: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_orders(self):
        with self.client.get("/get_orders", catch_response=True, name="GET /get_orders") as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code}: {extract_error_detail(resp)}")
            elif self.order_uid not in {order["order_uid"] for order in resp.json()}:
                resp.failure(f"Accepted order {self.order_uid} missing from list")

    @task
    def done(self):
        self.interrupt()


class OrderWriterUser(HttpUser):
    """Submits orders continuously."""

    wait_time = between(0.5, 2.0)
    weight = 3
    tasks = [SubmitOrderJourney]


class OrderReaderUser(HttpUser):
    """Polls the order list."""

    wait_time = between(0.2, 1.0)
    weight = 1

    @task
    def list_orders(self):
        with self.client.get("/get_orders", catch_response=True, name="GET /get_orders") as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {resp.status_code}: {extract_error_detail(resp)}")
