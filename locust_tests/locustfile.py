"""
SwiftCargo Load Test — Locust Script
====================================
Simulates customers pricing and booking shipments while staff work the queue.

Usage:
    locust -f locust_tests/locustfile.py --host=http://localhost:8000 \
           --users=500 --spawn-rate=50 --run-time=5m --headless

Staff users log in with the accounts created by `manage.py seed_demo_data`.
"""

import random
import uuid
from locust import HttpUser, task, between, events
from locust.exception import StopUser

PASSWORD = "Parcel2026"
MODES    = ["land", "air", "ocean"]
CITIES   = ["Accra, Ghana", "Lagos, Nigeria", "Nairobi, Kenya", "Kigali, Rwanda", "Rotterdam, Netherlands"]


class Customer(HttpUser):
    """
    Typical customer session: register, price a parcel, book it, check on it.
    """
    wait_time = between(0.5, 2.0)
    token     = None
    email     = None

    def on_start(self):
        self.email = f"load-{uuid.uuid4().hex[:10]}@example.com"
        self._order_numbers = []
        self._register()
        self._login()

    def _register(self):
        self.client.post(
            "/api/auth/register/",
            json={
                "email":      self.email,
                "first_name": "Load",
                "last_name":  uuid.uuid4().hex[:6],
                "password":   PASSWORD,
            },
            name="/api/auth/register/",
        )

    def _login(self):
        resp = self.client.post(
            "/api/auth/login/",
            json={"email": self.email, "password": PASSWORD},
            name="/api/auth/login/",
        )
        if resp.status_code == 200:
            self.token = resp.json().get("access")
        else:
            raise StopUser()

    def _headers(self):
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def _parcel(self):
        return {
            "package_weight":  f"{random.uniform(0.1, 500):.2f}",
            "transport_mode":  random.choice(MODES),
            "urgent_delivery": random.random() < 0.2,
        }

    # ── Tasks (weighted) ──────────────────────────────────────────────────────

    @task(5)
    def estimate(self):
        """Most common action: live price while filling in the form."""
        self.client.post("/api/orders/estimate/", json=self._parcel(),
                         headers=self._headers(), name="/api/orders/estimate/")

    @task(2)
    def create_order(self):
        resp = self.client.post(
            "/api/orders/create/",
            json={
                **self._parcel(),
                "pickup_address":      f"{random.randint(1, 200)} Main Street\n{random.choice(CITIES)}",
                "delivery_address":    f"{random.randint(1, 200)} High Road\n{random.choice(CITIES)}",
                "package_description": "Load test parcel",
            },
            headers=self._headers(),
            name="/api/orders/create/",
        )
        if resp.status_code == 201:
            self._order_numbers.append(resp.json()["order_number"])

    @task(3)
    def list_orders(self):
        self.client.get("/api/orders/", headers=self._headers(), name="/api/orders/")

    @task(2)
    def tracking(self):
        if not self._order_numbers:
            return
        number = random.choice(self._order_numbers)
        self.client.get(f"/api/orders/{number}/tracking/", headers=self._headers(),
                        name="/api/orders/[number]/tracking/")
        self.client.get(f"/api/track/{number}/", name="/api/track/[identifier]/")

    @task(1)
    def health_check(self):
        self.client.get("/api/health/deep/", name="/api/health/deep/")


class Dispatcher(HttpUser):
    """
    Staff member moving orders through the pipeline (fewer, heavier queries).
    """
    wait_time = between(2, 5)
    token     = None
    weight    = 1

    def on_start(self):
        resp = self.client.post(
            "/api/auth/login/",
            json={"email": "employee@swiftcargo.test", "password": "Demo12345"},
        )
        if resp.status_code == 200:
            self.token = resp.json().get("access")
        else:
            raise StopUser()

    def _h(self):
        return {"Authorization": f"Bearer {self.token}"}

    @task(3)
    def dashboard(self):
        self.client.get("/api/ops/dashboard/", headers=self._h(), name="/api/ops/dashboard/")

    @task(2)
    def confirm_pending(self):
        resp = self.client.get("/api/orders/", params={"status": "pending"}, headers=self._h(),
                               name="/api/orders/?status=pending")
        if resp.status_code != 200 or not resp.json().get("results"):
            return
        number = resp.json()["results"][0]["order_number"]
        self.client.post(f"/api/orders/{number}/confirm/", json={}, headers=self._h(),
                         name="/api/orders/[number]/confirm/")

    @task(1)
    def metrics(self):
        self.client.get("/api/ops/metrics/", headers=self._h(), name="/api/ops/metrics/")


# ── Custom events for Locust reporting ────────────────────────────────────────
@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    print("\n=== SwiftCargo Load Test Complete ===")
    stats = environment.stats.total
    print(f"Total requests:      {stats.num_requests}")
    print(f"Failures:            {stats.num_failures}")
    print(f"Avg response time:   {stats.avg_response_time:.0f}ms")
    print(f"95th percentile:     {stats.get_response_time_percentile(0.95):.0f}ms")
    print(f"Requests/sec:        {stats.current_rps:.1f}")
    if stats.num_failures / max(stats.num_requests, 1) > 0.01:
        print("⚠ FAILURE RATE > 1%")
    else:
        print("✓ System stable under load")
