"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags approval     # Owner decisions racing on one booking
  locust -f locustfile.py --tags throughput   # Cached search + listings
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests
"""

import random
import string
from locust import HttpUser, task, between, tag, events
from datetime import datetime, timezone, timedelta

STATES = ["ALL", "CURRENT", "PAST", "FUTURE", "WAITING", "REJECTED"]
SEARCH_WORDS = ["drill", "ladder", "tent", "bike", "saw"]

# Shared state
ITEM_IDS = []
RACE = {"owner_id": None, "booking_id": None}


def random_email():
    return f"load_{random.randint(10000, 99999)}_{random.randint(0, 999)}@test.com"


def random_name():
    return "u_" + "".join(random.choices(string.ascii_lowercase, k=8))


def window(days_ahead: int = 1, length_days: int = 2) -> dict:
    start = datetime.now(timezone.utc) + timedelta(days=days_ahead)
    return {"start": start.isoformat(), "end": (start + timedelta(days=length_days)).isoformat()}


def as_user(user_id) -> dict:
    return {"X-Sharer-User-Id": str(user_id)}


def register(client) -> int | None:
    resp = client.post("/api/v1/users/", json={"name": random_name(), "email": random_email()})
    if resp.status_code == 201:
        return resp.json()["id"]
    return None


def list_item(client, owner_id) -> int | None:
    resp = client.post(
        "/api/v1/items/",
        json={
            "name": f"{random.choice(SEARCH_WORDS).title()} {random.randint(1, 10000)}",
            "description": "Load test item",
            "available": True,
        },
        headers=as_user(owner_id),
    )
    if resp.status_code == 201:
        ITEM_IDS.append(resp.json()["id"])
        return resp.json()["id"]
    return None


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: users and items are created by the simulated users")
    print("=" * 60)


class ApprovalRaceUser(HttpUser):
    """
    TEST 1: Owner decisions racing on a single booking

    Run: locust -f locustfile.py --tags approval -u 50 -r 50 --run-time 30s

    Every simulated user approves the same booking on behalf of its owner.
    Concurrent approvals are not serialized, so several early requests may
    all get 200; once one has committed the rest get 400 (already approved).
    Anything other than 200 or 400 is a failure.
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        if RACE["booking_id"]:
            return
        owner_id = register(self.client)
        booker_id = register(self.client)
        if not owner_id or not booker_id:
            return
        item_id = list_item(self.client, owner_id)
        if not item_id:
            return
        resp = self.client.post(
            "/api/v1/bookings/", json={"item_id": item_id, **window()}, headers=as_user(booker_id)
        )
        if resp.status_code == 201:
            RACE.update(owner_id=owner_id, booking_id=resp.json()["id"])
            print(f"\n✓ Created booking {RACE['booking_id']} for the approval race\n")

    @tag("approval")
    @task
    def approve_same_booking(self):
        if not RACE["booking_id"]:
            return

        with self.client.patch(
            f"/api/v1/bookings/{RACE['booking_id']}?approved=true",
            headers=as_user(RACE["owner_id"]),
            name="/api/v1/bookings/{id}?approved",
            catch_response=True,
        ) as resp:
            if resp.status_code in (200, 400):
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - search cache effectiveness

    Run twice:
      1. With Redis: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. Without Redis: REDIS_ENABLED=false, run again

    Compare avg response time, requests/sec and P95/P99 latency.
    """
    wait_time = between(0.1, 0.5)

    def on_start(self):
        self.user_id = register(self.client)

    @tag("throughput", "read")
    @task(10)
    def search_items_cached(self):
        self.client.get(
            f"/api/v1/items/search?text={random.choice(SEARCH_WORDS)}&from=0&size=20",
            name="/api/v1/items/search [cached]",
        )

    @tag("throughput", "read")
    @task(3)
    def list_bookings(self):
        if self.user_id:
            self.client.get(
                f"/api/v1/bookings/?state={random.choice(STATES)}",
                headers=as_user(self.user_id),
                name="/api/v1/bookings/?state",
            )

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    The service should never answer 5xx here.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.user_id = register(self.client)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def unknown_item(self):
        with self.client.post(
            "/api/v1/bookings/",
            json={"item_id": 999999, **window()},
            headers=as_user(self.user_id),
            catch_response=True,
        ) as resp:
            self._expect(resp, (404,))

    @tag("edge")
    @task
    def end_before_start(self):
        item_id = random.choice(ITEM_IDS) if ITEM_IDS else 1
        with self.client.post(
            "/api/v1/bookings/",
            json={"item_id": item_id, **window(days_ahead=3, length_days=-1)},
            headers=as_user(self.user_id),
            catch_response=True,
        ) as resp:
            self._expect(resp, (400, 404))

    @tag("edge")
    @task
    def unknown_state(self):
        with self.client.get(
            "/api/v1/bookings/?state=SOMETIMES",
            headers=as_user(self.user_id),
            catch_response=True,
        ) as resp:
            self._expect(resp, (400,))

    @tag("edge")
    @task
    def negative_offset(self):
        with self.client.get(
            "/api/v1/bookings/?from=-1&size=0",
            headers=as_user(self.user_id),
            catch_response=True,
        ) as resp:
            self._expect(resp, (400, 422))

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post(
            "/api/v1/bookings/",
            data="not json at all",
            headers=as_user(self.user_id),
            catch_response=True,
        ) as resp:
            self._expect(resp, (400, 422))

    @tag("edge")
    @task
    def missing_identity(self):
        with self.client.post(
            "/api/v1/bookings/", json={"item_id": 1, **window()}, catch_response=True
        ) as resp:
            self._expect(resp, (422,))


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly searching and checking own bookings, some booking requests,
    owners deciding on what arrives, rare new listings.
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.user_id = register(self.client)
        if self.user_id and random.random() < 0.3:
            list_item(self.client, self.user_id)

    @task(40)
    def search(self):
        self.client.get(
            f"/api/v1/items/search?text={random.choice(SEARCH_WORDS)}",
            name="/api/v1/items/search",
        )

    @task(20)
    def my_bookings(self):
        if self.user_id:
            self.client.get(
                f"/api/v1/bookings/?state={random.choice(STATES)}",
                headers=as_user(self.user_id),
                name="/api/v1/bookings/?state",
            )

    @task(10)
    def request_booking(self):
        if ITEM_IDS and self.user_id:
            self.client.post(
                "/api/v1/bookings/",
                json={"item_id": random.choice(ITEM_IDS), **window(random.randint(1, 30))},
                headers=as_user(self.user_id),
            )

    @task(5)
    def decide_waiting(self):
        if not self.user_id:
            return
        resp = self.client.get(
            "/api/v1/bookings/owner?state=WAITING",
            headers=as_user(self.user_id),
            name="/api/v1/bookings/owner?state=WAITING",
        )
        if resp.status_code == 200 and resp.json():
            booking_id = resp.json()[0]["id"]
            self.client.patch(
                f"/api/v1/bookings/{booking_id}?approved={random.choice(['true', 'false'])}",
                headers=as_user(self.user_id),
                name="/api/v1/bookings/{id}?approved",
            )

    @task(2)
    def new_listing(self):
        if self.user_id:
            list_item(self.client, self.user_id)
