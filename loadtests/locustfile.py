"""Order Intake Load Testing: Locust entry point.

Usage:
    # All users (web UI):
    locust -f loadtests/locustfile.py --host http://127.0.0.1:8081

    # Writers only, headless (CI mode):
    locust -f loadtests/locustfile.py OrderWriterUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest --host http://127.0.0.1:8081
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.ordering import OrderReaderUser, OrderWriterUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Report how many orders the service holds when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if not environment.host:
        return
    try:
        resp = requests.get(f"{environment.host}/health", timeout=5)
        print(f"[LOADTEST] Orders held by service: {resp.json().get('orders')}")
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not fetch health: {e}")
    print()
